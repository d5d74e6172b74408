# homeclean/settings.py
"""
Loads and organizes every setting the app needs.

- Reads environment variables (.env.<env>) with dotenv
- Builds a flat dict with all relevant keys
- Applies defaults where needed
- Only place that calls load_dotenv

Usage:
    from homeclean.settings import load_settings
    settings = load_settings("dev")
"""

from __future__ import annotations

import os
from pathlib import Path
from dotenv import load_dotenv


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


# -----------------------------------------------------------
# Main entry
# -----------------------------------------------------------
def load_settings(env_name: str | None = None) -> dict:
    """
    Loads the environment for the Flask app.
    Returns a dict ready for app.config.update().
    """
    config_name = env_name or os.getenv("CONFIG_NAME", "dev")
    env_file = Path(f".env.{config_name}")

    if env_file.exists():
        load_dotenv(env_file.as_posix(), override=True)
    else:
        generic_env = Path(".env")
        if generic_env.exists():
            load_dotenv(generic_env.as_posix(), override=False)

    dry_run_flag = os.getenv("DRY_RUN", "0").strip() == "1"

    settings = {
        # Identification
        "CONFIG_NAME": config_name,

        # Server
        "PORT": _int_env("PORT", 3000),
        "LOG_LEVEL": (os.getenv("LOG_LEVEL", "DEBUG" if dry_run_flag else "INFO")).upper(),

        # Execution mode (emails are logged instead of sent)
        "DRY_RUN": dry_run_flag,

        # MongoDB
        "MONGODB_URI": os.getenv("MONGODB_URI", "mongodb://localhost:27017"),
        "MONGODB_DB": os.getenv("MONGODB_DB", "homeclean"),
        "MONGODB_TIMEOUT_MS": _int_env("MONGODB_TIMEOUT_MS", 5000),

        # Transactional email API
        "EMAIL_API_URL": os.getenv("EMAIL_API_URL", "https://api.resend.com/emails"),
        "EMAIL_API_KEY": os.getenv("EMAIL_API_KEY"),
        "EMAIL_FROM": os.getenv("EMAIL_FROM", "Bookings <bookings@example.com>"),
        "ADMIN_EMAIL": os.getenv("ADMIN_EMAIL"),
        "HTTP_TIMEOUT": _int_env("HTTP_TIMEOUT", 15),

        # Notification queue
        "NOTIFY_QUEUE_SIZE": _int_env("NOTIFY_QUEUE_SIZE", 100),
    }

    return settings
