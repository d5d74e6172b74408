# run.py
"""
Development entry point.

- Builds the app through the factory (create_app)
- Reads configuration only from app.config
- Emits one JSON startup line with the useful bits
- Starts Flask's built-in server (production: gunicorn -c gunicorn_config.py)
"""

from __future__ import annotations

import os
import sys

from homeclean import create_app
from homeclean.logging import get_logger, mask_email

CONFIG_NAME = os.environ.get("CONFIG_NAME", "dev")

app = create_app(CONFIG_NAME)

if __name__ == "__main__":
    cfg = app.config
    log = get_logger("homeclean.run")
    port = int(cfg.get("PORT", 3000))

    log.info(
        "server.start",
        extra={
            "env": CONFIG_NAME,
            "port": port,
            "python": sys.version.split()[0],
            "mongodb_db": cfg.get("MONGODB_DB"),
            "admin_email": mask_email(cfg.get("ADMIN_EMAIL")),
            "email_api_key_set": bool(cfg.get("EMAIL_API_KEY")),
            "dry_run": bool(cfg.get("DRY_RUN", False)),
        },
    )

    if not cfg.get("ADMIN_EMAIL") or not cfg.get("EMAIL_API_KEY"):
        log.warning(
            "config.incomplete",
            extra={"hint": "Set ADMIN_EMAIL and EMAIL_API_KEY in the environment .env file to send notifications."},
        )

    app.run(host="0.0.0.0", port=port)
