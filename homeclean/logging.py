# homeclean/logging.py
"""
Small structured logger for the project.

- One compact JSON object per line.
- Anything passed via extra={...} becomes a top-level key.
- On exceptions, only a short "exc_short" pointing at the relevant
  frame (file, line, function) plus the error message is emitted;
  the full traceback is left out by default.
"""

from __future__ import annotations

import json
import logging
import os
import traceback
from datetime import datetime, timezone
from typing import Any, Dict


def _now_iso() -> str:
    return (
        datetime.now(timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )


# LogRecord attributes that must not be copied into the JSON
_RESERVED_KEYS = {
    "name", "msg", "args", "levelname", "levelno", "pathname", "filename", "module",
    "exc_info", "exc_text", "stack_info", "lineno", "funcName", "created", "msecs",
    "relativeCreated", "thread", "threadName", "processName", "process", "message",
    "taskName",
}


def mask_email(email: str | None) -> str | None:
    """
    Keeps the first character of the local part and the domain:
    "jane.doe@example.com" -> "j*******@example.com".
    """
    if not email:
        return email
    s = str(email)
    local, sep, domain = s.partition("@")
    if not sep:
        return "*" * max(0, len(s) - 2) + s[-2:]
    if len(local) <= 1:
        return f"*@{domain}"
    return f"{local[0]}{'*' * (len(local) - 1)}@{domain}"


class JsonFormatter(logging.Formatter):
    """
    Produces lean JSON:
    - ts, level, msg, logger
    - any extras (except reserved keys)
    - exc_short when exc_info is present
    """

    def _relevant_frame(self, tb) -> traceback.FrameSummary | None:
        frames = traceback.extract_tb(tb)
        if not frames:
            return None
        cwd = os.getcwd()
        # prefer project frames over site-packages / stdlib
        for fr in reversed(frames):
            fname = fr.filename or ""
            if fname.startswith(cwd) and "site-packages" not in fname and "/lib/python" not in fname:
                return fr
        for fr in reversed(frames):
            fname = fr.filename or ""
            if "site-packages" not in fname and "/lib/python" not in fname:
                return fr
        return frames[-1]

    def _exc_short(self, exc_type, exc_value, tb) -> str | None:
        fr = self._relevant_frame(tb)
        type_name = getattr(exc_type, "__name__", str(exc_type))
        if fr is None:
            return f"{type_name}: {exc_value}"
        short = f'File "{fr.filename}", line {fr.lineno}, in {fr.name}\n'
        if fr.line:
            short += f"    {fr.line}\n"
        return short + f"{type_name}: {exc_value}"

    def format(self, record: logging.LogRecord) -> str:
        base: Dict[str, Any] = {
            "ts": _now_iso(),
            "level": record.levelname,
            "msg": record.getMessage(),
            "logger": record.name,
        }

        for k, v in record.__dict__.items():
            if k in _RESERVED_KEYS or k.startswith("_"):
                continue
            base[k] = v

        if record.exc_info:
            try:
                short = self._exc_short(*record.exc_info)
                if short:
                    base["exc_short"] = short
            except Exception:
                # the formatter must never break logging
                base["exc_in_formatter_error"] = True

        return json.dumps(base, ensure_ascii=False, default=str)


def configure_logging(level: str = "INFO") -> None:
    """
    Points the root logger at JsonFormatter.
    Call once during app startup.
    """
    root = logging.getLogger()
    root.setLevel(level.upper())

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())

    root.handlers.clear()
    root.addHandler(handler)

    logging.getLogger(__name__).info("logging configured: JsonFormatter active")


def get_logger(name: str | None = None) -> logging.Logger:
    return logging.getLogger(name or "homeclean")
