# homeclean/errors.py
"""
Error taxonomy shared by repositories, handlers and the mailer.

Handlers turn these into {"error": "..."} JSON responses using status_code.
NotificationError never reaches a client.
"""

from __future__ import annotations


class HomecleanError(Exception):
    status_code = 500

    def __init__(self, message: str = "", *, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(HomecleanError):
    """Missing or invalid required field."""
    status_code = 400


class NotFoundError(HomecleanError):
    status_code = 404


class StoreError(HomecleanError):
    """Document store write/read failure."""
    status_code = 500


class StoreConnectionError(StoreError, ConnectionError):
    """Store unreachable."""


class NotificationError(HomecleanError):
    """Email could not be delivered. Logged, never surfaced."""
    status_code = 502
