"""
Shortcuts for importing the factories in tests.

Usage:
    from tests.factories import make_booking_payload
    payload = make_booking_payload(name="Jane")
"""

from .payload_factory import *  # noqa: F401,F403

__all__ = [
    "make_booking_payload",
    "make_quote_payload",
    "unreachable_database",
]
