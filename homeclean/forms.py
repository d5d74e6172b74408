# homeclean/forms.py
"""
Presence checks and defaults for the booking/quote form payloads.

No business validation here beyond "required field is present": enum-like
values (serviceArea, serviceLevel, paymentMethod...) are stored as sent.
"""

from __future__ import annotations

from typing import Any, Dict, List, Sequence

from homeclean.errors import ValidationError

BOOKING_REQUIRED = ("name", "email", "date", "time")
BOOKING_OPTIONAL = ("phone", "service", "location", "paymentMethod")

QUOTE_REQUIRED = ("email", "serviceArea", "adults", "serviceLevel", "squareFootage")
QUOTE_OPTIONAL = (
    "name", "phone", "address",
    "serviceType", "propertyType",
    "kids", "pets",
    "kitchens", "fullBathrooms", "halfBathrooms",
    "walkInShowers", "largeOvalTubs", "doubleSinks",
    "basement", "dusting", "comments",
)


def missing_fields(data: Dict[str, Any], required: Sequence[str]) -> List[str]:
    # empty strings, None, 0 and False all count as absent
    return [f for f in required if not data.get(f)]


def require(data: Dict[str, Any], required: Sequence[str]) -> None:
    if missing_fields(data, required):
        raise ValidationError(f"Missing required fields: {', '.join(required)}")


def _optional(value: Any) -> Any:
    return "" if value is None else value


def booking_input(data: Dict[str, Any]) -> Dict[str, Any]:
    """Validated, defaulted booking payload ready for BookingRepository.create."""
    require(data, BOOKING_REQUIRED)
    out = {f: data[f] for f in BOOKING_REQUIRED}
    for f in BOOKING_OPTIONAL:
        out[f] = _optional(data.get(f))
    out["whatsapp"] = bool(data.get("whatsapp", False))
    return out


def quote_input(data: Dict[str, Any]) -> Dict[str, Any]:
    """Validated, defaulted quote payload ready for QuoteRepository.create."""
    require(data, QUOTE_REQUIRED)
    out = {f: data[f] for f in QUOTE_REQUIRED}
    for f in QUOTE_OPTIONAL:
        out[f] = _optional(data.get(f))
    return out
