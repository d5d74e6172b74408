from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional, TypedDict


BOOKING_STATUSES = ("pending", "confirmed", "cancelled")
QUOTE_STATUSES = ("pending", "reviewed", "contacted")
INITIAL_STATUS = "pending"


class Booking(TypedDict, total=False):
    id: str
    name: str
    email: str
    phone: str
    date: str
    time: str
    whatsapp: bool
    service: str
    location: str
    paymentMethod: str
    createdAt: str
    status: str


class Quote(TypedDict, total=False):
    id: str
    name: str
    email: str
    phone: str
    address: str
    serviceArea: str
    serviceType: str
    propertyType: str
    squareFootage: str
    adults: str
    kids: str
    pets: str
    serviceLevel: str
    kitchens: str
    fullBathrooms: str
    halfBathrooms: str
    walkInShowers: str
    largeOvalTubs: str
    doubleSinks: str
    basement: str
    dusting: str
    comments: str
    createdAt: str
    status: str


class EmailLogEntry(TypedDict, total=False):
    id: str
    to: str
    subject: str
    html: str
    createdAt: str
    sent: bool
    error: Optional[str]


def iso_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def to_entity(doc: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """
    Stored document -> public entity: "_id" becomes the string "id",
    every other field passes through untouched.
    """
    if doc is None:
        return None
    entity: Dict[str, Any] = {"id": str(doc["_id"])}
    for k, v in doc.items():
        if k == "_id":
            continue
        entity[k] = v
    return entity
