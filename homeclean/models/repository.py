from __future__ import annotations

import functools
from typing import Any, Dict, List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ReturnDocument
from pymongo.errors import ConnectionFailure, PyMongoError

from homeclean.db import BOOKINGS, EMAIL_LOGS, QUOTES, Database
from homeclean.errors import StoreConnectionError, StoreError, ValidationError
from homeclean.logging import get_logger
from homeclean.models.entities import (
    BOOKING_STATUSES,
    INITIAL_STATUS,
    QUOTE_STATUSES,
    iso_now,
    to_entity,
)

logger = get_logger(__name__)


def _store_call(op: str):
    """Wraps driver errors raised inside a repository method into StoreError."""
    def decorator(fn):
        @functools.wraps(fn)
        def wrapper(self, *args, **kwargs):
            try:
                return fn(self, *args, **kwargs)
            except ConnectionFailure as e:
                logger.error("store.unreachable", extra={"collection": self.collection_name, "op": op, "error": str(e)})
                raise StoreConnectionError("database unreachable") from e
            except PyMongoError as e:
                logger.error("store.error", extra={"collection": self.collection_name, "op": op, "error": str(e)})
                raise StoreError(f"{op} failed") from e
        return wrapper
    return decorator


def _object_id(id: str) -> Optional[ObjectId]:
    # malformed ids are "not found", never a distinct error
    try:
        return ObjectId(str(id))
    except (InvalidId, TypeError):
        return None


# ---------- bookings / quotes ----------

class EntityRepository:
    collection_name: str = ""
    statuses: tuple = ()

    def __init__(self, db: Database):
        self.db = db

    @property
    def collection(self):
        return self.db.collection(self.collection_name)

    @_store_call("create")
    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        doc = {
            **data,
            "_id": ObjectId(),
            "createdAt": iso_now(),
            "status": INITIAL_STATUS,
        }
        self.collection.insert_one(doc)
        logger.info(f"{self.collection_name}.created", extra={"id": str(doc["_id"])})
        return to_entity(doc)

    @_store_call("list")
    def list(self) -> List[Dict[str, Any]]:
        cursor = self.collection.find({}).sort([("createdAt", -1), ("_id", -1)])
        return [to_entity(doc) for doc in cursor]

    @_store_call("get")
    def get_by_id(self, id: str) -> Optional[Dict[str, Any]]:
        oid = _object_id(id)
        if oid is None:
            return None
        return to_entity(self.collection.find_one({"_id": oid}))

    @_store_call("update_status")
    def update_status(self, id: str, status: str) -> Optional[Dict[str, Any]]:
        """
        Single atomic $set on status; no check against the previous value
        (last writer wins). Returns the updated entity or None.
        """
        if status not in self.statuses:
            raise ValidationError("Invalid status")
        oid = _object_id(id)
        if oid is None:
            return None
        doc = self.collection.find_one_and_update(
            {"_id": oid},
            {"$set": {"status": status}},
            return_document=ReturnDocument.AFTER,
        )
        if doc is not None:
            logger.info(f"{self.collection_name}.status_updated", extra={"id": id, "status": status})
        return to_entity(doc)

    @_store_call("delete")
    def delete(self, id: str) -> bool:
        oid = _object_id(id)
        if oid is None:
            return False
        result = self.collection.delete_one({"_id": oid})
        removed = result.deleted_count > 0
        if removed:
            logger.info(f"{self.collection_name}.deleted", extra={"id": id})
        return removed


class BookingRepository(EntityRepository):
    collection_name = BOOKINGS
    statuses = BOOKING_STATUSES

    @_store_call("delete_all")
    def delete_all(self) -> int:
        result = self.collection.delete_many({})
        logger.warning("bookings.cleared", extra={"deleted": result.deleted_count})
        return result.deleted_count


class QuoteRepository(EntityRepository):
    collection_name = QUOTES
    statuses = QUOTE_STATUSES


# ---------- email log (write-only audit trail) ----------

class EmailLogRepository:
    collection_name = EMAIL_LOGS

    def __init__(self, db: Database):
        self.db = db

    @property
    def collection(self):
        return self.db.collection(self.collection_name)

    @_store_call("create")
    def create(self, *, to: str, subject: str, html: str, sent: bool, error: Optional[str] = None) -> Dict[str, Any]:
        doc = {
            "_id": ObjectId(),
            "to": to,
            "subject": subject,
            "html": html,
            "sent": bool(sent),
            "error": error,
            "createdAt": iso_now(),
        }
        self.collection.insert_one(doc)
        return to_entity(doc)

    @_store_call("list")
    def list(self) -> List[Dict[str, Any]]:
        cursor = self.collection.find({}).sort([("createdAt", -1), ("_id", -1)])
        return [to_entity(doc) for doc in cursor]

    @_store_call("clear")
    def clear(self) -> int:
        return self.collection.delete_many({}).deleted_count
