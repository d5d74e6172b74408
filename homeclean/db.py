# homeclean/db.py
"""
Access to the MongoDB document store.

The client is built once (create_app) and handed to the repositories;
nothing reaches for a global connection. The database handle is verified
lazily on first use and reused afterwards.
"""

from __future__ import annotations

import threading
from typing import Any

from pymongo import DESCENDING, MongoClient
from pymongo.database import Database as MongoDatabase
from pymongo.errors import ConnectionFailure, PyMongoError

from homeclean.errors import StoreConnectionError, StoreError
from homeclean.logging import get_logger

logger = get_logger(__name__)

BOOKINGS = "bookings"
QUOTES = "quotes"
EMAIL_LOGS = "email_logs"

# collection -> list of (keys, index name)
INDEXES = {
    BOOKINGS: [([("createdAt", DESCENDING)], "createdAt_desc")],
    QUOTES: [([("createdAt", DESCENDING)], "createdAt_desc")],
    EMAIL_LOGS: [([("createdAt", DESCENDING)], "createdAt_desc")],
}


class Database:
    def __init__(self, client: Any, name: str):
        self.client = client
        self.name = name
        self._db: MongoDatabase | None = None
        self._indexes_ready = False
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, cfg) -> "Database":
        # MongoClient connects in the background; nothing blocks here
        client = MongoClient(
            cfg.get("MONGODB_URI", "mongodb://localhost:27017"),
            serverSelectionTimeoutMS=int(cfg.get("MONGODB_TIMEOUT_MS", 5000)),
            tz_aware=True,
        )
        return cls(client, cfg.get("MONGODB_DB", "homeclean"))

    def get_database(self) -> MongoDatabase:
        """
        Returns the database handle, pinging the server on first use.
        Raises StoreConnectionError when the server is unreachable.
        """
        if self._db is not None:
            return self._db
        with self._lock:
            if self._db is None:
                try:
                    self.client.admin.command("ping")
                except ConnectionFailure as e:
                    logger.error("db.unreachable", extra={"db": self.name, "error": str(e)})
                    raise StoreConnectionError("database unreachable") from e
                except PyMongoError as e:
                    logger.error("db.error", extra={"db": self.name, "error": str(e)})
                    raise StoreError("database error") from e
                self._db = self.client[self.name]
                logger.info("db.ready", extra={"db": self.name})
        return self._db

    def collection(self, name: str):
        return self.get_database()[name]

    def ensure_indexes(self) -> None:
        """
        Declares the createdAt indexes. create_index is a no-op for an
        existing identical index, so this is safe on every request.
        """
        if self._indexes_ready:
            return
        db = self.get_database()
        try:
            for coll, specs in INDEXES.items():
                for keys, index_name in specs:
                    db[coll].create_index(keys, name=index_name)
        except ConnectionFailure as e:
            logger.error("db.indexes_unreachable", extra={"error": str(e)})
            raise StoreConnectionError("database unreachable") from e
        except PyMongoError as e:
            logger.error("db.indexes_error", extra={"error": str(e)})
            raise StoreError("failed to create indexes") from e
        self._indexes_ready = True
        logger.debug("db.indexes_ready", extra={"collections": list(INDEXES)})

    def ping(self) -> bool:
        try:
            self.client.admin.command("ping")
            return True
        except PyMongoError:
            return False
