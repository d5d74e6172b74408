"""
Unit tests for homeclean.db.Database.
"""

import mongomock
import pytest

from homeclean.db import Database
from homeclean.errors import StoreConnectionError, StoreError
from tests.factories import unreachable_database


def test_get_database_is_lazy_and_reused():
    client = mongomock.MongoClient()
    calls = []
    real_command = client.admin.command

    class _Admin:
        def command(self, *args, **kwargs):
            calls.append(args)
            return real_command(*args, **kwargs)

    class _Client:
        admin = _Admin()

        def __getitem__(self, name):
            return client[name]

    db = Database(_Client(), "lazy")
    assert calls == []

    first = db.get_database()
    second = db.get_database()
    assert first is second
    assert first.name == "lazy"
    assert len(calls) == 1


def test_ensure_indexes_is_idempotent(db):
    db.ensure_indexes()
    db.ensure_indexes()
    for coll in ("bookings", "quotes", "email_logs"):
        info = db.collection(coll).index_information()
        assert "createdAt_desc" in info
        assert info["createdAt_desc"]["key"] == [("createdAt", -1)]


def test_unreachable_store_raises_connection_error():
    db = unreachable_database()
    with pytest.raises(StoreConnectionError) as exc:
        db.get_database()
    # also usable as a plain ConnectionError / StoreError
    assert isinstance(exc.value, ConnectionError)
    assert isinstance(exc.value, StoreError)

    with pytest.raises(ConnectionError):
        db.ensure_indexes()


def test_ping(db):
    assert db.ping() is True
    assert unreachable_database().ping() is False
