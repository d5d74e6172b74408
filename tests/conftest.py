import mongomock
import pytest

from homeclean import create_app
from homeclean.db import Database


@pytest.fixture
def db():
    return Database(mongomock.MongoClient(), "homeclean_test")


@pytest.fixture
def app(db):
    app = create_app(
        "test",
        database=db,
        overrides={
            "TESTING": True,
            "DRY_RUN": True,
            "ADMIN_EMAIL": "admin@example.com",
            "EMAIL_API_KEY": None,
        },
    )
    yield app
    # let detached notification jobs finish before the next test
    app.config["NOTIFIER"].join()


@pytest.fixture
def client(app):
    return app.test_client()
