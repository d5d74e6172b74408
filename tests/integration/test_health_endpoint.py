# tests/integration/test_health_endpoint.py

from homeclean import create_app
from tests.factories import unreachable_database


def test_health_ok(client, app):
    resp = client.get("/health")
    assert resp.status_code == 200

    data = resp.get_json()
    assert data["ok"] is True
    assert data["env"] == app.config["CONFIG_NAME"]
    assert data["dry_run"] is True
    assert data["database"] == "up"


def test_health_reports_database_down():
    app = create_app("test", database=unreachable_database(), overrides={"TESTING": True})
    data = app.test_client().get("/health").get_json()
    assert data["ok"] is True
    assert data["database"] == "down"


def test_unknown_route_answers_json(client):
    resp = client.get("/nope")
    assert resp.status_code == 404
    assert "error" in resp.get_json()


def test_wrong_method_answers_json(client):
    resp = client.put("/bookings")
    assert resp.status_code == 405
    assert "error" in resp.get_json()
