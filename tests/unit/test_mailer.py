"""
Unit tests for homeclean.mail.Mailer with a fake HTTP client.
"""

import pytest
import requests

from homeclean.errors import NotificationError
from homeclean.mail import Mailer, render_table
from homeclean.models import EmailLogRepository


class FakeHttp:
    def __init__(self, result=None, exc=None):
        self.result = result if result is not None else {"id": "email_123"}
        self.exc = exc
        self.calls = []

    def post_json(self, path, payload, **kwargs):
        self.calls.append((path, payload, kwargs))
        if self.exc:
            raise self.exc
        return self.result


def _mailer(db, http, **kw):
    opts = dict(
        api_url="https://mail.test/emails",
        api_key="key-123",
        sender="Bookings <bookings@example.com>",
        admin_email="admin@example.com",
        dry_run=False,
    )
    opts.update(kw)
    return Mailer(http, EmailLogRepository(db), **opts)


def test_send_posts_payload_and_records_success(db):
    http = FakeHttp()
    mailer = _mailer(db, http)

    result = mailer.send("client@example.com", "Hello", "<p>hi</p>")

    assert result == {"id": "email_123"}
    path, payload, kwargs = http.calls[0]
    assert path == "https://mail.test/emails"
    assert payload == {
        "from": "Bookings <bookings@example.com>",
        "to": ["client@example.com"],
        "subject": "Hello",
        "html": "<p>hi</p>",
    }
    assert kwargs["headers"]["Authorization"] == "Bearer key-123"

    entry = EmailLogRepository(db).list()[0]
    assert entry["sent"] is True
    assert entry["error"] is None
    assert entry["to"] == "client@example.com"


def test_send_failure_records_and_raises(db):
    http = FakeHttp(exc=requests.HTTPError("422 Client Error"))
    mailer = _mailer(db, http)

    with pytest.raises(NotificationError):
        mailer.send("client@example.com", "Hello", "<p>hi</p>")

    entry = EmailLogRepository(db).list()[0]
    assert entry["sent"] is False
    assert "422" in entry["error"]


@pytest.mark.parametrize("kw", [{"dry_run": True}, {"api_key": None}])
def test_dry_run_logs_without_sending(db, kw):
    http = FakeHttp()
    mailer = _mailer(db, http, **kw)

    assert mailer.send("client@example.com", "Hello", "<p>hi</p>") == {"dry_run": True}
    assert http.calls == []
    entry = EmailLogRepository(db).list()[0]
    assert entry["sent"] is False
    assert entry["error"] == "dry_run"


def test_admin_booking_email(db):
    http = FakeHttp()
    mailer = _mailer(db, http)
    booking = {
        "id": "abc",
        "name": "Jane <script>",
        "email": "jane@example.com",
        "date": "2026-11-02",
        "time": "10:30",
        "whatsapp": True,
        "service": "Deep Cleaning",
        "location": "",
    }

    mailer.send_admin_new_booking(booking)

    _, payload, _ = http.calls[0]
    assert payload["to"] == ["admin@example.com"]
    assert "2026-11-02" in payload["subject"]
    assert "&lt;script&gt;" in payload["html"]
    assert "<script>" not in payload["html"]
    assert "WhatsApp" in payload["html"]


def test_admin_quote_email(db):
    http = FakeHttp()
    mailer = _mailer(db, http)

    mailer.send_admin_new_quote({"email": "a@b.com", "serviceArea": "ottawa"})

    _, payload, _ = http.calls[0]
    assert payload["subject"] == "New quote request from a@b.com"
    assert "ottawa" in payload["html"]


def test_admin_email_missing_raises(db):
    mailer = _mailer(db, FakeHttp(), admin_email=None)
    with pytest.raises(NotificationError):
        mailer.send_admin_new_booking({"name": "x"})
    assert EmailLogRepository(db).list() == []


def test_render_table_blank_values():
    html = render_table("T", (("Phone", "phone"),), {"phone": ""})
    assert "<td>-</td>" in html
