"""
Unit tests for homeclean.http.HttpClient (session.request is faked).
"""

import pytest
import requests

from homeclean.http import HttpClient


class FakeResponse:
    def __init__(self, status_code=200, body=None, text=None):
        self.status_code = status_code
        self._body = body
        self.text = text if text is not None else ("" if body is None else str(body))

    def json(self):
        if self._body is None:
            raise ValueError("no json")
        return self._body

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")


def _client(monkeypatch, response=None, exc=None, **kw):
    client = HttpClient(**kw)
    calls = []

    def fake_request(method, url, **kwargs):
        calls.append((method, url, kwargs))
        if exc:
            raise exc
        return response

    monkeypatch.setattr(client.session, "request", fake_request)
    return client, calls


def test_post_json_builds_url_and_headers(monkeypatch):
    client, calls = _client(monkeypatch, FakeResponse(200, {"id": "x1"}), base_url="https://api.test/", timeout=7)

    result = client.post_json("/emails", {"a": 1}, headers={"Authorization": "Bearer k"})

    assert result == {"id": "x1"}
    method, url, kwargs = calls[0]
    assert method == "POST"
    assert url == "https://api.test/emails"
    assert kwargs["json"] == {"a": 1}
    assert kwargs["timeout"] == 7
    assert kwargs["headers"] == {"Authorization": "Bearer k", "Accept": "application/json"}


def test_absolute_url_and_timeout_override(monkeypatch):
    client, calls = _client(monkeypatch, FakeResponse(200, text="ok"), base_url="https://api.test")

    assert client.post_json("https://other.test/x", {}, timeout=2) == {}
    _, url, kwargs = calls[0]
    assert url == "https://other.test/x"
    assert kwargs["timeout"] == 2


def test_post_json_raises_on_error_status(monkeypatch):
    client, _ = _client(monkeypatch, FakeResponse(422, {"message": "invalid"}))
    with pytest.raises(requests.HTTPError):
        client.post_json("https://api.test/emails", {})


def test_network_error_propagates_once(monkeypatch):
    client, calls = _client(monkeypatch, exc=requests.ConnectionError("refused"))
    with pytest.raises(requests.ConnectionError):
        client.post_json("https://api.test/emails", {})
    assert len(calls) == 1
