# homeclean/http.py
"""
Small HTTP helper built on requests.Session.

- shared session with a default timeout (overridable per call)
- request/response logging with a request id
- no retry adapter: a failed call is reported once and abandoned
"""

from __future__ import annotations

import time
import uuid
from typing import Any, Dict, Optional
import requests

from homeclean.logging import get_logger

logger = get_logger(__name__)


class HttpClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: int = 15,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.base_url = base_url or ""
        self.timeout = timeout
        self.session = requests.Session()
        if headers:
            self.session.headers.update(headers)

    def _url(self, path: str) -> str:
        if path.startswith("http") or not self.base_url:
            return path
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"

    def request(self, method: str, path: str, **kwargs) -> requests.Response:
        url = self._url(path)
        rid = str(uuid.uuid4())
        started = time.perf_counter()
        timeout = kwargs.pop("timeout", self.timeout)

        try:
            logger.debug("http.request", extra={"rid": rid, "method": method, "url": url})
            resp = self.session.request(method, url, timeout=timeout, **kwargs)
        except requests.RequestException as e:
            logger.error("http.error", extra={"rid": rid, "url": url, "error": str(e)})
            raise

        elapsed_ms = int((time.perf_counter() - started) * 1000)
        logger.info(
            "http.response",
            extra={"rid": rid, "status": resp.status_code, "elapsed_ms": elapsed_ms, "snippet": resp.text[:200]},
        )
        return resp

    def post_json(self, path: str, payload: Dict[str, Any], **kwargs) -> Dict[str, Any]:
        """
        POSTs a JSON body. Raises requests.HTTPError on a non-2xx answer,
        returns the decoded JSON (or {} when the body is not JSON).
        """
        headers = kwargs.pop("headers", {})
        headers.setdefault("Accept", "application/json")

        resp = self.request("POST", path, headers=headers, json=payload, **kwargs)
        resp.raise_for_status()
        try:
            return resp.json()
        except ValueError:
            return {}
