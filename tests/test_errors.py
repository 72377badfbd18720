"""
tests/test_errors.py -- Tests for the application-wide error envelope.

Covers:
  - Routing errors raised by Starlette itself (unknown path, unsupported
    method) use the {"error": {...}} envelope, not the default {"detail": ...}
  - 405 keeps the Allow header
  - 429 handler: Retry-After is the length of the exceeded window
"""

from __future__ import annotations

import asyncio
import json
from types import SimpleNamespace

import pytest
from limits import parse
from slowapi.errors import RateLimitExceeded

from api.main import rate_limit_handler


def test_unknown_api_route_uses_envelope(api_client, auth_headers):
    resp = api_client.get("/api/nope", headers=auth_headers("alice"))
    assert resp.status_code == 404
    body = resp.json()
    assert "detail" not in body
    assert body["error"]["code"] == "http_404"
    assert body["error"]["message"] == "Not Found"


def test_unsupported_method_uses_envelope(api_client, auth_headers):
    resp = api_client.patch("/api/todos/1", json={"title": "x"}, headers=auth_headers("alice"))
    assert resp.status_code == 405
    assert resp.json()["error"]["code"] == "http_405"
    assert "PUT" in resp.headers["allow"]


@pytest.mark.parametrize("limit, expected", [("60/minute", "60"), ("5/second", "1"), ("10/hour", "3600")])
def test_rate_limit_retry_after_matches_window(limit, expected):
    exc = RateLimitExceeded(SimpleNamespace(limit=parse(limit), error_message=None))
    resp = asyncio.run(rate_limit_handler(None, exc))
    assert resp.status_code == 429
    assert resp.headers["retry-after"] == expected
    assert json.loads(resp.body)["error"]["code"] == "rate_limited"
