"""
tests/conftest.py -- Shared test fixtures for the TODO API tests.

This module provides:
  - signing_key: an RSA key pair generated once per session, published as a
    one-key JWKS -- stands in for the identity provider's signing keys
  - make_token: signs provider-shaped tokens (issuer, audience, expiry) with it
  - auth_headers: Authorization header for a given user
  - _patch_lifespan(): wires a fresh TodoStore and a pre-loaded JWKSCache
    into app.state, bypassing the real startup (no network)
  - api_client: TestClient over the real FastAPI app

Tokens are real RS256 JWTs verified by the real auth/tokens.py code path.
Only the JWKS download is skipped -- the cache is loaded directly.

Environment must be set before any api/auth/core import so get_settings()
sees the test identity provider and the rate limiter starts disabled.
"""

from __future__ import annotations

import os
import time
from collections.abc import Callable, Generator
from contextlib import asynccontextmanager
from typing import Any

# CRITICAL: set before any app import -- get_settings() is cached on first call.
os.environ["DEBUG"] = "true"
os.environ["COGNITO_REGION"] = "us-east-1"
os.environ["COGNITO_USER_POOL_ID"] = "us-east-1_TESTPOOL"
os.environ["COGNITO_APP_CLIENT_ID"] = "test-client-id"
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from fastapi.testclient import TestClient
from jose import jwk, jwt

from api.main import app
from auth.jwks import JWKSCache
from todos.store import TodoStore

ISSUER = "https://cognito-idp.us-east-1.amazonaws.com/us-east-1_TESTPOOL"
CLIENT_ID = "test-client-id"
KID = "test-key-1"


# ---------------------------------------------------------------------------
# Signing key and tokens
# ---------------------------------------------------------------------------


def _generate_rsa_pem() -> bytes:
    private_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    return private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )


def _public_jwk(private_pem: bytes, kid: str) -> dict[str, Any]:
    public = jwk.construct(private_pem, algorithm="RS256").public_key().to_dict()
    public["kid"] = kid
    public["use"] = "sig"
    return public


@pytest.fixture(scope="session")
def signing_key() -> tuple[bytes, dict[str, Any]]:
    """Return (private PEM, JWKS document) for the fake identity provider."""
    private_pem = _generate_rsa_pem()
    return private_pem, {"keys": [_public_jwk(private_pem, KID)]}


@pytest.fixture(scope="session")
def forged_key() -> bytes:
    """A private key the fake identity provider never published."""
    return _generate_rsa_pem()


@pytest.fixture(scope="session")
def make_token(signing_key) -> Callable[..., str]:
    """Return a factory that signs an ID-token-shaped JWT.

    Keyword overrides replace claims; names listed in omit are dropped.
        make_token(sub="alice")
        make_token(sub="bob", aud="someone-else")
        make_token(omit=["sub"], oid="entra-oid")
    """
    private_pem, _ = signing_key

    def _make(
        sub: str = "alice",
        omit: tuple[str, ...] | list[str] = (),
        kid: str = KID,
        key: bytes | None = None,
        **claims: Any,
    ) -> str:
        now = int(time.time())
        payload: dict[str, Any] = {
            "sub": sub,
            "iss": ISSUER,
            "aud": CLIENT_ID,
            "token_use": "id",
            "iat": now,
            "exp": now + 3600,
        }
        payload.update(claims)
        for name in omit:
            payload.pop(name, None)
        return jwt.encode(payload, key or private_pem, algorithm="RS256", headers={"kid": kid})

    return _make


@pytest.fixture(scope="session")
def auth_headers(make_token) -> Callable[[str], dict[str, str]]:
    """Return a factory: auth_headers("alice") -> {"Authorization": "Bearer ..."}."""

    def _headers(user: str = "alice") -> dict[str, str]:
        return {"Authorization": f"Bearer {make_token(sub=user)}"}

    return _headers


# ---------------------------------------------------------------------------
# App fixtures
# ---------------------------------------------------------------------------


def _patch_lifespan(store: TodoStore, jwks: JWKSCache):
    """Return an async context manager that replaces the real lifespan.

    Wires a pre-created store and key cache into app.state so TestClient
    routes see isolated state and never download a JWKS.
    """

    @asynccontextmanager
    async def test_lifespan(app):
        app.state.todo_store = store
        app.state.jwks = jwks
        yield
        app.state.todo_store.close()

    return test_lifespan


@pytest.fixture
def store() -> TodoStore:
    """A fresh, empty TodoStore."""
    return TodoStore()


@pytest.fixture
def jwks_cache(signing_key) -> JWKSCache:
    """A JWKSCache pre-loaded with the test provider's key and no fetch URL."""
    _, jwks_doc = signing_key
    cache = JWKSCache("", ttl=3600)
    cache.load(jwks_doc)
    return cache


@pytest.fixture
def api_client(store: TodoStore, jwks_cache: JWKSCache) -> Generator[TestClient, None, None]:
    """Yield a TestClient over the real app with a fresh store per test.

    Fresh per test so id assertions (first create -> id 1) hold regardless
    of test order.
    """
    app.router.lifespan_context = _patch_lifespan(store, jwks_cache)
    with TestClient(app, raise_server_exceptions=True) as client:
        yield client
