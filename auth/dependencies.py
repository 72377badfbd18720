"""
auth/dependencies.py -- FastAPI Depends() helpers for authentication.

Requests authenticate with `Authorization: Bearer <token>`, where the token
was issued by the external identity provider. The token is verified against
the provider's published keys (auth/tokens.py) and its claims become the
caller's identity.

try_get_claims() is the soft variant (returns None on failure).
get_current_claims() wraps it and raises HTTP 401 if unauthenticated.
get_owner_id() wraps get_current_claims() and picks the owner id that scopes
every TODO operation.

Layer rule: no imports from web/ or todos/.
  auth/dependencies.py may import from fastapi (for Depends/HTTPException/Request)
  because this module is part of the FastAPI dependency injection system.
"""

from __future__ import annotations

from typing import Any

from fastapi import Depends, HTTPException, Request

from auth.tokens import verify_access_token

# Claim names checked for the owner id, most specific first.
NAME_IDENTIFIER_CLAIM = "http://schemas.xmlsoap.org/ws/2005/05/identity/claims/nameidentifier"
OWNER_CLAIMS = (NAME_IDENTIFIER_CLAIM, "sub", "oid")

# Owner id for a verified token that carries none of OWNER_CLAIMS.
ANONYMOUS_OWNER = "anonymous"


def try_get_claims(request: Request) -> dict[str, Any] | None:
    """Return verified claims for the request's bearer token, or None.

    Never raises -- callers that need a hard 401 should use get_current_claims().
    """
    auth_header = request.headers.get("Authorization", "")
    scheme, _, token = auth_header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return verify_access_token(token.strip(), request.app.state.jwks)


def get_current_claims(request: Request) -> dict[str, Any]:
    """Require authentication. Raises HTTP 401 if the request is not authenticated.

    Use as a FastAPI dependency:
        @router.get("/protected")
        def route(claims: dict = Depends(get_current_claims)): ...
    """
    claims = try_get_claims(request)
    if claims is None:
        raise HTTPException(
            status_code=401,
            detail={"code": "unauthorized", "message": "Authentication required."},
            headers={"WWW-Authenticate": "Bearer"},
        )
    return claims


def owner_id_from_claims(claims: dict[str, Any]) -> str:
    """Pick the owner id: name identifier, then sub, then oid, then anonymous.

    The anonymous fallback is only reachable with a verified token that
    lacks all three claims. Such callers share one owner bucket.
    """
    for name in OWNER_CLAIMS:
        value = claims.get(name)
        if value:
            return str(value)
    return ANONYMOUS_OWNER


def get_owner_id(claims: dict[str, Any] = Depends(get_current_claims)) -> str:
    """Owner id of the authenticated caller. Raises HTTP 401 if unauthenticated."""
    return owner_id_from_claims(claims)
