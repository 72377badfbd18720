"""
auth/tokens.py -- Bearer token verification against the identity provider.

The API never issues tokens. Users sign in at the provider (Cognito hosted
UI or Amplify in the frontend), and every API request carries the resulting
JWT as `Authorization: Bearer <token>`. This module only checks that token.

Security design decisions:
  Signature: python-jose with RS256 only. The key is picked from the cached
       JWKS by the token's `kid` header. HS256 is never accepted -- an
       attacker must not be able to sign with the public key as an HMAC
       secret (algorithm confusion).

  Claims: issuer must match the configured provider. Audience must match
       the app client id: ID tokens carry it in `aud`, Cognito access tokens
       carry it in `client_id` instead. Expiry is enforced with a leeway of
       CLOCK_SKEW_SECONDS to tolerate small clock drift.

  Failure: verification returns None on any failure. The dependency layer
       turns that into a 401; the reason only goes to the debug log.

Layer rule: no imports from api/, web/, or todos/. Import from core/ is
allowed -- core/ is the kernel and has no reverse dependencies.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from jose import JWTError, jwt

from core.config import get_settings

if TYPE_CHECKING:
    from auth.jwks import JWKSCache

logger = logging.getLogger("todoapi.auth")

_ALGORITHMS = ["RS256"]


def verify_access_token(token: str, jwks: JWKSCache) -> dict[str, Any] | None:
    """Verify a provider-issued JWT. Returns its claims or None on any failure."""
    settings = get_settings()
    if not settings.issuer or not settings.cognito_app_client_id:
        return None

    try:
        header = jwt.get_unverified_header(token)
    except JWTError:
        logger.debug("Rejected token: malformed header")
        return None

    # The header is attacker-controlled; kid must be a usable dict key.
    kid = header.get("kid")
    if not isinstance(kid, str) or not kid or header.get("alg") not in _ALGORITHMS:
        logger.debug("Rejected token: kid=%r alg=%r", kid, header.get("alg"))
        return None

    key = jwks.get_key(kid)
    if key is None:
        logger.debug("Rejected token: unknown signing key %s", kid)
        return None

    try:
        claims = jwt.decode(
            token,
            key,
            algorithms=_ALGORITHMS,
            issuer=settings.issuer,
            # Audience is checked below so access tokens (client_id, no aud)
            # and ID tokens (aud) go through the same rule.
            options={
                "verify_aud": False,
                "verify_at_hash": False,
                "leeway": settings.clock_skew_seconds,
            },
        )
    except JWTError as exc:
        logger.debug("Rejected token: %s", exc)
        return None

    if not _audience_matches(claims, settings.cognito_app_client_id):
        logger.debug("Rejected token: audience mismatch")
        return None
    return claims


def _audience_matches(claims: dict[str, Any], client_id: str) -> bool:
    """True if the token was issued to our app client."""
    aud = claims.get("aud")
    if aud is None:
        return claims.get("client_id") == client_id
    if isinstance(aud, str):
        return aud == client_id
    return client_id in aud
