"""
auth/jwks.py -- Cached access to the identity provider's signing keys.

The provider publishes its public keys as a JSON Web Key Set. Tokens name
the key they were signed with in the `kid` header, so keys are cached by kid.

Refresh policy:
  - The whole set is re-fetched once it is older than ttl seconds.
  - An unknown kid triggers an early refresh (the provider rotated keys),
    but at most once per _MIN_REFRESH_SECONDS. A flood of tokens with bogus
    kids must not turn into a flood of requests to the provider.
  - A failed fetch keeps the previous keys. The caller sees "key not found"
    and answers 401.

Thread-safety: route dependencies run in the worker thread pool, so the key
map and timestamps are guarded by a lock. The HTTP fetch itself happens
outside the lock.

Layer rule: no imports from api/, web/, or todos/.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Any

import requests

logger = logging.getLogger("todoapi.auth.jwks")

_MIN_REFRESH_SECONDS = 30.0
_FETCH_TIMEOUT = 10

# Module-level session shared across all fetches for connection pooling.
# These are well-known provider URLs; 3 redirect hops is generous.
_session = requests.Session()
_session.max_redirects = 3


class JWKSCache:
    """Thread-safe kid -> JWK cache backed by the provider's JWKS endpoint.

    Usage:
        jwks = JWKSCache("https://cognito-idp.us-east-1.amazonaws.com/<pool>/.well-known/jwks.json")
        key = jwks.get_key(header["kid"])   # JWK dict or None
    """

    def __init__(self, jwks_url: str, ttl: int = 3600) -> None:
        self.jwks_url = jwks_url
        self.ttl = ttl
        self._lock = threading.Lock()
        self._keys: dict[str, dict[str, Any]] = {}
        self._fetched_at = 0.0
        self._attempted_at = 0.0

    def load(self, jwks: dict[str, Any]) -> int:
        """Replace the cached keys with the given JWKS document.

        Keys without a kid are skipped -- there is no way to select them.
        Returns the number of keys now cached.
        """
        keys = {k["kid"]: k for k in jwks.get("keys", []) if isinstance(k, dict) and k.get("kid")}
        with self._lock:
            self._keys = keys
            self._fetched_at = time.monotonic()
        return len(keys)

    def get_key(self, kid: str) -> dict[str, Any] | None:
        """Return the JWK for kid, refreshing the set when stale or rotated."""
        now = time.monotonic()
        with self._lock:
            key = self._keys.get(kid)
            stale = now - self._fetched_at > self.ttl
            may_refresh = now - self._attempted_at >= _MIN_REFRESH_SECONDS
            if (stale or key is None) and may_refresh:
                self._attempted_at = now
            else:
                return key

        if self.refresh():
            with self._lock:
                return self._keys.get(kid)
        return key

    def refresh(self) -> bool:
        """Fetch the JWKS document. Returns True if the cache was replaced."""
        if not self.jwks_url:
            logger.warning("No JWKS URL configured -- cannot verify tokens")
            return False
        try:
            resp = _session.get(self.jwks_url, timeout=_FETCH_TIMEOUT)
            resp.raise_for_status()
            count = self.load(resp.json())
        except (requests.RequestException, ValueError) as exc:
            logger.warning("JWKS fetch from %s failed: %s", self.jwks_url, exc)
            return False
        logger.info("JWKS loaded (%d keys)", count)
        return True
