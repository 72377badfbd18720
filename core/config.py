"""
core/config.py -- Centralized application configuration via pydantic-settings.

All environment variable reads for the TODO API happen here. No module should
call os.getenv() or os.environ.get() directly -- import get_settings() instead.

Design patterns used:
  Singleton via lru_cache: get_settings() instantiates Settings once at first
      call and returns the cached instance on every subsequent call. This is
      the official FastAPI dependency injection pattern for config.

  BaseSettings (pydantic-settings): Reads values from environment variables
      and an optional .env file automatically. Field names map to env var names
      (e.g. cognito_user_pool_id -> COGNITO_USER_POOL_ID). Type coercion and
      validation are built in. List fields take JSON, e.g.
      CORS_ORIGINS='["https://todo.example.com"]'.

  @model_validator(mode="after"): Runs cross-field validation after all fields
      are resolved from environment. Production mode refuses to start without
      an identity provider; dev mode logs a warning and carries on.

Identity provider:
  Tokens are issued by an AWS Cognito user pool. The issuer and JWKS URL are
  derived from the region and pool id:
      issuer   = https://cognito-idp.{region}.amazonaws.com/{pool_id}
      jwks_url = {issuer}/.well-known/jwks.json
  OIDC_ISSUER overrides the derived issuer for any other OIDC provider.

Layer rule: core/ is the kernel. This module may not import from api/, web/,
auth/, or todos/.
"""

import logging
from functools import lru_cache
from typing import Optional

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger("todoapi.config")

APP_VERSION = "1.0.0"


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file.

    All fields have defaults so Settings() can be instantiated in test
    environments without a real .env file. The model_validator enforces
    production-safety rules at startup.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ------------------------------------------------------------------
    # Core
    # ------------------------------------------------------------------

    debug: bool = False
    log_level: str = "INFO"

    # ------------------------------------------------------------------
    # Identity provider (token verification only -- sign-in happens in
    # the frontend against the provider directly)
    # ------------------------------------------------------------------

    cognito_region: str = "us-east-1"
    cognito_user_pool_id: str = ""
    cognito_app_client_id: str = ""
    # Empty string means "derive from the Cognito region and pool id".
    oidc_issuer: str = ""
    jwks_cache_seconds: int = 3600
    clock_skew_seconds: int = 300

    # ------------------------------------------------------------------
    # HTTP
    # ------------------------------------------------------------------

    cors_origins: list[str] = ["http://localhost:4200"]
    allowed_hosts: list[str] = ["*"]

    # ------------------------------------------------------------------
    # Rate limiting
    # ------------------------------------------------------------------

    rate_limit_enabled: bool = True
    read_rate_limit: str = "120/minute"
    write_rate_limit: str = "60/minute"

    # ------------------------------------------------------------------
    # Frontend (optional -- directory holding a built single-page app)
    # ------------------------------------------------------------------

    frontend_dist: Optional[str] = None

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def issuer(self) -> str:
        """Expected `iss` claim. Empty when no provider is configured."""
        if self.oidc_issuer:
            return self.oidc_issuer.rstrip("/")
        if not self.cognito_user_pool_id:
            return ""
        return f"https://cognito-idp.{self.cognito_region}.amazonaws.com/{self.cognito_user_pool_id}"

    @property
    def jwks_url(self) -> str:
        """Where the provider publishes its signing keys."""
        if not self.issuer:
            return ""
        return f"{self.issuer}/.well-known/jwks.json"

    # ------------------------------------------------------------------
    # Validators
    # ------------------------------------------------------------------

    @model_validator(mode="after")
    def validate_identity_provider(self) -> "Settings":
        """Require an identity provider outside dev mode.

        Dev mode (DEBUG=true): log a warning. Every bearer token will be
            rejected with 401 until a provider is configured, but the app
            still starts so health checks and docs are reachable.

        Production mode: refuse to start. Without an issuer and audience the
            API cannot verify a single request.
        """
        missing = []
        if not self.issuer:
            missing.append("COGNITO_USER_POOL_ID (or OIDC_ISSUER)")
        if not self.cognito_app_client_id:
            missing.append("COGNITO_APP_CLIENT_ID")
        if missing:
            if self.debug:
                logger.warning(
                    "WARNING: identity provider not configured (%s). " "All authenticated requests will be rejected.",
                    ", ".join(missing),
                )
            else:
                raise ValueError(
                    f"{', '.join(missing)} required in production mode. "
                    "Set them in your environment or .env file. "
                    "To run in development mode, set DEBUG=true."
                )
        if self.jwks_cache_seconds <= 0:
            raise ValueError("JWKS_CACHE_SECONDS must be positive.")
        if self.clock_skew_seconds < 0:
            raise ValueError("CLOCK_SKEW_SECONDS must not be negative.")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return the application Settings singleton.

    Uses lru_cache so Settings() is instantiated exactly once -- at first call.
    All modules should call get_settings() rather than constructing Settings() directly.

    In tests: call get_settings.cache_clear() between test cases if you need
    to inject different environment variables.
    """
    return Settings()
