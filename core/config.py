"""
core/config.py -- Settings for the user management service.

Every knob the service reads from the environment (or a .env file) is a
field on Settings; get_settings() hands out one cached instance.

  SECRET_KEY      signs the session cookie. Anyone holding it can forge a
                  logged-in visitor, so production refuses to start without
                  one and keys under 32 chars are rejected. With DEBUG=true a
                  throwaway key is generated, which logs everyone out on
                  restart (the in-memory users are gone by then anyway).
  SESSION_COOKIE  name of that cookie; SECURE_COOKIES marks it https-only.
  BCRYPT_ROUNDS   bcrypt cost factor. Each step doubles the time to hash and
                  check a password: 10 for real use, 4 in the test suite.
  HOST / PORT     where main.py binds uvicorn (127.0.0.1:3000).

Layer rule: may not import from api/, web/ or auth/.
"""

import logging
import secrets
from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger("usermgmt.config")


class Settings(BaseSettings):
    """Service settings. Only SECRET_KEY lacks a usable default outside debug mode."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ------------------------------------------------------------------
    # Core
    # ------------------------------------------------------------------

    debug: bool = False
    # Empty string is the sentinel for "not configured". The model_validator
    # below either generates a dev key or raises, so callers never see "".
    secret_key: str = ""
    log_level: str = "INFO"

    # ------------------------------------------------------------------
    # Listener
    # ------------------------------------------------------------------

    host: str = "127.0.0.1"
    port: int = 3000

    # ------------------------------------------------------------------
    # Auth
    # ------------------------------------------------------------------

    session_cookie: str = "usermgmt_session"
    secure_cookies: bool = False
    bcrypt_rounds: int = Field(default=10, ge=4, le=31)

    # ------------------------------------------------------------------
    # Validators
    # ------------------------------------------------------------------

    @model_validator(mode="after")
    def validate_secret_key(self) -> "Settings":
        """Make sure the session cookie gets a usable signing key.

        A missing key is generated in debug mode and fatal otherwise.
        """
        if not self.secret_key:
            if self.debug:
                self.secret_key = secrets.token_hex(32)
                logger.warning("DEBUG is on and SECRET_KEY is unset; signing session cookies with a throwaway key.")
            else:
                raise ValueError(
                    "SECRET_KEY must be set to sign session cookies "
                    "(or set DEBUG=true to use a throwaway key)."
                )
        if len(self.secret_key) < 32:
            raise ValueError("SECRET_KEY is too short to sign session cookies; use at least 32 characters.")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return the cached Settings.

    Tests that change the environment call get_settings.cache_clear() first.
    """
    return Settings()
