"""
Application settings loaded from environment variables.

``DATABASE_URL`` and ``JWT_SECRET`` have no defaults: the service refuses to
start until both are provided.
"""

from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

_INSECURE_SECRETS = {
    "spidersap",
    "tu_clave_secreta",
    "change-me-jwt-secret-key",
    "secret",
    "changeme",
}


class Settings(BaseSettings):
    # ── Database ─────────────────────────────────────────────────────────
    database_url: str = Field(..., min_length=1)
    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_pool_timeout: int = 30           # seconds, connection checkout
    db_echo: bool = False

    # ── Security Secrets ──────────────────────────────────────────────────
    jwt_secret: str = Field(..., min_length=16)   # HMAC secret for session tokens
    jwt_expiry_seconds: int = 7200                # 2 hours

    # ── Server ───────────────────────────────────────────────────────────
    port: int = 4000
    host: str = "0.0.0.0"
    debug: bool = False
    cors_origins: List[str] = ["*"]

    model_config = {
        "env_file": ".env",
        "case_sensitive": False,
        "extra": "ignore",
    }

    @field_validator("jwt_secret")
    @classmethod
    def _reject_placeholder_secret(cls, value: str) -> str:
        if value.strip().lower() in _INSECURE_SECRETS:
            raise ValueError("jwt_secret is a known placeholder value")
        return value

    @field_validator("jwt_expiry_seconds")
    @classmethod
    def _positive_expiry(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("jwt_expiry_seconds must be positive")
        return value


@lru_cache
def get_settings() -> Settings:
    """
    Return the process-wide settings, parsed once.

    Raises ``pydantic.ValidationError`` when required values are missing.
    Tests that change the environment call ``get_settings.cache_clear()``.
    """
    return Settings()
