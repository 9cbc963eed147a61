"""Application configuration (settings and environment).

Single source of truth for cache and database configuration. Uses
pydantic-settings with .env support. Nothing is required: a process that
only wraps in-memory collaborators runs on defaults.
"""

from functools import lru_cache

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment and .env.

    cache_ttl_entities bounds how long a cached entity is trusted before the
    backend expires it; None or 0 disables expiry.
    """

    # App
    app_name: str = "cachedrepo"
    debug: bool = False

    # Database (used by the SQLAlchemy repository binding)
    database_url: str = ""
    database_echo: bool = False

    # Redis Cache
    redis_enabled: bool = True
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: SecretStr | None = None
    redis_socket_timeout: int = 5

    # Cache-aside
    cache_ttl_entities: int | None = 300
    cache_namespace_prefix: str = ""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @field_validator("redis_port")
    @classmethod
    def validate_port(cls, value: int) -> int:
        if not 0 < value < 65536:
            raise ValueError(f"redis_port must be between 1 and 65535, got: {value}")
        return value

    @field_validator("cache_ttl_entities")
    @classmethod
    def validate_ttl(cls, value: int | None) -> int | None:
        """Reject negative TTLs; normalize 0 to None (no expiry)."""
        if value is None:
            return None
        if value < 0:
            raise ValueError(f"cache_ttl_entities must be >= 0, got: {value}")
        return value or None


@lru_cache
def get_settings() -> Settings:
    """Return cached settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
