"""
authgate.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for the engine and its transport.
- Hide secrets from repr/logging (password salt, token secret).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from datetime import timedelta
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_DEV_SALT = "dev-salt-change-me"
_DEV_SECRET = "dev-secret-change-me"


class Settings(BaseSettings):
    """
    Process-wide engine parameters, read once at startup.

    Changing `password_salt` invalidates every stored hash; changing
    `token_secret` invalidates every outstanding token.
    """

    model_config = SettingsConfigDict(env_prefix="AUTHGATE_", case_sensitive=False)

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "authgate"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Credentials
    password_salt: str = Field(default=_DEV_SALT, repr=False)
    hash_time_cost: int = Field(default=3, ge=1)
    hash_memory_cost: int = Field(default=65536, ge=8)
    hash_parallelism: int = Field(default=4, ge=1)

    # Tokens
    token_secret: str = Field(default=_DEV_SECRET, repr=False)
    token_issuer: str = "authgate"
    token_lifetime_seconds: int = Field(default=60 * 60, ge=1)

    # Persistence
    database_url: str = "sqlite+aiosqlite:///./authgate.db"

    @property
    def uses_default_secrets(self) -> bool:
        return self.password_salt == _DEV_SALT or self.token_secret == _DEV_SECRET

    @property
    def token_lifetime(self) -> timedelta:
        return timedelta(seconds=self.token_lifetime_seconds)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Only the API composition root reads Settings; the engine itself is handed an
# `AuthConfig` so that several differently-configured engines can share a process.
