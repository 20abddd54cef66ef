# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Namespace Config Contributors

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Client settings loaded from environment variables."""

    base_url: str = "http://localhost:18080"
    api_root: str = "/api/namespaces"
    request_timeout: float = 5.0
    log_level: str = "info"

    model_config = {"env_file": ".env", "env_prefix": "NAMESPACE_CONFIG_"}

    @field_validator("api_root")
    @classmethod
    def _validate_api_root(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError("api_root must start with '/'")
        value = value.rstrip("/")
        if not value:
            raise ValueError("api_root must name a resource path, not '/'")
        return value


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance. Lazy-loaded to avoid import-time failures."""
    return Settings()
