"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - Gateway naming convention defaults to FromApi / P_

Design Decisions:
    - Defaults provided for all non-secret settings: works out-of-the-box with docker-compose
    - gateway_commands accepts a JSON list or a comma-separated string
"""

import json
from functools import lru_cache
from typing import Annotated

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from intranet_api.core.domain_types import (
    DEFAULT_PROCEDURE_PREFIX, DEFAULT_ROUTING_FIELD,
)


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://intranet:intranet@db:5432/intranet"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting platforms provide postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Stored-procedure gateway
    gateway_routing_field: str = DEFAULT_ROUTING_FIELD
    gateway_procedure_prefix: str = DEFAULT_PROCEDURE_PREFIX
    gateway_commands: Annotated[list[str], NoDecode] = []
    gateway_strict_commands: bool = True
    gateway_discover_procedures: bool = True
    gateway_disconnect_poll_seconds: float = 0.25

    @field_validator("gateway_commands", mode="before")
    @classmethod
    def split_commands(cls, v: object) -> object:
        """GATEWAY_COMMANDS=GetOrders,Ping or ["GetOrders", "Ping"]."""
        if isinstance(v, str):
            v = v.strip()
            if v.startswith("["):
                return json.loads(v)
            return [item.strip() for item in v.split(",") if item.strip()]
        return v

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
