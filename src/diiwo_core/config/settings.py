# src/diiwo_core/config/settings.py
# Copyright (c) Diiwo.
# SPDX-License-Identifier: MIT
"""Diiwo Core Configuration (Pydantic Settings, v2)

Summary:
    Typed, validated configuration for the audit and lifecycle machinery.
    Host applications usually share one ``.env`` file with this library, so
    unknown variables are ignored rather than rejected.

Design:
    - Pydantic v2 BaseSettings with explicit ``validation_alias`` per field.
    - Environment enumeration for coarse behavior toggles.
    - Singleton accessor ``get_settings()`` with LRU cache.
    - Structured summary log on first load (no secrets are held here).
"""

from __future__ import annotations

import logging
from enum import Enum
from functools import lru_cache

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

_LOG_LEVELS = frozenset({"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"})


class Environment(str, Enum):
    """Logical deployment environment."""

    DEVELOPMENT = "development"
    TEST = "test"
    CI = "ci"
    STAGING = "staging"
    PRODUCTION = "production"


class Settings(BaseSettings):
    """Typed configuration for the lifecycle/audit core."""

    # ---------------------------
    # Core environment
    # ---------------------------
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Logical deployment environment.",
        validation_alias="ENVIRONMENT",
    )
    service_name: str = Field(
        default="diiwo-core",
        min_length=1,
        description="Logical service name used in structured logs.",
        validation_alias="SERVICE_NAME",
    )

    # ---------------------------
    # Persistence
    # ---------------------------
    db_schema: str | None = Field(
        default=None,
        description="Default database schema applied to tables of the declarative Base.",
        validation_alias="DB_SCHEMA",
    )

    # ---------------------------
    # Audit policy
    # ---------------------------
    audit_enabled: bool = Field(
        default=True,
        description="Populate audit fields and intercept deletes on every flush.",
        validation_alias="AUDIT_ENABLED",
    )
    soft_delete_enabled: bool = Field(
        default=True,
        description=(
            "Convert deletes of soft-deletable entities into a transition to TERMINATED. "
            "When false, deletes are physical."
        ),
        validation_alias="AUDIT_SOFT_DELETE_ENABLED",
    )
    strict_actor_resolution: bool = Field(
        default=False,
        description=(
            "Propagate errors raised by the current-actor provider into the flush. "
            "When false, a failing provider is treated as 'no actor'."
        ),
        validation_alias="AUDIT_STRICT_ACTOR_RESOLUTION",
    )

    # ---------------------------
    # Logging
    # ---------------------------
    log_level: str | None = Field(
        default=None,
        description="Override log level (e.g., 'DEBUG', 'INFO'). If not set, defaults are used.",
        validation_alias="LOG_LEVEL",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str | None) -> str | None:
        """Upper-case and validate the log level name.

        Raises:
            ValueError: If the level is not a standard logging level name.
        """
        if value is None or not value.strip():
            return None
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {sorted(_LOG_LEVELS)}")
        return level

    @field_validator("db_schema")
    @classmethod
    def _blank_schema_is_none(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return value.strip()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached singleton `Settings` instance.

    Returns:
        Settings: Validated settings.

    Raises:
        RuntimeError: If configuration is invalid.
    """
    try:
        settings = Settings()
    except ValidationError as exc:
        logger.exception("Invalid diiwo-core configuration")
        raise RuntimeError(f"Invalid configuration: {exc}") from exc

    logger.info(
        "Settings initialized",
        extra={
            "environment": settings.environment.value,
            "service_name": settings.service_name,
            "db_schema": settings.db_schema,
            "audit": {
                "enabled": settings.audit_enabled,
                "soft_delete_enabled": settings.soft_delete_enabled,
                "strict_actor_resolution": settings.strict_actor_resolution,
            },
        },
    )
    return settings
