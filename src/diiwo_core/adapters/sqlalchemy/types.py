# src/diiwo_core/adapters/sqlalchemy/types.py
# Copyright (c) Diiwo.
# SPDX-License-Identifier: MIT
"""Column types for lifecycle entities.

Types:
    * UtcDateTime: timezone-aware UTC datetimes on every backend. Naive input
      is assumed to be UTC; values loaded from backends without timezone
      support (SQLite) come back tagged as UTC.
    * EntityStateType: stores :class:`EntityState` as its integer tag.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from sqlalchemy.engine import Dialect
from sqlalchemy.types import DateTime, Integer, TypeDecorator

from diiwo_core.domain.enums.entity_state import EntityState

__all__ = ["UtcDateTime", "EntityStateType", "as_utc"]


def as_utc(value: datetime) -> datetime:
    """Return ``value`` as an aware UTC datetime (naive values are taken as UTC)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class UtcDateTime(TypeDecorator[datetime]):
    """``DateTime(timezone=True)`` that always round-trips aware UTC values."""

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        if value is None:
            return None
        if not isinstance(value, datetime):
            raise TypeError(f"UtcDateTime expects datetime, got {type(value).__name__}")
        return as_utc(value)

    def process_result_value(self, value: Any, dialect: Dialect) -> datetime | None:
        if value is None:
            return None
        return as_utc(value)


class EntityStateType(TypeDecorator[EntityState]):
    """Integer column holding an :class:`EntityState` tag."""

    impl = Integer
    cache_ok = True

    def process_bind_param(self, value: Any, dialect: Dialect) -> int | None:
        if value is None:
            return None
        return int(EntityState(value))

    def process_result_value(self, value: Any, dialect: Dialect) -> EntityState | None:
        if value is None:
            return None
        return EntityState(value)
