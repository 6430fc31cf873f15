# src/diiwo_core/adapters/sqlalchemy/models.py
# Copyright (c) Diiwo.
# SPDX-License-Identifier: MIT
"""Declarative Base and lifecycle persistence mixins.

This module defines:
    - A SQLAlchemy Declarative Base with deterministic naming conventions
      (stable Alembic diffs) and an optional default schema from settings.
    - Column mixins for identity (UUIDv4), audit timestamps (UTC), lifecycle
      state, actor attribution and ownership.
    - Abstract entity bases composing those mixins. Construction assigns
      ``id``, ``created_at == updated_at`` and ``state = ACTIVE`` in memory,
      before any flush.

Column values are only *defaults* here. Audit fields are stamped by the
audit policy on flush (see :mod:`diiwo_core.adapters.sqlalchemy.listener`).

Example:
    class Project(UserOwnedEntity):
        __tablename__ = "projects"
        name: Mapped[str] = mapped_column(String(200))
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import MetaData, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, declared_attr, mapped_column

from diiwo_core.config.settings import get_settings
from diiwo_core.domain.entities.lifecycle import LifecycleMixin, OwnershipMixin, utc_now
from diiwo_core.domain.enums.entity_state import EntityState

from .types import EntityStateType, UtcDateTime

__all__ = [
    "NAMING_CONVENTIONS",
    "metadata",
    "Base",
    "IdentityMixin",
    "TimestampMixin",
    "LifecycleStateMixin",
    "UserTrackedMixin",
    "UserOwnedMixin",
    "BaseEntity",
    "AuditableEntity",
    "UserTrackedEntity",
    "DomainEntity",
    "UserOwnedEntity",
]

#: Deterministic naming conventions for Alembic-friendly diffs.
#: Ref: https://alembic.sqlalchemy.org/en/latest/naming.html
NAMING_CONVENTIONS: dict[str, str] = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=NAMING_CONVENTIONS)


class Base(DeclarativeBase):
    """Declarative Base for lifecycle entities.

    Attaches the metadata with stable naming conventions and applies
    ``Settings.db_schema`` (``DB_SCHEMA``) as the default table schema.
    """

    metadata = metadata

    @declared_attr.directive
    def __table_args__(cls) -> tuple[dict[str, Any]] | tuple[()]:
        """Attach default schema when configured.

        Returns:
            tuple: Table arguments containing the schema mapping, if configured.
        """
        schema = get_settings().db_schema
        if schema:
            return ({"schema": schema},)
        return ()


# ======================================================================================
# Column mixins
# ======================================================================================


class IdentityMixin:
    """UUIDv4 primary key ``id``."""

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )


class TimestampMixin:
    """``created_at`` (immutable after first commit) and ``updated_at`` (UTC)."""

    created_at: Mapped[datetime] = mapped_column(
        UtcDateTime(),
        nullable=False,
        default=utc_now,
    )
    updated_at: Mapped[datetime] = mapped_column(
        UtcDateTime(),
        nullable=False,
        default=utc_now,
    )


class LifecycleStateMixin(LifecycleMixin):
    """Persisted lifecycle ``state`` plus the lifecycle operations."""

    state: Mapped[EntityState] = mapped_column(
        EntityStateType(),
        nullable=False,
        default=EntityState.ACTIVE,
        index=True,
    )


class UserTrackedMixin:
    """Actors that created and last modified the row."""

    created_by: Mapped[uuid.UUID | None] = mapped_column(Uuid(as_uuid=True), nullable=True)
    updated_by: Mapped[uuid.UUID | None] = mapped_column(Uuid(as_uuid=True), nullable=True)


class UserOwnedMixin(OwnershipMixin):
    """Optional owning actor; ``NULL`` marks a global/shared row."""

    owner_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        nullable=True,
        index=True,
    )


# ======================================================================================
# Abstract entity bases
# ======================================================================================


class BaseEntity(IdentityMixin, Base):
    """Root of all entities: identity plus construction-time defaults."""

    __abstract__ = True

    def __init__(self, **kwargs: Any) -> None:
        values = self._construction_defaults()
        if "created_at" in kwargs and "updated_at" not in kwargs and "updated_at" in values:
            values["updated_at"] = kwargs["created_at"]
        values.update(kwargs)
        super().__init__(**values)

    def _construction_defaults(self) -> dict[str, Any]:
        """Return in-memory defaults for the columns this entity carries."""
        values: dict[str, Any] = {"id": uuid.uuid4()}
        if isinstance(self, TimestampMixin):
            now = utc_now()
            values["created_at"] = now
            values["updated_at"] = now
        if isinstance(self, LifecycleStateMixin):
            values["state"] = EntityState.ACTIVE
        return values

    def __repr__(self) -> str:
        state = getattr(self, "state", None)
        suffix = f", state={state.name}" if isinstance(state, EntityState) else ""
        return f"{type(self).__name__}(id={self.id!s}{suffix})"


class AuditableEntity(TimestampMixin, BaseEntity):
    """Entity with audit timestamps."""

    __abstract__ = True


class UserTrackedEntity(UserTrackedMixin, AuditableEntity):
    """Auditable entity attributed to the actors that wrote it."""

    __abstract__ = True


class DomainEntity(LifecycleStateMixin, UserTrackedEntity):
    """Full lifecycle entity: soft-deletable, auditable and user-tracked."""

    __abstract__ = True


class UserOwnedEntity(UserOwnedMixin, DomainEntity):
    """Domain entity that may belong to a specific actor."""

    __abstract__ = True
