# Copyright (c) Diiwo.
# SPDX-License-Identifier: MIT
"""Plain-Python lifecycle records (Domain Layer).

Purpose:
    ORM-free entities carrying the full audit and lifecycle attribute set.
    Useful for services that persist through something other than
    SQLAlchemy, and as the reference shape the audit policy operates on.

Layer: domain/entities

Notes:
    - No HTTP, DB, or framework imports.
    - ``created_at == updated_at`` and ``state == ACTIVE`` at construction.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime

from diiwo_core.domain.enums.entity_state import EntityState

from .lifecycle import LifecycleMixin, OwnershipMixin, utc_now

__all__ = ["LifecycleRecord", "OwnedRecord"]


@dataclass(slots=True, kw_only=True, eq=False)
class LifecycleRecord(LifecycleMixin):
    """Auditable, user-tracked, soft-deletable entity.

    Args:
        id: Unique identifier; generated when omitted.
        created_at: Creation timestamp (UTC); defaults to construction time.
        updated_at: Last modification timestamp (UTC); defaults to ``created_at``.
        state: Lifecycle state; defaults to ``ACTIVE``.
        created_by: Actor that created the entity.
        updated_by: Actor that last modified the entity.
    """

    id: uuid.UUID = field(default_factory=uuid.uuid4)
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime | None = None
    state: EntityState = EntityState.ACTIVE
    created_by: uuid.UUID | None = None
    updated_by: uuid.UUID | None = None

    def __post_init__(self) -> None:
        if self.updated_at is None:
            self.updated_at = self.created_at
        self.state = EntityState(self.state)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LifecycleRecord):
            return NotImplemented
        return type(self) is type(other) and self.id == other.id

    def __hash__(self) -> int:
        return hash((type(self), self.id))


@dataclass(slots=True, kw_only=True, eq=False)
class OwnedRecord(LifecycleRecord, OwnershipMixin):
    """Lifecycle record that may belong to a specific actor.

    Args:
        owner_id: Owning actor, or None for a global/shared entity.
    """

    owner_id: uuid.UUID | None = None
