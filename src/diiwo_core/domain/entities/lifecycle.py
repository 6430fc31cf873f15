# Copyright (c) Diiwo.
# SPDX-License-Identifier: MIT
"""Lifecycle and ownership behaviour (Domain Layer).

Purpose:
    Behaviour-only mixins that give any entity carrying ``state`` and
    ``updated_at`` (and optionally ``owner_id``) the universal lifecycle
    operations. The mixins declare no storage; SQLAlchemy models and plain
    dataclasses both provide the attributes themselves.

Layer:
    domain/entities

Notes:
    - ``soft_delete`` and ``restore`` are unconditional and idempotent.
    - ``fire`` is table-driven and refuses illegal transitions by returning
      a ``Failure`` without touching the entity.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING
from uuid import UUID

from diiwo_core.domain.enums.entity_state import EntityState, LifecycleEvent, next_state
from diiwo_core.domain.results import Result, Success, business

__all__ = ["utc_now", "advance_timestamp", "LifecycleMixin", "OwnershipMixin"]


def utc_now() -> datetime:
    """Return the current UTC time with timezone info."""
    return datetime.now(UTC)


def advance_timestamp(previous: datetime | None, now: datetime) -> datetime:
    """Return the refreshed ``updated_at`` value, never moving backwards.

    Args:
        previous: Current ``updated_at`` (may be None or naive).
        now: Candidate new timestamp.

    Returns:
        datetime: ``max(previous, now)`` when both are timezone-aware,
        otherwise ``now``.
    """
    if previous is None or previous.tzinfo is None or now.tzinfo is None:
        return now
    return max(previous, now)


class LifecycleMixin:
    """Universal lifecycle operations over ``state`` and ``updated_at``."""

    if TYPE_CHECKING:
        state: EntityState
        updated_at: datetime

    # ------------------------------------------------------------------
    # Unconditional operations
    # ------------------------------------------------------------------

    def soft_delete(self, now: datetime | None = None) -> None:
        """Soft delete the entity (state becomes ``TERMINATED``)."""
        self.state = EntityState.TERMINATED
        self._touch(now)

    def restore(self, now: datetime | None = None) -> None:
        """Restore the entity to ``ACTIVE`` from whatever state it is in."""
        self.state = EntityState.ACTIVE
        self._touch(now)

    # ------------------------------------------------------------------
    # Predicates
    # ------------------------------------------------------------------

    @property
    def is_active(self) -> bool:
        return self.state == EntityState.ACTIVE

    @property
    def is_inactive(self) -> bool:
        return self.state == EntityState.INACTIVE

    @property
    def is_effective(self) -> bool:
        return self.state == EntityState.EFFECTIVE

    @property
    def is_terminated(self) -> bool:
        """Indicates whether the entity has been soft deleted."""
        return self.state == EntityState.TERMINATED

    # ------------------------------------------------------------------
    # Table-driven transitions
    # ------------------------------------------------------------------

    def fire(self, event: LifecycleEvent, now: datetime | None = None) -> Result[EntityState]:
        """Apply ``event`` according to the lifecycle transition table.

        Args:
            event: Lifecycle event to apply.
            now: Optional timestamp used to refresh ``updated_at``.

        Returns:
            Result[EntityState]: ``Success`` with the new state, or a
            ``Failure`` with code ``ILLEGAL_TRANSITION`` when the event is not
            allowed from the current state (the entity is left untouched).
        """
        current = EntityState(self.state)
        target = next_state(current, event)
        if target is None:
            return business(
                f"Cannot {event.value} an entity in state {current.name}",
                code="ILLEGAL_TRANSITION",
                state=current.name,
                event=event.value,
            )
        self.state = target
        self._touch(now)
        return Success(target)

    def activate(self, now: datetime | None = None) -> Result[EntityState]:
        return self.fire(LifecycleEvent.ACTIVATE, now)

    def deactivate(self, now: datetime | None = None) -> Result[EntityState]:
        return self.fire(LifecycleEvent.DEACTIVATE, now)

    def reactivate(self, now: datetime | None = None) -> Result[EntityState]:
        return self.fire(LifecycleEvent.REACTIVATE, now)

    def promote(self, now: datetime | None = None) -> Result[EntityState]:
        return self.fire(LifecycleEvent.PROMOTE, now)

    def demote(self, now: datetime | None = None) -> Result[EntityState]:
        return self.fire(LifecycleEvent.DEMOTE, now)

    def _touch(self, now: datetime | None) -> None:
        self.updated_at = advance_timestamp(
            getattr(self, "updated_at", None), now if now is not None else utc_now()
        )


class OwnershipMixin:
    """Ownership checks over an optional ``owner_id``."""

    if TYPE_CHECKING:
        owner_id: UUID | None

    def is_owned_by(self, actor_id: UUID | None) -> bool:
        """Return True if owned by ``actor_id`` or global (no owner)."""
        return self.owner_id is None or self.owner_id == actor_id

    @property
    def is_global(self) -> bool:
        """Entity is not owned by any specific actor."""
        return self.owner_id is None
