# Copyright (c) Diiwo.
# SPDX-License-Identifier: MIT
"""Entity lifecycle enums and transition table.

Purpose:
    Define the universal lifecycle states shared by every domain entity, the
    events that move an entity between states, and the authoritative
    transition table consulted by the lifecycle mixin.

Layer: domain/enums

Notes:
    - Integer tags are persisted and must never be renumbered.
    - Tag order is documentary only; do not compare members arithmetically.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum, IntEnum
from types import MappingProxyType
from typing import Final

__all__ = [
    "EntityState",
    "LifecycleEvent",
    "TRANSITIONS",
    "next_state",
    "allowed_events",
]


class EntityState(IntEnum):
    """Universal entity states for all domain entities."""

    CREATED = 0
    INACTIVE = 1
    ACTIVE = 2
    EFFECTIVE = 3
    TERMINATED = 4

    @property
    def description(self) -> str:
        """Human-readable description of the state."""
        return _DESCRIPTIONS[self]


_DESCRIPTIONS: Final[Mapping[EntityState, str]] = MappingProxyType(
    {
        EntityState.CREATED: "Created but not yet active",
        EntityState.INACTIVE: "Temporarily inactive",
        EntityState.ACTIVE: "Active and available",
        EntityState.EFFECTIVE: "Effective and operational",
        EntityState.TERMINATED: "Soft deleted/terminated",
    }
)


class LifecycleEvent(str, Enum):
    """Events that drive an entity through its lifecycle."""

    ACTIVATE = "activate"
    DEACTIVATE = "deactivate"
    REACTIVATE = "reactivate"
    PROMOTE = "promote"
    DEMOTE = "demote"
    SOFT_DELETE = "soft_delete"
    RESTORE = "restore"


#: (from_state, event) -> to_state. Anything absent is an illegal transition.
TRANSITIONS: Final[Mapping[tuple[EntityState, LifecycleEvent], EntityState]] = MappingProxyType(
    {
        (EntityState.CREATED, LifecycleEvent.ACTIVATE): EntityState.ACTIVE,
        (EntityState.ACTIVE, LifecycleEvent.DEACTIVATE): EntityState.INACTIVE,
        (EntityState.INACTIVE, LifecycleEvent.REACTIVATE): EntityState.ACTIVE,
        (EntityState.ACTIVE, LifecycleEvent.PROMOTE): EntityState.EFFECTIVE,
        (EntityState.EFFECTIVE, LifecycleEvent.DEMOTE): EntityState.INACTIVE,
        (EntityState.ACTIVE, LifecycleEvent.SOFT_DELETE): EntityState.TERMINATED,
        (EntityState.INACTIVE, LifecycleEvent.SOFT_DELETE): EntityState.TERMINATED,
        (EntityState.EFFECTIVE, LifecycleEvent.SOFT_DELETE): EntityState.TERMINATED,
        (EntityState.TERMINATED, LifecycleEvent.RESTORE): EntityState.ACTIVE,
    }
)


def next_state(state: EntityState, event: LifecycleEvent) -> EntityState | None:
    """Return the target state for ``event`` fired in ``state``.

    Args:
        state: Current lifecycle state.
        event: Event being applied.

    Returns:
        EntityState | None: The resulting state, or ``None`` when the
        transition is not part of the table.
    """
    return TRANSITIONS.get((EntityState(state), event))


def allowed_events(state: EntityState) -> frozenset[LifecycleEvent]:
    """Return every event that is legal from ``state``."""
    current = EntityState(state)
    return frozenset(event for (origin, event) in TRANSITIONS if origin is current)
