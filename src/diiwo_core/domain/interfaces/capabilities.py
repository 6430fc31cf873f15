# Copyright (c) Diiwo.
# SPDX-License-Identifier: MIT
"""Entity capability protocols (Domain Layer).

Purpose:
    Describe what an entity *can do* as independent, structurally checked
    protocols instead of a fixed inheritance chain. Any object exposing the
    right attributes gains the capability, whether it is a SQLAlchemy model,
    a dataclass, or a third-party type that cannot inherit our bases.

    Capabilities:
        * SoftDeletable: carries a lifecycle ``state`` and the ``soft_delete`` /
                         ``restore`` operations (a bare ``state`` column is
                         not enough).
        * Auditable:     carries ``created_at`` / ``updated_at``.
        * UserTracked:   carries ``created_by`` / ``updated_by``.
        * UserOwned:     carries an optional ``owner_id``.

Layer:
    domain/interfaces
"""

from __future__ import annotations

from datetime import datetime
from enum import Flag, auto
from typing import Any, Protocol, runtime_checkable
from uuid import UUID

from diiwo_core.domain.enums.entity_state import EntityState

__all__ = [
    "SoftDeletable",
    "Auditable",
    "UserTracked",
    "UserOwned",
    "Capability",
    "capabilities_of",
    "supports",
]


@runtime_checkable
class SoftDeletable(Protocol):
    """Entity whose deletion is a transition to ``TERMINATED``."""

    state: EntityState

    def soft_delete(self, now: datetime | None = None) -> None: ...

    def restore(self, now: datetime | None = None) -> None: ...


@runtime_checkable
class Auditable(Protocol):
    """Entity with creation/modification timestamps."""

    created_at: datetime
    updated_at: datetime


@runtime_checkable
class UserTracked(Protocol):
    """Entity attributed to the actors that created and last modified it."""

    created_by: UUID | None
    updated_by: UUID | None


@runtime_checkable
class UserOwned(Protocol):
    """Entity that may belong to a specific actor (``None`` = global)."""

    owner_id: UUID | None


class Capability(Flag):
    """Flag set returned by :func:`capabilities_of`."""

    NONE = 0
    SOFT_DELETE = auto()
    AUDIT = auto()
    USER_TRACKING = auto()
    OWNERSHIP = auto()


_PROTOCOLS: tuple[tuple[Capability, type[Any]], ...] = (
    (Capability.SOFT_DELETE, SoftDeletable),
    (Capability.AUDIT, Auditable),
    (Capability.USER_TRACKING, UserTracked),
    (Capability.OWNERSHIP, UserOwned),
)


def capabilities_of(entity: object) -> Capability:
    """Return every capability ``entity`` structurally supports."""
    found = Capability.NONE
    for capability, protocol in _PROTOCOLS:
        if isinstance(entity, protocol):
            found |= capability
    return found


def supports(entity: object, capability: Capability) -> bool:
    """Return True if ``entity`` supports all flags in ``capability``."""
    return capability in capabilities_of(entity)
