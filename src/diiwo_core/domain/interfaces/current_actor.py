# Copyright (c) Diiwo.
# SPDX-License-Identifier: MIT
"""Current-actor provider contract (Domain Layer).

Purpose:
    Describe the identity responsible for a write. Web layers implement this
    protocol on top of their authentication principal; the audit policy only
    reads ``actor_id``.

    The actor is always passed explicitly to the code that needs it. Nothing
    in this package looks it up from ambient or request-global state.

Layer:
    domain/interfaces
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable
from uuid import UUID

__all__ = ["CurrentActorProvider", "StaticActor", "ANONYMOUS"]


@runtime_checkable
class CurrentActorProvider(Protocol):
    """Interface for the current actor (user or system identity)."""

    @property
    def actor_id(self) -> UUID | None:
        """ID of the current authenticated actor."""
        ...

    @property
    def actor_name(self) -> str | None:
        """Display name of the current actor."""
        ...

    @property
    def actor_email(self) -> str | None:
        """Email of the current actor."""
        ...

    @property
    def is_authenticated(self) -> bool:
        """Whether an actor is currently authenticated."""
        ...

    async def has_role(self, role: str) -> bool:
        """Return True if the current actor holds ``role``."""
        ...


@dataclass(frozen=True, slots=True)
class StaticActor:
    """Immutable actor snapshot implementing :class:`CurrentActorProvider`.

    Args:
        actor_id: Actor identifier, or None when unauthenticated.
        actor_name: Optional display name.
        actor_email: Optional email.
        roles: Role names granted to the actor.
    """

    actor_id: UUID | None = None
    actor_name: str | None = None
    actor_email: str | None = None
    roles: frozenset[str] = field(default_factory=frozenset)

    @property
    def is_authenticated(self) -> bool:
        return self.actor_id is not None

    async def has_role(self, role: str) -> bool:
        return self.is_authenticated and role in self.roles


ANONYMOUS = StaticActor()
