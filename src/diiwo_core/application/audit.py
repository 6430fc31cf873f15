# src/diiwo_core/application/audit.py
# Copyright (c) Diiwo.
# SPDX-License-Identifier: MIT
"""Audit enforcement policy (Application Layer).

Purpose:
    Decide which audit-field mutations must happen before a unit of work is
    committed, and redirect deletes of soft-deletable entities into a
    transition to ``TERMINATED``.

    The policy is persistence-agnostic. It talks to a :class:`ChangeSet`
    (what is about to be written, plus two hooks: cancel a pending delete,
    and keep a field out of the write) and receives the current actor as an
    explicit argument.

Per change kind:
    * INSERT: ``created_at = updated_at = now``; with a known actor,
      ``created_by = updated_by = actor``. ``state`` is left as constructed.
    * UPDATE: ``updated_at = now`` and ``created_at`` protected; with a
      known actor ``updated_by = actor``; ``created_by`` always protected.
    * DELETE: soft-deletable entities are kept, set to ``TERMINATED`` and
      refreshed like an UPDATE. Anything else is deleted physically.

Layer:
    application
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any, Protocol, TypeAlias, runtime_checkable
from uuid import UUID

from diiwo_core.domain.entities.lifecycle import utc_now
from diiwo_core.domain.enums.entity_state import EntityState
from diiwo_core.domain.interfaces.capabilities import Capability, capabilities_of
from diiwo_core.domain.interfaces.current_actor import CurrentActorProvider

if TYPE_CHECKING:
    from diiwo_core.config.settings import Settings

__all__ = [
    "ActorLike",
    "ChangeKind",
    "ChangeEntry",
    "ChangeSet",
    "AuditReport",
    "AuditPolicy",
    "resolve_actor_id",
    "CREATED_AT",
    "CREATED_BY",
]

logger = logging.getLogger(__name__)

CREATED_AT = "created_at"
CREATED_BY = "created_by"

ActorLike: TypeAlias = "CurrentActorProvider | UUID | None"


class ChangeKind(str, Enum):
    """Classification of a pending write."""

    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(frozen=True, slots=True)
class ChangeEntry:
    """One tracked entity and the write about to happen to it."""

    entity: Any
    kind: ChangeKind


@runtime_checkable
class ChangeSet(Protocol):
    """Pending writes of one commit attempt, as seen by the audit policy."""

    def entries(self) -> Iterable[ChangeEntry]:
        """Return tracked (entity, kind) pairs in a stable order."""
        ...

    def cancel_delete(self, entity: Any) -> None:
        """Drop the pending physical delete of ``entity``; it will be written as modified."""
        ...

    def protect_field(self, entity: Any, name: str) -> None:
        """Keep ``name`` on ``entity`` from being written in this commit."""
        ...


@dataclass(slots=True)
class AuditReport:
    """Outcome of one :meth:`AuditPolicy.apply` call."""

    actor_id: UUID | None = None
    inserted: int = 0
    updated: int = 0
    soft_deleted: int = 0
    hard_deleted: int = 0
    soft_deleted_entities: list[Any] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.inserted + self.updated + self.soft_deleted + self.hard_deleted


def resolve_actor_id(actor: ActorLike, *, strict: bool = False) -> UUID | None:
    """Return the actor id to attribute writes to.

    Args:
        actor: A provider, a bare actor id, or None.
        strict: Re-raise provider failures instead of degrading to None.

    Returns:
        UUID | None: The actor id, or None when no actor is known.
    """
    if actor is None or isinstance(actor, UUID):
        return actor
    try:
        return actor.actor_id
    except Exception:
        if strict:
            raise
        logger.warning(
            "Current-actor lookup failed; auditing without an actor",
            exc_info=True,
        )
        return None


class AuditPolicy:
    """Populate audit fields and convert deletes for one change set at a time.

    Args:
        enabled: When False, :meth:`apply` is a no-op.
        soft_delete: Convert deletes of soft-deletable entities.
        strict_actor_resolution: Propagate current-actor lookup failures.
        clock: Source of "now"; defaults to UTC wall-clock.
    """

    def __init__(
        self,
        *,
        enabled: bool = True,
        soft_delete: bool = True,
        strict_actor_resolution: bool = False,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.enabled = enabled
        self.soft_delete = soft_delete
        self.strict_actor_resolution = strict_actor_resolution
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: Settings, **overrides: Any) -> AuditPolicy:
        """Build a policy from configuration, optionally overriding fields."""
        options: dict[str, Any] = {
            "enabled": settings.audit_enabled,
            "soft_delete": settings.soft_delete_enabled,
            "strict_actor_resolution": settings.strict_actor_resolution,
        }
        options.update(overrides)
        return cls(**options)

    def apply(
        self,
        change_set: ChangeSet,
        actor: ActorLike = None,
        *,
        now: datetime | None = None,
    ) -> AuditReport:
        """Mutate audit fields of every tracked entity before the write.

        Args:
            change_set: Pending writes of the current commit attempt.
            actor: Current actor (provider or bare id); None for anonymous.
            now: Timestamp to stamp; defaults to the policy clock.

        Returns:
            AuditReport: Counts per outcome and the resolved actor id.
        """
        if not self.enabled:
            return AuditReport()

        actor_id = resolve_actor_id(actor, strict=self.strict_actor_resolution)
        stamp = now if now is not None else self._clock()
        report = AuditReport(actor_id=actor_id)

        # Snapshot first: cancelling deletes mutates the underlying change set.
        seen: set[int] = set()
        for entry in list(change_set.entries()):
            if id(entry.entity) in seen:
                continue
            seen.add(id(entry.entity))
            self._apply_entry(change_set, entry, actor_id, stamp, report)

        if report.total:
            logger.debug(
                "Audit fields applied",
                extra={
                    "extra": {
                        "actor_id": str(actor_id) if actor_id else None,
                        "inserted": report.inserted,
                        "updated": report.updated,
                        "soft_deleted": report.soft_deleted,
                        "hard_deleted": report.hard_deleted,
                    }
                },
            )
        return report

    def _apply_entry(
        self,
        change_set: ChangeSet,
        entry: ChangeEntry,
        actor_id: UUID | None,
        now: datetime,
        report: AuditReport,
    ) -> None:
        entity = entry.entity
        caps = capabilities_of(entity)

        if entry.kind is ChangeKind.INSERT:
            if Capability.AUDIT in caps:
                entity.created_at = now
                entity.updated_at = now
            if Capability.USER_TRACKING in caps and actor_id is not None:
                entity.created_by = actor_id
                entity.updated_by = actor_id
            report.inserted += 1
            return

        if entry.kind is ChangeKind.UPDATE:
            self._refresh(change_set, entity, caps, actor_id, now)
            report.updated += 1
            return

        if self.soft_delete and Capability.SOFT_DELETE in caps:
            change_set.cancel_delete(entity)
            entity.state = EntityState.TERMINATED
            self._refresh(change_set, entity, caps, actor_id, now)
            report.soft_deleted += 1
            report.soft_deleted_entities.append(entity)
            return

        report.hard_deleted += 1

    @staticmethod
    def _refresh(
        change_set: ChangeSet,
        entity: Any,
        caps: Capability,
        actor_id: UUID | None,
        now: datetime,
    ) -> None:
        if Capability.AUDIT in caps:
            entity.updated_at = now
            change_set.protect_field(entity, CREATED_AT)
        if Capability.USER_TRACKING in caps:
            if actor_id is not None:
                entity.updated_by = actor_id
            change_set.protect_field(entity, CREATED_BY)
