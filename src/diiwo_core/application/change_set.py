# src/diiwo_core/application/change_set.py
# Copyright (c) Diiwo.
# SPDX-License-Identifier: MIT
"""ORM-free change set.

Collects pending writes for persistence layers that are not SQLAlchemy
(document stores, plain repositories, tests). Callers that want created-*
fields to be guarded on update pass a snapshot of the persisted values as
``original``; :meth:`InMemoryChangeSet.protect_field` restores from it.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from .audit import ChangeEntry, ChangeKind

__all__ = ["InMemoryChangeSet"]


class InMemoryChangeSet:
    """List-backed :class:`~diiwo_core.application.audit.ChangeSet`."""

    def __init__(self) -> None:
        self._entries: list[ChangeEntry] = []
        self._originals: dict[int, dict[str, Any]] = {}
        self._suppressed: dict[int, set[str]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ChangeEntry]:
        return iter(self.entries())

    # ------------------------------------------------------------------
    # Recording
    # ------------------------------------------------------------------

    def add_insert(self, entity: Any) -> InMemoryChangeSet:
        return self._record(entity, ChangeKind.INSERT, None)

    def add_update(
        self, entity: Any, *, original: Mapping[str, Any] | None = None
    ) -> InMemoryChangeSet:
        """Record a pending update.

        Args:
            entity: Modified entity.
            original: Persisted values of fields the policy may protect
                (typically ``created_at`` and ``created_by``).
        """
        return self._record(entity, ChangeKind.UPDATE, original)

    def add_delete(
        self, entity: Any, *, original: Mapping[str, Any] | None = None
    ) -> InMemoryChangeSet:
        return self._record(entity, ChangeKind.DELETE, original)

    def _record(
        self, entity: Any, kind: ChangeKind, original: Mapping[str, Any] | None
    ) -> InMemoryChangeSet:
        if self._index_of(entity) is not None:
            raise ValueError(f"Entity {entity!r} is already tracked in this change set")
        self._entries.append(ChangeEntry(entity=entity, kind=kind))
        if original:
            self._originals[id(entity)] = dict(original)
        return self

    # ------------------------------------------------------------------
    # ChangeSet protocol
    # ------------------------------------------------------------------

    def entries(self) -> tuple[ChangeEntry, ...]:
        return tuple(self._entries)

    def cancel_delete(self, entity: Any) -> None:
        """Turn the pending delete of ``entity`` into an update, keeping its position."""
        index = self._index_of(entity)
        if index is None or self._entries[index].kind is not ChangeKind.DELETE:
            return
        self._entries[index] = ChangeEntry(entity=entity, kind=ChangeKind.UPDATE)

    def protect_field(self, entity: Any, name: str) -> None:
        """Restore ``name`` from the recorded original (if any) and mark it suppressed."""
        original = self._originals.get(id(entity), {})
        if name in original:
            setattr(entity, name, original[name])
        self._suppressed.setdefault(id(entity), set()).add(name)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def is_deleted(self, entity: Any) -> bool:
        """True while a physical delete of ``entity`` is still pending."""
        index = self._index_of(entity)
        return index is not None and self._entries[index].kind is ChangeKind.DELETE

    def kind_of(self, entity: Any) -> ChangeKind | None:
        index = self._index_of(entity)
        return None if index is None else self._entries[index].kind

    def suppressed_fields(self, entity: Any) -> frozenset[str]:
        return frozenset(self._suppressed.get(id(entity), ()))

    def _index_of(self, entity: Any) -> int | None:
        for index, entry in enumerate(self._entries):
            if entry.entity is entity:
                return index
        return None
