# src/diiwo_core/adapters/sqlalchemy/change_set.py
# Copyright (c) Diiwo.
# SPDX-License-Identifier: MIT
"""Session-backed change set.

Purpose:
    Expose the pending writes of a SQLAlchemy ``Session`` to the audit policy
    from inside ``before_flush``:

        * ``session.new``                                -> INSERT
        * modified members of the identity map (in map order) -> UPDATE
        * ``session.deleted``                            -> DELETE

    ``cancel_delete`` re-adds the instance, which drops the pending DELETE so
    the row is written as an UPDATE instead. ``protect_field`` puts back the
    committed value (or expires the attribute when no committed value was
    loaded) so the column is left out of the UPDATE.

Layer:
    adapters/sqlalchemy
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import inspect
from sqlalchemy.orm import Session
from sqlalchemy.orm.attributes import set_committed_value

from diiwo_core.application.audit import ChangeEntry, ChangeKind

__all__ = ["SessionChangeSet"]


class SessionChangeSet:
    """:class:`~diiwo_core.application.audit.ChangeSet` over a sync ``Session``."""

    def __init__(self, session: Session) -> None:
        self._session = session

    @property
    def session(self) -> Session:
        return self._session

    def entries(self) -> list[ChangeEntry]:
        session = self._session
        deleted = session.deleted
        dirty = session.dirty

        entries = [ChangeEntry(entity=obj, kind=ChangeKind.INSERT) for obj in session.new]
        for obj in list(session.identity_map.values()):
            if obj in deleted or obj not in dirty:
                continue
            if session.is_modified(obj, include_collections=False):
                entries.append(ChangeEntry(entity=obj, kind=ChangeKind.UPDATE))
        entries.extend(ChangeEntry(entity=obj, kind=ChangeKind.DELETE) for obj in deleted)
        return entries

    def cancel_delete(self, entity: Any) -> None:
        if entity in self._session.deleted:
            self._session.add(entity)

    def protect_field(self, entity: Any, name: str) -> None:
        state = inspect(entity)
        if state.transient or state.pending or name not in state.mapper.column_attrs:
            return

        history = state.attrs[name].history
        if not history.has_changes():
            return
        if history.deleted:
            set_committed_value(entity, name, history.deleted[0])
        else:
            self._session.expire(entity, [name])
