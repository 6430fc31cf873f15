# Copyright (c) Diiwo.
# SPDX-License-Identifier: MIT
"""Application layer: audit enforcement over persistence-agnostic change sets."""

from __future__ import annotations

from .audit import (
    CREATED_AT,
    CREATED_BY,
    AuditPolicy,
    AuditReport,
    ChangeEntry,
    ChangeKind,
    ChangeSet,
    resolve_actor_id,
)
from .change_set import InMemoryChangeSet
from .uow import UnitOfWork, run_in_uow

__all__ = [
    "CREATED_AT",
    "CREATED_BY",
    "AuditPolicy",
    "AuditReport",
    "ChangeEntry",
    "ChangeKind",
    "ChangeSet",
    "InMemoryChangeSet",
    "UnitOfWork",
    "resolve_actor_id",
    "run_in_uow",
]
