# Copyright (c) Diiwo.
# SPDX-License-Identifier: MIT
"""diiwo-core: lifecycle-aware entities with flush-time auditing.

The domain model and audit policy are importable from here. The SQLAlchemy
adapter lives in :mod:`diiwo_core.adapters.sqlalchemy` and the response
envelopes in :mod:`diiwo_core.adapters.schemas.http`.
"""

from __future__ import annotations

from diiwo_core.application import AuditPolicy, AuditReport, InMemoryChangeSet
from diiwo_core.domain.entities import LifecycleRecord, OwnedRecord
from diiwo_core.domain.enums import EntityState, LifecycleEvent
from diiwo_core.domain.interfaces import ANONYMOUS, Capability, StaticActor, capabilities_of
from diiwo_core.domain.results import Failure, Result, Success

__version__ = "0.1.0"

__all__ = [
    "ANONYMOUS",
    "AuditPolicy",
    "AuditReport",
    "Capability",
    "EntityState",
    "Failure",
    "InMemoryChangeSet",
    "LifecycleEvent",
    "LifecycleRecord",
    "OwnedRecord",
    "Result",
    "StaticActor",
    "Success",
    "__version__",
    "capabilities_of",
]
