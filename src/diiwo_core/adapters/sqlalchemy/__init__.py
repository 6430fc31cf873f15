# Copyright (c) Diiwo.
# SPDX-License-Identifier: MIT
"""SQLAlchemy adapter: declarative base, column types, flush-time auditing, Unit of Work."""

from __future__ import annotations

from .change_set import SessionChangeSet
from .listener import AuditListener, install_audit_listener
from .models import (
    AuditableEntity,
    Base,
    BaseEntity,
    DomainEntity,
    IdentityMixin,
    LifecycleStateMixin,
    TimestampMixin,
    UserOwnedEntity,
    UserOwnedMixin,
    UserTrackedEntity,
    UserTrackedMixin,
    metadata,
)
from .types import EntityStateType, UtcDateTime
from .uow import SqlAlchemyUnitOfWork

__all__ = [
    "AuditListener",
    "AuditableEntity",
    "Base",
    "BaseEntity",
    "DomainEntity",
    "EntityStateType",
    "IdentityMixin",
    "LifecycleStateMixin",
    "SessionChangeSet",
    "SqlAlchemyUnitOfWork",
    "TimestampMixin",
    "UserOwnedEntity",
    "UserOwnedMixin",
    "UserTrackedEntity",
    "UserTrackedMixin",
    "UtcDateTime",
    "install_audit_listener",
    "metadata",
]
