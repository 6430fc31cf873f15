# tests/unit/adapters/test_sqlalchemy_models.py
# Copyright (c) Diiwo.
# SPDX-License-Identifier: MIT
from __future__ import annotations

import uuid
from datetime import UTC, datetime, timedelta, timezone

import pytest
from sqlalchemy import String
from sqlalchemy.dialects import sqlite
from sqlalchemy.orm import Mapped, mapped_column

from diiwo_core.adapters.sqlalchemy import (
    AuditableEntity,
    EntityStateType,
    UserOwnedEntity,
    UtcDateTime,
    metadata,
)
from diiwo_core.domain.enums import EntityState
from diiwo_core.domain.interfaces import Capability, capabilities_of


class Document(UserOwnedEntity):
    __tablename__ = "unit_documents"

    title: Mapped[str] = mapped_column(String(100), default="")


class Heartbeat(AuditableEntity):
    __tablename__ = "unit_heartbeats"


def test_construction_assigns_identity_timestamps_and_state() -> None:
    doc = Document(title="notes")

    assert isinstance(doc.id, uuid.UUID)
    assert doc.state is EntityState.ACTIVE
    assert doc.created_at == doc.updated_at
    assert doc.created_at.tzinfo is not None
    assert doc.owner_id is None


def test_explicit_values_override_defaults(t0: datetime, actor_a: uuid.UUID) -> None:
    doc = Document(created_at=t0, state=EntityState.CREATED, owner_id=actor_a)

    assert doc.created_at == doc.updated_at == t0
    assert doc.state is EntityState.CREATED
    assert doc.is_owned_by(actor_a)


def test_auditable_entity_has_no_state() -> None:
    beat = Heartbeat()
    assert capabilities_of(beat) == Capability.AUDIT
    assert not hasattr(beat, "state")


def test_domain_entity_capabilities_and_behaviour(t0: datetime) -> None:
    doc = Document()
    assert capabilities_of(doc) == (
        Capability.SOFT_DELETE | Capability.AUDIT | Capability.USER_TRACKING | Capability.OWNERSHIP
    )

    doc.soft_delete(now=doc.updated_at + timedelta(seconds=1))
    assert doc.is_terminated
    doc.restore()
    assert doc.is_active


def test_naming_conventions_are_applied() -> None:
    table = metadata.tables["unit_documents"]
    assert table.primary_key.name == "pk_unit_documents"
    assert "ix_unit_documents_state" in {ix.name for ix in table.indexes}


def test_repr_mentions_state() -> None:
    doc = Document()
    assert repr(doc) == f"Document(id={doc.id}, state=ACTIVE)"


def test_utc_datetime_normalizes_binds() -> None:
    col_type = UtcDateTime()
    dialect = sqlite.dialect()
    plus_two = timezone(timedelta(hours=2))

    bound = col_type.process_bind_param(datetime(2025, 1, 1, 14, 0, tzinfo=plus_two), dialect)
    assert bound == datetime(2025, 1, 1, 12, 0, tzinfo=UTC)
    assert bound.tzinfo is UTC

    naive = col_type.process_bind_param(datetime(2025, 1, 1, 12, 0), dialect)
    assert naive == datetime(2025, 1, 1, 12, 0, tzinfo=UTC)

    assert col_type.process_bind_param(None, dialect) is None
    with pytest.raises(TypeError):
        col_type.process_bind_param("2025-01-01", dialect)  # type: ignore[arg-type]


def test_utc_datetime_tags_loaded_values() -> None:
    loaded = UtcDateTime().process_result_value(datetime(2025, 1, 1, 12, 0), sqlite.dialect())
    assert loaded == datetime(2025, 1, 1, 12, 0, tzinfo=UTC)
    assert loaded.tzinfo is UTC


def test_entity_state_type_round_trip() -> None:
    col_type = EntityStateType()
    dialect = sqlite.dialect()

    assert col_type.process_bind_param(EntityState.TERMINATED, dialect) == 4
    assert col_type.process_bind_param(2, dialect) == 2
    assert col_type.process_result_value(3, dialect) is EntityState.EFFECTIVE
    assert col_type.process_result_value(None, dialect) is None
    with pytest.raises(ValueError):
        col_type.process_bind_param(9, dialect)
