# tests/unit/application/test_audit_policy.py
# Copyright (c) Diiwo.
# SPDX-License-Identifier: MIT
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import pytest

from diiwo_core.application import (
    AuditPolicy,
    ChangeKind,
    InMemoryChangeSet,
    resolve_actor_id,
)
from diiwo_core.config.settings import Settings
from diiwo_core.domain.entities import LifecycleRecord, OwnedRecord
from diiwo_core.domain.enums import EntityState
from diiwo_core.domain.interfaces import StaticActor


class _ExplodingActor:
    """Provider whose actor lookup fails."""

    actor_name = None
    actor_email = None
    is_authenticated = False

    @property
    def actor_id(self) -> uuid.UUID | None:
        raise LookupError("no request scope")

    async def has_role(self, role: str) -> bool:
        return False


@dataclass
class _PlainRow:
    """Entity without any capability; deletes are always physical."""

    name: str


@dataclass
class _PostalAddress:
    """Timestamped row whose ``state`` column is a region code."""

    created_at: datetime
    updated_at: datetime
    state: str = "CA"


def _snapshot(record: LifecycleRecord) -> dict[str, object]:
    return {"created_at": record.created_at, "created_by": record.created_by}


def test_insert_stamps_timestamps_and_actor(t0: datetime, actor_a: uuid.UUID) -> None:
    record = LifecycleRecord()
    changes = InMemoryChangeSet().add_insert(record)

    report = AuditPolicy().apply(changes, actor_a, now=t0)

    assert record.created_at == record.updated_at == t0
    assert record.created_by == record.updated_by == actor_a
    assert record.state is EntityState.ACTIVE
    assert report.inserted == 1 and report.total == 1
    assert report.actor_id == actor_a


def test_insert_leaves_constructed_state_untouched(t0: datetime) -> None:
    record = LifecycleRecord(state=EntityState.CREATED)
    AuditPolicy().apply(InMemoryChangeSet().add_insert(record), None, now=t0)
    assert record.state is EntityState.CREATED


def test_insert_without_actor_leaves_attribution_empty(t0: datetime) -> None:
    record = LifecycleRecord()
    AuditPolicy().apply(InMemoryChangeSet().add_insert(record), None, now=t0)

    assert record.created_at == t0
    assert record.created_by is None and record.updated_by is None


def test_update_protects_created_fields_against_forgery(
    t0: datetime, t1: datetime, actor_a: uuid.UUID, actor_b: uuid.UUID
) -> None:
    policy = AuditPolicy()
    record = LifecycleRecord()
    policy.apply(InMemoryChangeSet().add_insert(record), actor_a, now=t0)

    original = _snapshot(record)
    record.created_at = t0 - timedelta(days=365)
    record.created_by = actor_b
    changes = InMemoryChangeSet().add_update(record, original=original)

    report = policy.apply(changes, actor_b, now=t1)

    assert record.created_at == t0
    assert record.created_by == actor_a
    assert record.updated_at == t1
    assert record.updated_by == actor_b
    assert report.updated == 1
    assert changes.suppressed_fields(record) == {"created_at", "created_by"}


def test_update_without_actor_keeps_previous_updated_by(
    t0: datetime, t1: datetime, actor_a: uuid.UUID
) -> None:
    record = LifecycleRecord(created_at=t0, created_by=actor_a, updated_by=actor_a)
    changes = InMemoryChangeSet().add_update(record, original=_snapshot(record))

    AuditPolicy().apply(changes, None, now=t1)

    assert record.updated_by == actor_a
    assert record.updated_at == t1
    assert "created_by" in changes.suppressed_fields(record)


def test_update_overwrites_caller_supplied_updated_at(
    t0: datetime, t1: datetime, actor_a: uuid.UUID
) -> None:
    record = LifecycleRecord(created_at=t0, created_by=actor_a)
    record.updated_at = datetime(2999, 1, 1, tzinfo=UTC)
    changes = InMemoryChangeSet().add_update(record, original=_snapshot(record))

    AuditPolicy().apply(changes, actor_a, now=t1)

    assert record.updated_at == t1
    assert record.created_at == t0


def test_delete_of_soft_deletable_becomes_termination(
    t0: datetime, t1: datetime, actor_a: uuid.UUID, actor_b: uuid.UUID
) -> None:
    record = LifecycleRecord(created_at=t0, created_by=actor_a, updated_by=actor_a)
    changes = InMemoryChangeSet().add_delete(record, original=_snapshot(record))

    report = AuditPolicy().apply(changes, actor_b, now=t1)

    assert record.state is EntityState.TERMINATED
    assert record.updated_at == t1
    assert record.updated_by == actor_b
    assert record.created_by == actor_a
    assert not changes.is_deleted(record)
    assert changes.kind_of(record) is ChangeKind.UPDATE
    assert report.soft_deleted == 1 and report.hard_deleted == 0
    assert report.soft_deleted_entities == [record]


def test_delete_of_plain_entity_stays_physical(t0: datetime) -> None:
    row = _PlainRow(name="tmp")
    changes = InMemoryChangeSet().add_delete(row)

    report = AuditPolicy().apply(changes, None, now=t0)

    assert changes.is_deleted(row)
    assert report.hard_deleted == 1


def test_delete_of_entity_with_unrelated_state_column_stays_physical(t0: datetime) -> None:
    address = _PostalAddress(created_at=t0, updated_at=t0)
    changes = InMemoryChangeSet().add_delete(address)

    report = AuditPolicy().apply(changes, None, now=t0)

    assert changes.is_deleted(address)
    assert address.state == "CA"
    assert report.hard_deleted == 1 and report.soft_deleted == 0


def test_soft_delete_disabled_deletes_physically(t0: datetime) -> None:
    record = LifecycleRecord()
    changes = InMemoryChangeSet().add_delete(record)

    report = AuditPolicy(soft_delete=False).apply(changes, None, now=t0)

    assert changes.is_deleted(record)
    assert record.state is EntityState.ACTIVE
    assert report.hard_deleted == 1


def test_disabled_policy_is_a_no_op(t0: datetime, actor_a: uuid.UUID) -> None:
    record = LifecycleRecord()
    before = (record.created_at, record.updated_at)
    changes = InMemoryChangeSet().add_insert(record)

    report = AuditPolicy(enabled=False).apply(changes, actor_a, now=t0)

    assert (record.created_at, record.updated_at) == before
    assert record.created_by is None
    assert report.total == 0 and report.actor_id is None


def test_apply_is_idempotent_per_commit_attempt(
    t0: datetime, actor_a: uuid.UUID, actor_b: uuid.UUID
) -> None:
    record = LifecycleRecord(created_at=t0, created_by=actor_a)
    changes = InMemoryChangeSet().add_delete(record, original=_snapshot(record))
    policy = AuditPolicy()
    later = t0 + timedelta(minutes=1)

    first = policy.apply(changes, actor_b, now=later)
    second = policy.apply(changes, actor_b, now=later)

    assert first.soft_deleted == 1
    assert second.updated == 1
    assert record.state is EntityState.TERMINATED
    assert record.updated_at == later
    assert record.created_by == actor_a


def test_each_entity_is_processed_once_in_order(t0: datetime) -> None:
    a, b, c = LifecycleRecord(), OwnedRecord(), LifecycleRecord()
    changes = InMemoryChangeSet().add_insert(a).add_update(b).add_delete(c)

    report = AuditPolicy().apply(changes, None, now=t0)

    assert [e.entity for e in changes.entries()] == [a, b, c]
    assert (report.inserted, report.updated, report.soft_deleted) == (1, 1, 1)


def test_policy_uses_clock_when_now_is_omitted(t0: datetime) -> None:
    record = LifecycleRecord()
    AuditPolicy(clock=lambda: t0).apply(InMemoryChangeSet().add_insert(record))
    assert record.created_at == t0


def test_provider_actor_is_resolved_once(t0: datetime, actor_a: uuid.UUID) -> None:
    record = LifecycleRecord()
    actor = StaticActor(actor_id=actor_a)
    report = AuditPolicy().apply(InMemoryChangeSet().add_insert(record), actor, now=t0)

    assert record.created_by == actor_a
    assert report.actor_id == actor_a


def test_failing_provider_degrades_to_no_actor(
    t0: datetime, caplog: pytest.LogCaptureFixture
) -> None:
    record = LifecycleRecord()

    with caplog.at_level(logging.WARNING, logger="diiwo_core.application.audit"):
        report = AuditPolicy().apply(
            InMemoryChangeSet().add_insert(record), _ExplodingActor(), now=t0
        )

    assert report.actor_id is None
    assert record.created_by is None
    assert record.created_at == t0
    assert any("Current-actor lookup failed" in r.getMessage() for r in caplog.records)


def test_strict_actor_resolution_propagates(t0: datetime) -> None:
    policy = AuditPolicy(strict_actor_resolution=True)
    with pytest.raises(LookupError):
        policy.apply(InMemoryChangeSet().add_insert(LifecycleRecord()), _ExplodingActor(), now=t0)


def test_resolve_actor_id_accepts_ids_and_none(actor_a: uuid.UUID) -> None:
    assert resolve_actor_id(actor_a) == actor_a
    assert resolve_actor_id(None) is None
    assert resolve_actor_id(StaticActor()) is None


def test_from_settings_reads_audit_toggles() -> None:
    settings = Settings(
        AUDIT_ENABLED=False,
        AUDIT_SOFT_DELETE_ENABLED=False,
        AUDIT_STRICT_ACTOR_RESOLUTION=True,
    )

    policy = AuditPolicy.from_settings(settings)

    assert policy.enabled is False
    assert policy.soft_delete is False
    assert policy.strict_actor_resolution is True
    assert AuditPolicy.from_settings(settings, enabled=True).enabled is True


def test_insert_update_scenario_keeps_first_writer(actor_a: uuid.UUID, actor_b: uuid.UUID) -> None:
    insert_time = datetime(2025, 3, 1, 9, 0, tzinfo=UTC)
    update_time = insert_time + timedelta(hours=2)
    policy = AuditPolicy()

    record = LifecycleRecord()
    assert record.state is EntityState.ACTIVE
    assert record.created_at == record.updated_at
    policy.apply(InMemoryChangeSet().add_insert(record), actor_a, now=insert_time)

    persisted = _snapshot(record)
    record.created_at = datetime(2000, 1, 1, tzinfo=UTC)
    policy.apply(
        InMemoryChangeSet().add_update(record, original=persisted), actor_b, now=update_time
    )

    assert record.created_by == actor_a
    assert record.created_at == insert_time
    assert record.updated_by == actor_b
    assert record.updated_at == update_time
