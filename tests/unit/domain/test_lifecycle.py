# tests/unit/domain/test_lifecycle.py
# Copyright (c) Diiwo.
# SPDX-License-Identifier: MIT
from __future__ import annotations

import uuid
from datetime import UTC, datetime, timedelta

import pytest

from diiwo_core.domain.entities import LifecycleRecord, OwnedRecord, advance_timestamp
from diiwo_core.domain.enums import TRANSITIONS, EntityState, LifecycleEvent
from diiwo_core.domain.results import ErrorKind, Failure, Success


def test_construction_defaults() -> None:
    record = LifecycleRecord()

    assert record.state is EntityState.ACTIVE
    assert isinstance(record.id, uuid.UUID)
    assert record.created_at == record.updated_at
    assert record.created_at.tzinfo is not None
    assert record.created_by is None and record.updated_by is None


def test_explicit_created_at_seeds_updated_at(t0: datetime) -> None:
    record = LifecycleRecord(created_at=t0)
    assert record.updated_at == t0


def test_equality_is_by_type_and_id() -> None:
    shared = uuid.uuid4()
    assert LifecycleRecord(id=shared) == LifecycleRecord(id=shared)
    assert LifecycleRecord(id=shared) != OwnedRecord(id=shared)
    assert len({LifecycleRecord(id=shared), LifecycleRecord(id=shared)}) == 1


@pytest.mark.parametrize("initial", list(EntityState))
def test_soft_delete_is_idempotent_and_monotonic(initial: EntityState, t0: datetime) -> None:
    record = LifecycleRecord(created_at=t0, state=initial)
    stamps = [t0 + timedelta(minutes=5), t0 + timedelta(minutes=1), t0 + timedelta(minutes=9)]

    previous = record.updated_at
    for stamp in stamps:
        record.soft_delete(now=stamp)
        assert record.state is EntityState.TERMINATED
        assert record.updated_at >= previous
        previous = record.updated_at

    assert record.updated_at == t0 + timedelta(minutes=9)
    assert record.is_terminated


@pytest.mark.parametrize("initial", list(EntityState))
def test_restore_always_yields_active(initial: EntityState, t0: datetime) -> None:
    record = LifecycleRecord(created_at=t0, state=initial)
    record.restore(now=t0 + timedelta(seconds=1))
    assert record.state is EntityState.ACTIVE
    assert record.is_active
    assert record.updated_at == t0 + timedelta(seconds=1)


def test_advance_timestamp_never_moves_backwards(t0: datetime) -> None:
    earlier = t0 - timedelta(days=1)
    assert advance_timestamp(t0, earlier) == t0
    assert advance_timestamp(None, earlier) == earlier
    naive = datetime(2024, 1, 1)
    assert advance_timestamp(naive, t0) == t0


@pytest.mark.parametrize("state", list(EntityState))
@pytest.mark.parametrize("event", list(LifecycleEvent))
def test_fire_accepts_exactly_the_transition_table(
    state: EntityState, event: LifecycleEvent, t0: datetime
) -> None:
    record = LifecycleRecord(created_at=t0, state=state)
    later = t0 + timedelta(hours=1)

    result = record.fire(event, now=later)

    expected = TRANSITIONS.get((state, event))
    if expected is None:
        assert isinstance(result, Failure)
        assert result.kind is ErrorKind.BUSINESS
        assert result.code == "ILLEGAL_TRANSITION"
        assert record.state is state
        assert record.updated_at == t0
    else:
        assert isinstance(result, Success)
        assert result.value is expected
        assert record.state is expected
        assert record.updated_at == later


def test_convenience_wrappers_delegate_to_fire(t0: datetime) -> None:
    record = LifecycleRecord(created_at=t0, state=EntityState.CREATED)

    assert record.activate().is_success
    assert record.promote().is_success
    assert record.is_effective
    assert record.demote().is_success
    assert record.is_inactive
    assert record.reactivate().is_success
    assert record.deactivate().is_success

    failed = record.promote()
    assert failed.is_failure
    assert record.is_inactive


def test_illegal_transition_failure_carries_context() -> None:
    record = LifecycleRecord(state=EntityState.TERMINATED)
    result = record.fire(LifecycleEvent.PROMOTE)

    assert isinstance(result, Failure)
    assert result.details == {"state": "TERMINATED", "event": "promote"}


def test_global_entity_is_owned_by_everyone() -> None:
    record = OwnedRecord()
    assert record.is_global
    assert record.is_owned_by(None)
    assert record.is_owned_by(uuid.uuid4())


def test_owned_entity_is_owned_only_by_its_owner(actor_a: uuid.UUID, actor_b: uuid.UUID) -> None:
    record = OwnedRecord(owner_id=actor_a)
    assert not record.is_global
    assert record.is_owned_by(actor_a)
    assert not record.is_owned_by(actor_b)
    assert not record.is_owned_by(None)


def test_records_are_utc_aware() -> None:
    record = LifecycleRecord()
    assert record.created_at.utcoffset() == UTC.utcoffset(None)
