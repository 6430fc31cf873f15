# tests/conftest.py
# Copyright (c) Diiwo.
# SPDX-License-Identifier: MIT
from __future__ import annotations

import uuid
from collections.abc import Iterator
from datetime import UTC, datetime

import pytest

from diiwo_core.config.settings import get_settings


@pytest.fixture
def anyio_backend() -> str:
    """Run anyio-marked tests on asyncio only."""
    return "asyncio"


@pytest.fixture(autouse=True)
def _fresh_settings_cache() -> Iterator[None]:
    """Each test sees settings built from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def t0() -> datetime:
    return datetime(2025, 1, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def t1() -> datetime:
    return datetime(2025, 1, 2, 12, 0, tzinfo=UTC)


@pytest.fixture
def actor_a() -> uuid.UUID:
    return uuid.UUID("00000000-0000-4000-8000-00000000000a")


@pytest.fixture
def actor_b() -> uuid.UUID:
    return uuid.UUID("00000000-0000-4000-8000-00000000000b")
