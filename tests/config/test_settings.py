# tests/config/test_settings.py
# Copyright (c) Diiwo.
# SPDX-License-Identifier: MIT
from __future__ import annotations

import pytest
from pydantic import ValidationError

from diiwo_core.config.settings import Environment, Settings, get_settings

_AUDIT_ENV = (
    "ENVIRONMENT",
    "SERVICE_NAME",
    "LOG_LEVEL",
    "DB_SCHEMA",
    "AUDIT_ENABLED",
    "AUDIT_SOFT_DELETE_ENABLED",
    "AUDIT_STRICT_ACTOR_RESOLUTION",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _AUDIT_ENV:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    s = Settings()

    assert s.environment == Environment.DEVELOPMENT
    assert s.service_name == "diiwo-core"
    assert s.db_schema is None
    assert s.log_level is None
    assert s.audit_enabled is True
    assert s.soft_delete_enabled is True
    assert s.strict_actor_resolution is False


def test_settings_read_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Settings should hydrate deterministically from environment variables."""
    monkeypatch.setenv("ENVIRONMENT", "test")
    monkeypatch.setenv("SERVICE_NAME", "billing")
    monkeypatch.setenv("DB_SCHEMA", "core")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("AUDIT_ENABLED", "false")
    monkeypatch.setenv("AUDIT_SOFT_DELETE_ENABLED", "0")
    monkeypatch.setenv("AUDIT_STRICT_ACTOR_RESOLUTION", "true")

    s = Settings()

    assert s.environment == Environment.TEST
    assert s.service_name == "billing"
    assert s.db_schema == "core"
    assert s.log_level == "DEBUG"
    assert s.audit_enabled is False
    assert s.soft_delete_enabled is False
    assert s.strict_actor_resolution is True


def test_blank_schema_means_no_schema(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DB_SCHEMA", "   ")
    assert Settings().db_schema is None


def test_unrelated_variables_are_ignored(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "postgresql://example")
    Settings()


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("LOG_LEVEL", "LOUD"),
        ("ENVIRONMENT", "moon"),
        ("AUDIT_ENABLED", "maybe"),
        ("SERVICE_NAME", ""),
    ],
)
def test_invalid_values_are_rejected(
    monkeypatch: pytest.MonkeyPatch, name: str, value: str
) -> None:
    monkeypatch.setenv(name, value)
    with pytest.raises(ValidationError):
        Settings()


def test_get_settings_is_cached() -> None:
    assert get_settings() is get_settings()


def test_get_settings_wraps_validation_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "LOUD")
    with pytest.raises(RuntimeError, match="Invalid configuration"):
        get_settings()
