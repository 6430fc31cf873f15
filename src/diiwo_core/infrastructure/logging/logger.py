# src/diiwo_core/infrastructure/logging/logger.py
# Copyright (c) Diiwo.
# SPDX-License-Identifier: MIT
"""Structured JSON logging utilities.

This module exposes an idempotent root configurator and a per-module logger
factory that produce JSON logs suitable for ingestion by log pipelines.

Features:
    * Stable keys: ``ts``, ``level``, ``logger``, ``message``.
    * Enrichment with ``unit_of_work_id`` via contextvars (set by the Unit of
      Work for the duration of its scope).
    * Enrichment with ``actor_id`` from the record (``extra={"actor_id": ...}``).
    * No-throw enrichment path.

Typical usage:
    configure_root_logging()
    log = get_json_logger(__name__)
"""

from __future__ import annotations

import json
import logging
import os
from contextvars import ContextVar, Token
from datetime import UTC, datetime
from typing import Any

__all__ = [
    "configure_root_logging",
    "get_json_logger",
    "bind_unit_of_work_id",
    "reset_unit_of_work_id",
    "get_unit_of_work_id",
]

_UOW_ID_CTX: ContextVar[str | None] = ContextVar("diiwo_unit_of_work_id", default=None)


def bind_unit_of_work_id(unit_of_work_id: str) -> Token[str | None]:
    """Bind a Unit-of-Work correlation id to the current context.

    Args:
        unit_of_work_id: Identifier of the active Unit of Work.

    Returns:
        Token to pass to :func:`reset_unit_of_work_id` when the scope ends.
    """
    return _UOW_ID_CTX.set(unit_of_work_id)


def reset_unit_of_work_id(token: Token[str | None]) -> None:
    """Restore the correlation id that was active before ``token`` was bound."""
    _UOW_ID_CTX.reset(token)


def get_unit_of_work_id() -> str | None:
    """Return the current Unit-of-Work id from contextvars, if any."""
    return _UOW_ID_CTX.get(None)


class _JsonFormatter(logging.Formatter):
    """JSON log formatter emitting stable keys and optional extras."""

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record as a JSON object.

        Args:
            record: Logging record.

        Returns:
            JSON-encoded log line.
        """
        ts = datetime.now(tz=UTC).isoformat()
        payload: dict[str, Any] = {
            "ts": ts,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        try:
            uow_id: str | None = getattr(record, "unit_of_work_id", None) or _UOW_ID_CTX.get(None)
            if uow_id:
                payload["unit_of_work_id"] = uow_id
        except Exception as exc:  # pragma: no cover
            payload["unit_of_work_id_error"] = str(exc)

        actor_id = getattr(record, "actor_id", None)
        if actor_id is not None:
            payload["actor_id"] = str(actor_id)

        # Exceptions: guard against None in exc_info tuple.
        if record.exc_info:
            exc_type, exc_value, _ = record.exc_info
            if exc_type is not None:
                payload["exc_type"] = exc_type.__name__
            if exc_value is not None:
                payload["exc_message"] = str(exc_value)

        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            payload.update(extra)

        return json.dumps(payload, separators=(",", ":"), ensure_ascii=False, default=str)


def configure_root_logging(level: str | int | None = None) -> None:
    """Initialize the root logger with a JSON stream handler (idempotent).

    Args:
        level: Logging level or level name. If ``None``, use env ``LOG_LEVEL`` or ``INFO``.
    """
    root = logging.getLogger()

    env_level = os.getenv("LOG_LEVEL")
    resolved: int | str = (
        level if level is not None else (env_level.upper() if env_level else "INFO")
    )
    root.setLevel(resolved)

    if root.handlers:
        # Already configured; avoid duplicate handlers.
        return

    handler = logging.StreamHandler()
    handler.setFormatter(_JsonFormatter())
    root.addHandler(handler)


def get_json_logger(name: str) -> logging.Logger:
    """Return a module-specific logger backed by the JSON root handler.

    This does *not* implicitly configure the root logger. Call
    :func:`configure_root_logging` once at startup for global defaults.

    Args:
        name: Logger name, typically ``__name__`` of the caller.

    Returns:
        Configured logger.
    """
    logger = logging.getLogger(name)
    logger.propagate = True
    return logger
