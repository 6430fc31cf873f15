# Copyright (c) Diiwo.
# SPDX-License-Identifier: MIT
"""Structured logging helpers."""

from __future__ import annotations

from .logger import (
    bind_unit_of_work_id,
    configure_root_logging,
    get_json_logger,
    get_unit_of_work_id,
    reset_unit_of_work_id,
)

__all__ = [
    "bind_unit_of_work_id",
    "configure_root_logging",
    "get_json_logger",
    "get_unit_of_work_id",
    "reset_unit_of_work_id",
]
