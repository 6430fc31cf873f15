# Copyright (c) Diiwo.
# SPDX-License-Identifier: MIT
"""Configuration package."""

from __future__ import annotations

from .settings import Environment, Settings, get_settings

__all__ = ["Environment", "Settings", "get_settings"]
