# Copyright (c) Diiwo.
# SPDX-License-Identifier: MIT
"""Domain enums."""

from __future__ import annotations

from .entity_state import TRANSITIONS, EntityState, LifecycleEvent, allowed_events, next_state

__all__ = ["TRANSITIONS", "EntityState", "LifecycleEvent", "allowed_events", "next_state"]
