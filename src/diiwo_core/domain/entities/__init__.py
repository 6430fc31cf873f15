# Copyright (c) Diiwo.
# SPDX-License-Identifier: MIT
"""Domain entities: lifecycle behaviour and plain-Python records."""

from __future__ import annotations

from .lifecycle import LifecycleMixin, OwnershipMixin, advance_timestamp, utc_now
from .records import LifecycleRecord, OwnedRecord

__all__ = [
    "LifecycleMixin",
    "LifecycleRecord",
    "OwnedRecord",
    "OwnershipMixin",
    "advance_timestamp",
    "utc_now",
]
