# Copyright (c) Diiwo.
# SPDX-License-Identifier: MIT
"""Domain-level protocols: entity capabilities and the current actor."""

from __future__ import annotations

from .capabilities import (
    Auditable,
    Capability,
    SoftDeletable,
    UserOwned,
    UserTracked,
    capabilities_of,
    supports,
)
from .current_actor import ANONYMOUS, CurrentActorProvider, StaticActor

__all__ = [
    "ANONYMOUS",
    "Auditable",
    "Capability",
    "CurrentActorProvider",
    "SoftDeletable",
    "StaticActor",
    "UserOwned",
    "UserTracked",
    "capabilities_of",
    "supports",
]
