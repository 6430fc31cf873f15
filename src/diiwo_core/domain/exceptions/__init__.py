# Copyright (c) Diiwo.
# SPDX-License-Identifier: MIT
"""Business exception hierarchy (domain layer)."""

from __future__ import annotations

from .base import BusinessError
from .business import ConflictError, NotFoundError, UnauthorizedError, ValidationFailedError

__all__ = [
    "BusinessError",
    "ConflictError",
    "NotFoundError",
    "UnauthorizedError",
    "ValidationFailedError",
]
