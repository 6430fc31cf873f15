# Copyright (c) Diiwo.
# SPDX-License-Identifier: MIT
"""
Base Business Exception.

Summary:
    Canonical base class for business-rule exceptions raised by layers that
    wrap the lifecycle core. The core itself reports problems as
    :class:`~diiwo_core.domain.results.Failure` values; this hierarchy exists
    for callers that prefer raising.

Layer:
    domain/exceptions
"""
from __future__ import annotations

from typing import Any


class BusinessError(Exception):
    """Base class for business logic violations."""

    code: str = "BUSINESS_ERROR"
    default_message: str = "A business rule was violated"

    def __init__(
        self,
        message: str | None = None,
        *,
        details: dict[str, Any] | None = None,
        code: str | None = None,
    ) -> None:
        self.message: str = message or self.default_message
        super().__init__(self.message)
        self.details: dict[str, Any] = details or {}
        if code is not None:
            self.code = code
