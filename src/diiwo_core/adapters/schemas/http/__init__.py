# Copyright (c) Diiwo.
# SPDX-License-Identifier: MIT
"""HTTP response envelopes."""

from __future__ import annotations

from .base import BaseHTTPSchema, UtcTimestamp, format_timestamp
from .envelopes import VALIDATION_FAILED_MESSAGE, ApiResponse, PagedResponse, ValidationResponse

__all__ = [
    "VALIDATION_FAILED_MESSAGE",
    "ApiResponse",
    "BaseHTTPSchema",
    "PagedResponse",
    "UtcTimestamp",
    "ValidationResponse",
    "format_timestamp",
]
