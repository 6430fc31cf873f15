# Copyright (c) Diiwo.
# SPDX-License-Identifier: MIT
"""Base HTTP Schema (Adapters Layer).

Purpose:
    Canonical Pydantic base for response envelopes. Enforces strict config
    and deterministic JSON encoding of timestamps.

Layer: adapters/schemas/http

Notes:
    - Transport-facing only. Domain and application code must not import
      from this module.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, PlainSerializer

__all__ = ["BaseHTTPSchema", "UtcTimestamp", "format_timestamp"]


def format_timestamp(value: datetime) -> str:
    """ISO-8601 in UTC with zeroed microseconds and a ``Z`` suffix.

    Naive values are taken as UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).replace(microsecond=0).isoformat().replace("+00:00", "Z")


UtcTimestamp = Annotated[
    datetime,
    PlainSerializer(format_timestamp, return_type=str, when_used="json"),
]


class BaseHTTPSchema(BaseModel):
    """Base class for all HTTP-facing schemas.

    Provides:
        • Strict `extra='forbid'` validation.
        • Canonical timestamp encoding via :data:`UtcTimestamp`.
        • Consistent `model_dump_http()` for presenters and routers.
    """

    model_config = ConfigDict(
        extra="forbid",
        populate_by_name=True,
        str_strip_whitespace=True,
        ser_json_inf_nan="null",
        use_enum_values=True,
        arbitrary_types_allowed=True,
    )

    def model_dump_http(self, **kwargs: Any) -> dict[str, Any]:
        """Return a JSON-serializable dict suitable for HTTP responses."""
        return self.model_dump(mode="json", **kwargs)
