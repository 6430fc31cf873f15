# src/diiwo_core/adapters/schemas/http/envelopes.py
# Copyright (c) Diiwo.
# SPDX-License-Identifier: MIT
"""HTTP Envelopes (Adapters Layer).

Purpose:
    Uniform response wrappers for web APIs built on the lifecycle core:
      - ApiResponse[T]:   {"success", "message", "data", "errors", "timestamp"}
      - PagedResponse[T]: ApiResponse[list[T]] plus paging metadata
      - ValidationResponse: failed ApiResponse with per-field messages

    Envelopes can be built directly from the domain's ``Failure`` results or
    ``BusinessError`` exceptions. Mapping them to HTTP status codes is left to
    the hosting web framework.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from typing import Any, Generic, Self, TypeVar

from pydantic import Field, computed_field

from diiwo_core.domain.entities.lifecycle import utc_now
from diiwo_core.domain.exceptions import BusinessError, ValidationFailedError
from diiwo_core.domain.results import Failure

from .base import BaseHTTPSchema, UtcTimestamp

__all__ = [
    "ApiResponse",
    "PagedResponse",
    "ValidationResponse",
    "VALIDATION_FAILED_MESSAGE",
]

T = TypeVar("T")

VALIDATION_FAILED_MESSAGE = "Validation failed"


def _flatten(errors: Mapping[str, Sequence[str]]) -> list[str]:
    return [message for messages in errors.values() for message in messages]


# ---------------------------------------------------------------------------
# ApiResponse
# ---------------------------------------------------------------------------


class ApiResponse(BaseHTTPSchema, Generic[T]):
    """Standard response wrapper."""

    success: bool = Field(..., description="Whether the operation succeeded.")
    message: str | None = Field(default=None, description="Optional human-readable message.")
    data: T | None = Field(default=None, description="Returned resource or value.")
    errors: list[str] | None = Field(default=None, description="Error messages on failure.")
    timestamp: UtcTimestamp = Field(
        default_factory=utc_now,
        description="UTC time the response was generated.",
    )

    @classmethod
    def success_response(cls, data: T, message: str | None = None) -> Self:
        return cls(success=True, message=message, data=data)

    @classmethod
    def error_response(cls, message: str, errors: Sequence[str] | None = None) -> Self:
        return cls(
            success=False,
            message=message,
            errors=list(errors) if errors is not None else None,
        )

    @classmethod
    def from_exception(cls, exc: BaseException) -> Self:
        """Build a failed response from an exception.

        ``BusinessError`` subclasses contribute their stable ``code``; field
        messages of a ``ValidationFailedError`` are flattened into ``errors``.
        """
        if isinstance(exc, ValidationFailedError) and exc.validation_errors:
            return cls.error_response(exc.message, _flatten(exc.validation_errors))
        if isinstance(exc, BusinessError):
            return cls.error_response(exc.message, [f"{exc.code}: {exc.message}"])
        return cls.error_response(str(exc) or type(exc).__name__, [f"{type(exc).__name__}: {exc}"])

    @classmethod
    def from_failure(cls, failure: Failure) -> Self:
        """Build a failed response from a domain ``Failure`` result."""
        if failure.field_errors:
            return cls.error_response(failure.message, _flatten(failure.field_errors))
        return cls.error_response(failure.message, [f"{failure.code}: {failure.message}"])


# ---------------------------------------------------------------------------
# PagedResponse
# ---------------------------------------------------------------------------


class PagedResponse(ApiResponse[list[T]], Generic[T]):
    """Paginated response for list operations (``page`` is 1-based)."""

    data: list[T] | None = Field(default_factory=list, description="Items of the current page.")
    page: int = Field(default=1, ge=0)
    page_size: int = Field(default=0, ge=0)
    total_count: int = Field(default=0, ge=0)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_pages(self) -> int:
        if self.page_size <= 0:
            return 0
        return math.ceil(self.total_count / self.page_size)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_previous_page(self) -> bool:
        return self.page > 1

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_next_page(self) -> bool:
        return self.page < self.total_pages

    @classmethod
    def create(
        cls,
        data: Sequence[T],
        page: int,
        page_size: int,
        total_count: int,
        message: str | None = None,
    ) -> Self:
        return cls(
            success=True,
            message=message,
            data=list(data),
            page=page,
            page_size=page_size,
            total_count=total_count,
        )

    @classmethod
    def error_response(cls, message: str, errors: Sequence[str] | None = None) -> Self:
        """Failed page: empty ``data`` and zeroed paging fields."""
        return cls(
            success=False,
            message=message,
            errors=list(errors) if errors is not None else None,
            data=[],
            page=0,
            page_size=0,
            total_count=0,
        )


# ---------------------------------------------------------------------------
# ValidationResponse
# ---------------------------------------------------------------------------


class ValidationResponse(ApiResponse[Any]):
    """Failed response carrying per-field validation messages."""

    success: bool = False
    message: str | None = VALIDATION_FAILED_MESSAGE
    validation_errors: dict[str, list[str]] | None = Field(
        default=None,
        description="Field name -> validation messages for that field.",
    )

    @classmethod
    def create(cls, errors: Mapping[str, Sequence[str]]) -> Self:
        validation_errors = {name: list(messages) for name, messages in errors.items()}
        return cls(
            success=False,
            message=VALIDATION_FAILED_MESSAGE,
            validation_errors=validation_errors,
            errors=_flatten(validation_errors),
        )

    @classmethod
    def for_field(cls, field_name: str, message: str) -> Self:
        return cls.create({field_name: [message]})

    @classmethod
    def from_validation_error(cls, exc: ValidationFailedError) -> Self:
        return cls.create(exc.validation_errors)

    @classmethod
    def from_failure(cls, failure: Failure) -> Self:
        return cls.create(failure.field_errors)

