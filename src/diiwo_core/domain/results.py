# Copyright (c) Diiwo.
# SPDX-License-Identifier: MIT
"""Explicit Success/Failure results (Domain Layer).

Purpose:
    Report business-rule outcomes as values instead of raised exceptions.
    Operations return ``Success(value)`` or ``Failure(kind, message, ...)``;
    callers that prefer exceptions convert with :meth:`Failure.to_exception`.

Layer:
    domain
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Final, Generic, TypeAlias, TypeVar

from .exceptions import (
    BusinessError,
    ConflictError,
    NotFoundError,
    UnauthorizedError,
    ValidationFailedError,
)

T = TypeVar("T")

__all__ = [
    "ErrorKind",
    "Success",
    "Failure",
    "Result",
    "business",
    "not_found",
    "conflict",
    "validation_failed",
    "field_invalid",
    "unauthorized",
    "failure_from_exception",
]


class ErrorKind(str, Enum):
    """Error taxonomy; every kind except BUSINESS specialises BUSINESS."""

    BUSINESS = "business"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    VALIDATION_FAILED = "validation_failed"
    UNAUTHORIZED = "unauthorized"


_EXCEPTION_FOR_KIND: Final[Mapping[ErrorKind, type[BusinessError]]] = MappingProxyType(
    {
        ErrorKind.BUSINESS: BusinessError,
        ErrorKind.NOT_FOUND: NotFoundError,
        ErrorKind.CONFLICT: ConflictError,
        ErrorKind.VALIDATION_FAILED: ValidationFailedError,
        ErrorKind.UNAUTHORIZED: UnauthorizedError,
    }
)


@dataclass(frozen=True, slots=True)
class Success(Generic[T]):
    """Successful outcome carrying ``value``."""

    value: T

    @property
    def is_success(self) -> bool:
        return True

    @property
    def is_failure(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class Failure:
    """Failed outcome.

    Args:
        kind: Error taxonomy bucket.
        message: Human-readable description.
        code: Stable machine-readable code (UPPER_SNAKE_CASE).
        field_errors: Field name -> violation messages (validation failures).
        details: Extra structured context safe for clients.
    """

    kind: ErrorKind
    message: str
    code: str = "BUSINESS_ERROR"
    field_errors: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    details: Mapping[str, Any] = field(default_factory=dict)

    @property
    def is_success(self) -> bool:
        return False

    @property
    def is_failure(self) -> bool:
        return True

    def to_exception(self) -> BusinessError:
        """Return the exception equivalent of this failure (not raised)."""
        exc_type = _EXCEPTION_FOR_KIND[self.kind]
        if exc_type is ValidationFailedError:
            return ValidationFailedError(
                self.message,
                validation_errors=self.field_errors,
                details=dict(self.details),
            )
        return exc_type(self.message, details=dict(self.details), code=self.code)


Result: TypeAlias = Success[T] | Failure


def business(message: str, *, code: str = "BUSINESS_ERROR", **details: Any) -> Failure:
    """Generic business-rule violation."""
    return Failure(ErrorKind.BUSINESS, message, code=code, details=details)


def not_found(
    entity_name: str | None = None,
    key: Any = None,
    *,
    message: str | None = None,
) -> Failure:
    """Requested entity is absent."""
    details: dict[str, Any] = {}
    if message is None:
        if entity_name is not None and key is not None:
            message = f"{entity_name} with key '{key}' was not found"
            details = {"entity": entity_name, "key": str(key)}
        else:
            message = NotFoundError.default_message
    return Failure(ErrorKind.NOT_FOUND, message, code=NotFoundError.code, details=details)


def conflict(
    entity_name: str | None = None,
    field_name: str | None = None,
    value: Any = None,
    *,
    message: str | None = None,
) -> Failure:
    """Uniqueness violation on persist."""
    details: dict[str, Any] = {}
    if message is None:
        if entity_name is not None and field_name is not None:
            message = f"{entity_name} with {field_name} '{value}' already exists"
            details = {"entity": entity_name, "field": field_name, "value": str(value)}
        else:
            message = ConflictError.default_message
    return Failure(ErrorKind.CONFLICT, message, code=ConflictError.code, details=details)


def validation_failed(
    errors: Mapping[str, Sequence[str]],
    *,
    message: str | None = None,
) -> Failure:
    """Validation failure over one or more fields."""
    normalized = {name: tuple(msgs) for name, msgs in errors.items()}
    return Failure(
        ErrorKind.VALIDATION_FAILED,
        message or ValidationFailedError.default_message,
        code=ValidationFailedError.code,
        field_errors=normalized,
    )


def field_invalid(field_name: str, message: str) -> Failure:
    """Convenience form of :func:`validation_failed` for a single field."""
    return validation_failed({field_name: [message]}, message=message)


def unauthorized(message: str | None = None) -> Failure:
    """Actor lacks permission for the attempted operation."""
    return Failure(
        ErrorKind.UNAUTHORIZED,
        message or UnauthorizedError.default_message,
        code=UnauthorizedError.code,
    )


def failure_from_exception(exc: BusinessError) -> Failure:
    """Convert a raised business exception back into a :class:`Failure`."""
    kind = next(
        (
            k
            for k, t in _EXCEPTION_FOR_KIND.items()
            if k is not ErrorKind.BUSINESS and isinstance(exc, t)
        ),
        ErrorKind.BUSINESS,
    )
    field_errors = (
        {name: tuple(msgs) for name, msgs in exc.validation_errors.items()}
        if isinstance(exc, ValidationFailedError)
        else {}
    )
    details = {k: v for k, v in exc.details.items() if k != "validation_errors"}
    return Failure(kind, exc.message, code=exc.code, field_errors=field_errors, details=details)
