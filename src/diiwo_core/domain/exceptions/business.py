# Copyright (c) Diiwo.
# SPDX-License-Identifier: MIT
"""
Business Exceptions

Purpose:
    Specialisations of :class:`BusinessError` for the error taxonomy shared by
    persistence and web layers: missing resources, uniqueness conflicts,
    validation failures and authorization failures. Mapped to HTTP by
    adapters outside this library.

Layer: domain/exceptions
"""
from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from .base import BusinessError

__all__ = [
    "NotFoundError",
    "ConflictError",
    "UnauthorizedError",
    "ValidationFailedError",
]


class NotFoundError(BusinessError):
    """A requested resource does not exist."""

    code = "NOT_FOUND"
    default_message = "The requested resource was not found"

    @classmethod
    def for_entity(cls, entity_name: str, key: Any) -> NotFoundError:
        """Build the error for a specific entity type and key."""
        return cls(
            f"{entity_name} with key '{key}' was not found",
            details={"entity": entity_name, "key": str(key)},
        )


class ConflictError(BusinessError):
    """Persisting would violate a uniqueness rule."""

    code = "CONFLICT"
    default_message = "A conflict occurred with existing data"

    @classmethod
    def for_entity(cls, entity_name: str, field: str, value: Any) -> ConflictError:
        """Build the error for a duplicate ``field`` value on ``entity_name``."""
        return cls(
            f"{entity_name} with {field} '{value}' already exists",
            details={"entity": entity_name, "field": field, "value": str(value)},
        )


class UnauthorizedError(BusinessError):
    """The actor lacks permission for the attempted operation."""

    code = "UNAUTHORIZED"
    default_message = "Unauthorized access"


class ValidationFailedError(BusinessError):
    """One or more fields failed validation.

    Attributes:
        validation_errors: Mapping of field name to violation messages.
    """

    code = "VALIDATION_FAILED"
    default_message = "One or more validation errors occurred"

    def __init__(
        self,
        message: str | None = None,
        *,
        validation_errors: Mapping[str, Sequence[str]] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        errors = {field: list(msgs) for field, msgs in (validation_errors or {}).items()}
        merged = {**(details or {}), **({"validation_errors": errors} if errors else {})}
        super().__init__(message, details=merged)
        self.validation_errors: dict[str, list[str]] = errors

    @classmethod
    def for_field(cls, field: str, message: str) -> ValidationFailedError:
        """Build the error for a single field/message pair."""
        return cls(message, validation_errors={field: [message]})
