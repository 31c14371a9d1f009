"""
superdict — error hierarchy.

File: src/superdict/errors.py
Last updated: 2026-10-19

Purpose
- Define the exceptions raised by schema declaration, key normalization, and
  record writes.

Functional requirements
- Every error is raised synchronously at the point of violation and carries the
  offending attribute and record type.
- Errors double as the matching builtin (``TypeError`` / ``ValueError``) so
  callers catching builtins keep working.

Non-functional requirements
- No recovery or rollback happens here; callers decide.
"""

from __future__ import annotations

from collections.abc import Hashable


class SuperDictError(Exception):
    """Base class for every error raised by superdict."""

    def __init__(
        self,
        message: str,
        *,
        attribute: Hashable | None = None,
        record_type: str | None = None,
    ) -> None:
        self.attribute = attribute
        self.record_type = record_type
        super().__init__(message)


class SchemaError(SuperDictError):
    """Raised when a schema declaration is inconsistent."""


class InvalidAttributeKeyError(SchemaError, TypeError):
    """Raised when an attribute is declared with a key of an unsupported kind."""


class ConflictingDefaultsError(SchemaError, ValueError):
    """Raised when a definition carries both an explicit default and a type default."""


class AttributeValidationError(SuperDictError, ValueError):
    """Raised when a record violates its attribute contract."""


class MissingRequiredAttributeError(AttributeValidationError):
    """Raised when a required attribute has no value."""


class UndeclaredAttributeError(AttributeValidationError):
    """Raised when writing an undeclared key while dynamic attributes are disabled."""


class UnsupportedKeyKindError(SuperDictError, TypeError):
    """Raised when a key cannot be accepted by the active key policy."""


__all__ = [
    "AttributeValidationError",
    "ConflictingDefaultsError",
    "InvalidAttributeKeyError",
    "MissingRequiredAttributeError",
    "SchemaError",
    "SuperDictError",
    "UndeclaredAttributeError",
    "UnsupportedKeyKindError",
]
