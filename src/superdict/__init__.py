"""
superdict — schema-enforcing dictionaries.

File: src/superdict/__init__.py
Last updated: 2026-10-19

Purpose
- Package root. Exports the record types, type capabilities, errors, and the
  deep-path helpers.

What should be included in this file
- Version export and the public API surface.

Functional requirements
- Must not have side effects at import time (no settings loading, no logging
  init).
"""

from superdict.errors import (
    AttributeValidationError,
    ConflictingDefaultsError,
    InvalidAttributeKeyError,
    MissingRequiredAttributeError,
    SchemaError,
    SuperDictError,
    UndeclaredAttributeError,
    UnsupportedKeyKindError,
)
from superdict.indifferent import IndifferentSuperDict
from superdict.keys import IndifferentDict, IndifferentKeys, StrictKeys
from superdict.record import SuperDict
from superdict.schema import AttributeDefinition, DefaultKind, SchemaRegistry
from superdict.types import UNDEFINED, ConstraintError, PydanticType, TypeCapability
from superdict.utils import bury, flatten_to_root

__version__ = "0.1.0"

__all__ = [
    "UNDEFINED",
    "AttributeDefinition",
    "AttributeValidationError",
    "ConflictingDefaultsError",
    "ConstraintError",
    "DefaultKind",
    "IndifferentDict",
    "IndifferentKeys",
    "IndifferentSuperDict",
    "InvalidAttributeKeyError",
    "MissingRequiredAttributeError",
    "PydanticType",
    "SchemaError",
    "SchemaRegistry",
    "StrictKeys",
    "SuperDict",
    "SuperDictError",
    "TypeCapability",
    "UndeclaredAttributeError",
    "UnsupportedKeyKindError",
    "__version__",
    "bury",
    "flatten_to_root",
]
