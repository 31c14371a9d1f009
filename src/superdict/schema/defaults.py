"""
superdict — default resolution for declared attributes.

File: src/superdict/schema/defaults.py
Last updated: 2026-10-19

Purpose
- Produce the value of every declared attribute that construction input did
  not supply, in declaration order, in one left-to-right sweep.

What should be included in this file
- ``DefaultKind`` classification of explicit defaults (scalar, container,
  callable) and the arity rule for callables.
- Conflict detection between an explicit default and a type default.
- The sweep itself, writing through the record's write path.

Functional requirements
- Container defaults are deep-copied per instance.
- Zero-argument callables are called bare; callables taking a positional
  argument receive the in-progress record.
- A resolved ``None`` is skipped when the policy ignores nil defaults and the
  attribute is not required for this record.
"""

from __future__ import annotations

import copy
import inspect
from collections.abc import (
    Callable,
    Collection,
    Hashable,
    MutableMapping,
    MutableSequence,
    MutableSet,
)
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from superdict.errors import ConflictingDefaultsError
from superdict.observability.logging import get_logger
from superdict.schema.attributes import AttributeDefinition
from superdict.types import UNDEFINED

if TYPE_CHECKING:
    from superdict.record import SuperDict

_logger = get_logger(__name__)

_CONTAINER_TYPES: tuple[type, ...] = (MutableMapping, MutableSequence, MutableSet, bytearray)


class DefaultKind(StrEnum):
    SCALAR = "scalar"
    CONTAINER = "container"
    CALLABLE = "callable"


def classify_default(value: object) -> DefaultKind:
    if callable(value) and not isinstance(value, type):
        return DefaultKind.CALLABLE
    if isinstance(value, _CONTAINER_TYPES):
        return DefaultKind.CONTAINER
    return DefaultKind.SCALAR


def callable_arity(func: Callable[..., Any]) -> int:
    """Number of required positional parameters, or 1 when ``*args`` is accepted.

    Builtins without an introspectable signature count as zero-argument.
    """

    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return 0
    count = 0
    for parameter in signature.parameters.values():
        if parameter.kind is inspect.Parameter.VAR_POSITIONAL:
            return max(count, 1)
        if (
            parameter.kind
            in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
            and parameter.default is inspect.Parameter.empty
        ):
            count += 1
    return count


def resolve_default(definition: AttributeDefinition, record: SuperDict) -> tuple[Any, str | None]:
    """Return ``(value, source)``; ``source`` is None when no default is declared."""

    if definition.has_explicit_default and definition.has_type_default:
        raise ConflictingDefaultsError(
            f"attribute {definition.key!r} declares both an explicit default and a type default",
            attribute=definition.key,
            record_type=type(record).__name__,
        )

    if definition.has_explicit_default:
        default = definition.default
        kind = classify_default(default)
        if kind is DefaultKind.CALLABLE:
            value = default(record) if callable_arity(default) else default()
        elif kind is DefaultKind.CONTAINER:
            value = copy.deepcopy(default)
        else:
            value = default
        return value, "explicit"

    if definition.has_type_default:
        assert definition.type is not None
        return definition.type.coerce_undefined(), "type"

    return UNDEFINED, None


def apply_defaults(record: SuperDict, provided_keys: Collection[Hashable]) -> list[Hashable]:
    """Write defaults for every declared attribute absent from ``provided_keys``.

    Returns the keys that were written, in declaration order.
    """

    registry = type(record).__schema__
    record_type = type(record).__name__
    written: list[Hashable] = []

    for key, definition in registry.definitions.items():
        if key in provided_keys:
            continue
        value, source = resolve_default(definition, record)
        if source is None:
            value = None
        if (
            value is None
            and registry.ignore_nil_default_values
            and not record.is_attribute_required(key)
        ):
            _logger.debug("default_skipped_nil", record_type=record_type, attribute=key)
            continue
        record.set(key, value, skip_after_set=True)
        written.append(key)
        _logger.debug(
            "default_resolved",
            record_type=record_type,
            attribute=key,
            source=source or "none",
        )

    return written


__all__ = [
    "DefaultKind",
    "apply_defaults",
    "callable_arity",
    "classify_default",
    "resolve_default",
]
