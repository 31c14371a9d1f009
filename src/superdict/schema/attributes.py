"""Immutable attribute definitions and their option validation."""

from __future__ import annotations

import copy
from collections.abc import Callable, Hashable, Mapping
from dataclasses import dataclass, fields, replace
from typing import TYPE_CHECKING, Any

from superdict.constants import ATTRIBUTE_OPTIONS
from superdict.errors import SchemaError
from superdict.types import UNDEFINED, TypeCapability

if TYPE_CHECKING:
    from superdict.record import SuperDict

Transform = Callable[[Hashable, Any, "SuperDict"], Any]


@dataclass(frozen=True, slots=True)
class AttributeDefinition:
    """One declared schema key.

    ``default`` is ``UNDEFINED`` when no explicit default was declared, so an
    explicit ``default=None`` stays distinguishable from "no default".
    """

    key: Hashable
    required: bool = True
    type: TypeCapability | None = None
    default: Any = UNDEFINED
    transform: Transform | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.required, bool):
            raise SchemaError(
                f"'required' must be a bool, got {type(self.required).__name__}",
                attribute=self.key,
            )
        if self.type is not None and not isinstance(self.type, TypeCapability):
            raise SchemaError(
                f"'type' must provide has_default/coerce/coerce_undefined, "
                f"got {type(self.type).__name__}",
                attribute=self.key,
            )
        if self.transform is not None and not callable(self.transform):
            raise SchemaError(
                f"'transform' must be callable, got {type(self.transform).__name__}",
                attribute=self.key,
            )

    @property
    def has_explicit_default(self) -> bool:
        return self.default is not UNDEFINED

    @property
    def has_type_default(self) -> bool:
        return self.type is not None and self.type.has_default()

    def merged(self, options: Mapping[str, Any]) -> AttributeDefinition:
        """Return a copy with ``options`` applied on top of this definition."""

        check_options(options, attribute=self.key)
        return replace(self, **options)

    def snapshot(self) -> AttributeDefinition:
        """Return a copy whose default and transform objects are not shared."""

        return replace(
            self,
            default=_duplicate(self.default),
            transform=_duplicate(self.transform),
        )

    def options(self) -> dict[str, Any]:
        return {item.name: getattr(self, item.name) for item in fields(self) if item.name != "key"}


def check_options(options: Mapping[str, Any], *, attribute: Hashable | None = None) -> None:
    unknown = sorted(set(options) - ATTRIBUTE_OPTIONS)
    if unknown:
        expected = ", ".join(sorted(ATTRIBUTE_OPTIONS))
        raise SchemaError(
            f"unknown attribute option(s) {', '.join(unknown)}; expected: {expected}",
            attribute=attribute,
        )


def _duplicate(value: Any) -> Any:
    for duplicate in (copy.deepcopy, copy.copy):
        try:
            return duplicate(value)
        except (TypeError, copy.Error):
            continue
    return value


__all__ = [
    "AttributeDefinition",
    "Transform",
    "check_options",
]
