"""
superdict — per-record-type schema registry.

File: src/superdict/schema/registry.py
Last updated: 2026-10-19

Purpose
- Own the attribute definitions, after-set callbacks, and policy flags of one
  record type, and derive the registry of every subclass from it.

What should be included in this file
- Registration, partial update, removal, and lookup of ``AttributeDefinition``.
- Snapshot derivation for subclasses (definitions deep-copied, callbacks and
  flags shallow-copied).
- Optional live cascade of later mutations to already-derived registries.

Functional requirements
- Declaration order is preserved; re-registering a key overwrites it in place.
- Attribute keys are validated against the record type's key policy.
- Descendants are tracked weakly and only consulted by cascade.

Non-functional requirements
- Mutated during type setup only; reads are safe afterwards, concurrent
  registration is not guarded.
"""

from __future__ import annotations

import weakref
from collections.abc import Callable, Hashable, Iterator, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from superdict.keys import KeyNormalizer, validate_attribute_key
from superdict.observability.logging import get_logger
from superdict.schema.attributes import AttributeDefinition, check_options

if TYPE_CHECKING:
    from superdict.record import SuperDict

AfterSetCallback = Callable[["SuperDict", Hashable | None, Any], None]

_logger = get_logger(__name__)


class SchemaRegistry:
    """Attribute contract of a single record type."""

    __slots__ = (
        "__weakref__",
        "_allow_dynamic_attributes",
        "_callbacks",
        "_cascade",
        "_definitions",
        "_descendants",
        "_ignore_nil_default_values",
        "key_normalizer",
        "owner",
    )

    def __init__(
        self,
        owner: str,
        *,
        key_normalizer: KeyNormalizer,
        allow_dynamic_attributes: bool = False,
        ignore_nil_default_values: bool = True,
        cascade: bool = False,
    ) -> None:
        self.owner = owner
        self.key_normalizer = key_normalizer
        self._definitions: dict[Hashable, AttributeDefinition] = {}
        self._callbacks: list[AfterSetCallback] = []
        self._allow_dynamic_attributes = _as_flag("allow_dynamic_attributes", allow_dynamic_attributes)
        self._ignore_nil_default_values = _as_flag(
            "ignore_nil_default_values", ignore_nil_default_values
        )
        self._cascade = _as_flag("cascade", cascade)
        self._descendants: weakref.WeakSet[SchemaRegistry] = weakref.WeakSet()

    # -- declaration -------------------------------------------------------

    def define(
        self, key: object, options: Mapping[str, Any] | None = None, *, required: bool
    ) -> AttributeDefinition:
        """Build and register a definition; ``required`` wins over ``options``."""

        merged = dict(options or {})
        check_options(merged, attribute=key if isinstance(key, Hashable) else None)
        merged["required"] = required
        canonical = self._validate_key(key)
        return self.register(AttributeDefinition(key=canonical, **merged))

    def register(self, definition: AttributeDefinition) -> AttributeDefinition:
        self._validate_key(definition.key)

        def apply(registry: SchemaRegistry) -> None:
            stored = definition if registry is self else definition.snapshot()
            registry._definitions[definition.key] = stored

        self._broadcast(
            "schema_attribute_registered",
            apply,
            attribute=definition.key,
            required=definition.required,
        )
        return definition

    def update(self, key: object, options: Mapping[str, Any]) -> AttributeDefinition:
        """Merge ``options`` onto the existing definition (or an empty optional one)."""

        canonical = self._validate_key(key)
        check_options(options, attribute=canonical)
        partial = dict(options)

        def apply(registry: SchemaRegistry) -> None:
            base = registry._definitions.get(canonical) or AttributeDefinition(
                key=canonical, required=False
            )
            merged = base.merged(partial)
            registry._definitions[canonical] = merged if registry is self else merged.snapshot()

        self._broadcast(
            "schema_attribute_registered",
            apply,
            attribute=canonical,
            updated=sorted(partial),
        )
        return self._definitions[canonical]

    def remove(self, key: object) -> bool:
        canonical = self.key_normalizer.lookup_key(key)
        existed = canonical in self._definitions

        def apply(registry: SchemaRegistry) -> None:
            registry._definitions.pop(canonical, None)

        self._broadcast("schema_attribute_removed", apply, attribute=canonical, existed=existed)
        return existed

    def add_callback(self, callback: AfterSetCallback) -> AfterSetCallback:
        if not callable(callback):
            raise TypeError(f"after_set callback must be callable, got {type(callback).__name__}")

        def apply(registry: SchemaRegistry) -> None:
            registry._callbacks.append(callback)

        self._broadcast(
            "schema_callback_registered",
            apply,
            callback=getattr(callback, "__qualname__", repr(callback)),
        )
        return callback

    def configure(
        self,
        *,
        allow_dynamic_attributes: bool | None = None,
        ignore_nil_default_values: bool | None = None,
    ) -> None:
        dynamic = (
            None
            if allow_dynamic_attributes is None
            else _as_flag("allow_dynamic_attributes", allow_dynamic_attributes)
        )
        ignore_nil = (
            None
            if ignore_nil_default_values is None
            else _as_flag("ignore_nil_default_values", ignore_nil_default_values)
        )

        def apply(registry: SchemaRegistry) -> None:
            if dynamic is not None:
                registry._allow_dynamic_attributes = dynamic
            if ignore_nil is not None:
                registry._ignore_nil_default_values = ignore_nil

        self._broadcast(
            "schema_policy_configured",
            apply,
            allow_dynamic_attributes=dynamic,
            ignore_nil_default_values=ignore_nil,
        )

    # -- inheritance -------------------------------------------------------

    def derive(
        self,
        owner: str,
        *,
        key_normalizer: KeyNormalizer | None = None,
        allow_dynamic_attributes: bool | None = None,
        ignore_nil_default_values: bool | None = None,
        cascade: bool | None = None,
    ) -> SchemaRegistry:
        """Return the registry of a subclass, snapshotted from this one."""

        child = SchemaRegistry(
            owner,
            key_normalizer=key_normalizer if key_normalizer is not None else self.key_normalizer,
            allow_dynamic_attributes=(
                self._allow_dynamic_attributes
                if allow_dynamic_attributes is None
                else allow_dynamic_attributes
            ),
            ignore_nil_default_values=(
                self._ignore_nil_default_values
                if ignore_nil_default_values is None
                else ignore_nil_default_values
            ),
            cascade=self._cascade if cascade is None else cascade,
        )
        for key, definition in self._definitions.items():
            child._validate_key(key)
            child._definitions[key] = definition.snapshot()
        child._callbacks = list(self._callbacks)
        self._descendants.add(child)
        _logger.debug(
            "schema_subclass_snapshot",
            record_type=owner,
            parent=self.owner,
            attributes=len(child._definitions),
            callbacks=len(child._callbacks),
        )
        return child

    def _broadcast(
        self, event: str, apply: Callable[[SchemaRegistry], None], **fields: object
    ) -> None:
        apply(self)
        _logger.debug(event, record_type=self.owner, **fields)
        if not self._cascade:
            return
        reached = self._cascade_to_descendants(apply)
        if reached:
            _logger.debug(
                "schema_cascade_applied",
                record_type=self.owner,
                operation=event,
                descendants=reached,
            )

    def _cascade_to_descendants(self, apply: Callable[[SchemaRegistry], None]) -> int:
        reached = 0
        for descendant in list(self._descendants):
            apply(descendant)
            reached += 1
            if descendant._cascade:
                reached += descendant._cascade_to_descendants(apply)
        return reached

    # -- introspection -----------------------------------------------------

    def get(self, key: object) -> AttributeDefinition | None:
        return self._definitions.get(self.key_normalizer.lookup_key(key))  # type: ignore[arg-type]

    def has_attribute(self, key: object) -> bool:
        return self.get(key) is not None

    def is_required(self, key: object) -> bool:
        definition = self.get(key)
        return definition is not None and definition.required

    @property
    def definitions(self) -> Mapping[Hashable, AttributeDefinition]:
        """Ordered read-only snapshot of the definitions."""

        return MappingProxyType(dict(self._definitions))

    @property
    def callbacks(self) -> tuple[AfterSetCallback, ...]:
        return tuple(self._callbacks)

    @property
    def allow_dynamic_attributes(self) -> bool:
        return self._allow_dynamic_attributes

    @property
    def ignore_nil_default_values(self) -> bool:
        return self._ignore_nil_default_values

    @property
    def cascade(self) -> bool:
        return self._cascade

    @property
    def descendants(self) -> tuple[SchemaRegistry, ...]:
        return tuple(self._descendants)

    def __contains__(self, key: object) -> bool:
        return self.has_attribute(key)

    def __iter__(self) -> Iterator[Hashable]:
        return iter(tuple(self._definitions))

    def __len__(self) -> int:
        return len(self._definitions)

    def __repr__(self) -> str:
        return (
            f"SchemaRegistry(owner={self.owner!r}, attributes={list(self._definitions)!r}, "
            f"allow_dynamic_attributes={self._allow_dynamic_attributes}, "
            f"ignore_nil_default_values={self._ignore_nil_default_values}, "
            f"cascade={self._cascade})"
        )

    def _validate_key(self, key: object) -> Hashable:
        return validate_attribute_key(self.key_normalizer, key, record_type=self.owner)


def _as_flag(name: str, value: object) -> bool:
    if not isinstance(value, bool):
        raise TypeError(f"{name} must be a bool, got {type(value).__name__}")
    return value


__all__ = [
    "AfterSetCallback",
    "SchemaRegistry",
]
