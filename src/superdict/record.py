"""
superdict — schema-enforcing dictionary records.

File: src/superdict/record.py
Last updated: 2026-10-19

Purpose
- Provide ``SuperDict``, a ``dict`` whose subclasses declare an attribute
  contract that every write is checked against.

What should be included in this file
- Class-level declaration API delegating to the per-class ``SchemaRegistry``.
- The write path: normalize key, required check, declared check, transform,
  type coercion, store, after-set callbacks.
- Construction with deferred callbacks, default resolution, one
  initialization callback, and a final validation sweep.
- Duplication that keeps per-instance options and skips defaults.

Functional requirements
- Reads of undeclared keys return ``None``; they never raise.
- Every ``dict`` entry point that writes goes through the write path.
- Errors propagate to the caller; a failed bulk update keeps the prefix that
  was already written.

Non-functional requirements
- Not thread-safe; registries are expected to be final after type setup.
"""

from __future__ import annotations

import copy
from collections.abc import Callable, Hashable, Iterable, Mapping
from typing import Any, ClassVar, Self

from superdict.config import get_settings
from superdict.errors import MissingRequiredAttributeError, UndeclaredAttributeError
from superdict.keys import KeyNormalizer, StrictKeys
from superdict.schema.attributes import AttributeDefinition
from superdict.schema.defaults import apply_defaults
from superdict.schema.registry import AfterSetCallback, SchemaRegistry
from superdict.types import UNDEFINED
from superdict.utils import Helpers, to_plain

PreInit = Callable[["SuperDict"], None]
Resolver = Callable[[Hashable, Any, Any], Any]


class SuperDict(Helpers, dict):  # type: ignore[type-arg]
    """Dictionary with a declarative attribute contract.

    Declare a record type by subclassing, then register attributes on it::

        class Person(SuperDict):
            pass

        Person.attribute("name", type=PydanticType(str))
        Person.optional_attribute("nickname", default=lambda person: person["name"])

    Class keywords ``allow_dynamic_attributes``, ``ignore_nil_default_values``
    and ``cascade`` set the registry policy; unset keywords inherit from the
    parent record type, or from ``superdict.config.get_settings()`` for root
    types. ``abstract=True`` declares a base without a registry of its own.
    """

    key_normalizer: ClassVar[KeyNormalizer] = StrictKeys()
    __schema__: ClassVar[SchemaRegistry]

    _init_options: dict[str, Any]
    _skip_required_attrs: frozenset[Hashable]

    def __init_subclass__(
        cls,
        *,
        abstract: bool = False,
        allow_dynamic_attributes: bool | None = None,
        ignore_nil_default_values: bool | None = None,
        cascade: bool | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init_subclass__(**kwargs)
        if abstract:
            return

        parent = _parent_registry(cls)
        if parent is None:
            settings = get_settings()
            cls.__schema__ = SchemaRegistry(
                cls.__qualname__,
                key_normalizer=cls.key_normalizer,
                allow_dynamic_attributes=(
                    settings.allow_dynamic_attributes
                    if allow_dynamic_attributes is None
                    else allow_dynamic_attributes
                ),
                ignore_nil_default_values=(
                    settings.ignore_nil_default_values
                    if ignore_nil_default_values is None
                    else ignore_nil_default_values
                ),
                cascade=settings.cascade if cascade is None else cascade,
            )
        else:
            cls.__schema__ = parent.derive(
                cls.__qualname__,
                key_normalizer=cls.key_normalizer,
                allow_dynamic_attributes=allow_dynamic_attributes,
                ignore_nil_default_values=ignore_nil_default_values,
                cascade=cascade,
            )

    # -- declaration -------------------------------------------------------

    @classmethod
    def schema(cls) -> SchemaRegistry:
        registry = getattr(cls, "__schema__", None)
        if registry is None:
            raise TypeError(f"{cls.__name__} is abstract; declare a subclass to use it")
        return registry

    @classmethod
    def attribute(cls, key: Hashable, **options: Any) -> type[Self]:
        """Register a required attribute; returns the class for chaining."""

        cls.schema().define(key, options, required=True)
        return cls

    @classmethod
    def optional_attribute(cls, key: Hashable, **options: Any) -> type[Self]:
        cls.schema().define(key, options, required=False)
        return cls

    @classmethod
    def update_attribute(cls, key: Hashable, **options: Any) -> type[Self]:
        cls.schema().update(key, options)
        return cls

    @classmethod
    def remove_attribute(cls, key: Hashable) -> bool:
        return cls.schema().remove(key)

    @classmethod
    def after_set(cls, callback: AfterSetCallback) -> AfterSetCallback:
        """Register ``callback(record, key, value)``; usable as a decorator."""

        return cls.schema().add_callback(callback)

    @classmethod
    def configure(
        cls,
        *,
        allow_dynamic_attributes: bool | None = None,
        ignore_nil_default_values: bool | None = None,
    ) -> type[Self]:
        cls.schema().configure(
            allow_dynamic_attributes=allow_dynamic_attributes,
            ignore_nil_default_values=ignore_nil_default_values,
        )
        return cls

    @classmethod
    def has_attribute(cls, key: object) -> bool:
        return cls.schema().has_attribute(key)

    @classmethod
    def attr_required(cls, key: object) -> bool:
        return cls.schema().is_required(key)

    @classmethod
    def attributes(cls) -> Mapping[Hashable, AttributeDefinition]:
        return cls.schema().definitions

    @classmethod
    def after_set_callbacks(cls) -> tuple[AfterSetCallback, ...]:
        return cls.schema().callbacks

    @classmethod
    def allow_dynamic_attributes(cls) -> bool:
        return cls.schema().allow_dynamic_attributes

    @classmethod
    def ignore_nil_default_values(cls) -> bool:
        return cls.schema().ignore_nil_default_values

    # -- construction ------------------------------------------------------

    def __init__(
        self,
        data: object = None,
        /,
        *,
        skip_required_attrs: Iterable[Hashable] = (),
        pre_init: PreInit | None = None,
        **options: Any,
    ) -> None:
        super().__init__()
        init_options = dict(options)
        if skip_required_attrs:
            init_options["skip_required_attrs"] = skip_required_attrs
        if pre_init is not None:
            init_options["pre_init"] = pre_init
        self._setup(init_options)

        supplied = self._coerce_input(data)
        for key, value in supplied.items():
            self.set(key, value, skip_after_set=True)
        apply_defaults(self, supplied.keys())
        self._run_callbacks(None, None)
        self.validate_all()

    def _setup(self, init_options: dict[str, Any]) -> None:
        registry = self.schema()
        skipped = init_options.get("skip_required_attrs", ())
        if isinstance(skipped, (str, bytes)):
            skipped = (skipped,)
        self._init_options = init_options
        self._skip_required_attrs = frozenset(
            registry.key_normalizer.lookup_key(key) for key in skipped  # type: ignore[misc]
        )
        pre_init = init_options.get("pre_init")
        if pre_init is not None:
            pre_init(self)

    def _coerce_input(self, data: object) -> dict[Hashable, Any]:
        if data is None:
            return {}
        if isinstance(data, Mapping):
            pairs: Iterable[tuple[Any, Any]] = data.items()
        elif hasattr(data, "keys"):
            pairs = ((key, data[key]) for key in data.keys())  # type: ignore[index]
        else:
            pairs = dict(data).items()  # type: ignore[call-overload]
        normalizer = self.schema().key_normalizer
        return {normalizer.normalize(key): value for key, value in pairs}

    @classmethod
    def _from_snapshot(cls, data: Mapping[Hashable, Any], init_options: dict[str, Any]) -> Self:
        """Rebuild a record from stored values without defaults or the validation sweep."""

        record = cls.__new__(cls)
        dict.__init__(record)
        record._setup(dict(init_options))
        for key, value in data.items():
            dict.__setitem__(record, key, value)
        record._run_callbacks(None, None)
        return record

    # -- write path --------------------------------------------------------

    def set(
        self,
        key: object,
        value: Any,
        *,
        skip_validate: bool = False,
        skip_after_set: bool = False,
    ) -> None:
        registry = self.schema()
        normalizer = registry.key_normalizer
        canonical = normalizer.normalize(key)
        value = normalizer.normalize_value(value)

        if not skip_validate:
            self._check_required(canonical, value)

        definition = registry.get(canonical)
        if definition is None and not registry.allow_dynamic_attributes:
            raise UndeclaredAttributeError(
                f"attribute {canonical!r} is not declared for {type(self).__name__}",
                attribute=canonical,
                record_type=type(self).__name__,
            )

        if definition is not None:
            if definition.transform is not None:
                value = definition.transform(canonical, value, self)
            if definition.type is not None:
                value = definition.type.coerce(value)
            # transforms and coercion may hand back plain containers
            value = normalizer.normalize_value(value)

        dict.__setitem__(self, canonical, value)

        if not skip_after_set:
            self._run_callbacks(canonical, value)

    def __setitem__(self, key: object, value: Any) -> None:
        self.set(key, value)

    def setdefault(self, key: object, default: Any = None) -> Any:
        if key not in self:
            self.set(key, default)
        return self[key]

    def update(  # type: ignore[override]
        self,
        *others: object,
        resolve: Resolver | None = None,
        **kwargs: Any,
    ) -> None:
        """Write every pair of ``others`` then ``kwargs`` through the write path.

        ``resolve(key, current, incoming)`` decides the written value when the
        key is already present.
        """

        for other in (*others, kwargs):
            for key, value in _pairs(other):
                if resolve is not None and key in self:
                    value = resolve(self._lookup(key), self[key], value)
                self.set(key, value)

    def merge(self, *others: object, resolve: Resolver | None = None, **kwargs: Any) -> Self:
        """In-place ``update`` returning the record."""

        self.update(*others, resolve=resolve, **kwargs)
        return self

    def __ior__(self, other: object) -> Self:  # type: ignore[override,misc]
        self.update(other)
        return self

    def __or__(self, other: object) -> Self:  # type: ignore[override]
        if not isinstance(other, Mapping):
            return NotImplemented
        merged = self.duplicate()
        merged.update(other)
        return merged

    def _run_callbacks(self, key: Hashable | None, value: Any) -> None:
        for callback in self.schema().callbacks:
            callback(self, key, value)

    # -- read path ---------------------------------------------------------

    def _lookup(self, key: object) -> Any:
        return self.schema().key_normalizer.lookup_key(key)

    def __getitem__(self, key: object) -> Any:
        lookup = self._lookup(key)
        if not _is_hashable(lookup):
            return None
        return super().__getitem__(lookup)

    def __missing__(self, key: object) -> None:
        return None

    def get(self, key: object, default: Any = None) -> Any:
        lookup = self._lookup(key)
        if not _is_hashable(lookup):
            return default
        return super().get(lookup, default)

    def __contains__(self, key: object) -> bool:
        lookup = self._lookup(key)
        return _is_hashable(lookup) and super().__contains__(lookup)

    # -- deletion ----------------------------------------------------------

    def __delitem__(self, key: object) -> None:
        super().__delitem__(self._lookup(key))

    def pop(self, key: object, *default: Any) -> Any:
        return super().pop(self._lookup(key), *default)

    def delete(self, key: object) -> Any:
        """Remove ``key`` and return its value, or ``None`` when absent."""

        lookup = self._lookup(key)
        if not _is_hashable(lookup):
            return None
        return super().pop(lookup, None)

    # -- validation --------------------------------------------------------

    def is_attribute_required(self, key: object) -> bool:
        """Whether ``key`` is required for this record (schema minus ``skip_required_attrs``)."""

        canonical = self._lookup(key)
        return canonical not in self._skip_required_attrs and self.schema().is_required(canonical)

    def _check_required(self, key: Hashable, value: Any) -> None:
        if (value is None or value is UNDEFINED) and self.is_attribute_required(key):
            raise MissingRequiredAttributeError(
                f"attribute {key!r} is required for {type(self).__name__}",
                attribute=key,
                record_type=type(self).__name__,
            )

    def validate_all(self) -> None:
        """Run the required check for every declared attribute against its stored value."""

        for key in self.schema().definitions:
            self._check_required(key, dict.get(self, key))

    # -- duplication & conversion -----------------------------------------

    @property
    def init_options(self) -> dict[str, Any]:
        return dict(self._init_options)

    @property
    def skip_required_attrs(self) -> frozenset[Hashable]:
        return self._skip_required_attrs

    def duplicate(self) -> Self:
        return type(self)._from_snapshot(dict(self), self._init_options)

    def copy(self) -> Self:  # type: ignore[override]
        return self.duplicate()

    def __copy__(self) -> Self:
        return self.duplicate()

    def __deepcopy__(self, memo: dict[int, Any]) -> Self:
        data = copy.deepcopy(dict(self), memo)
        return type(self)._from_snapshot(data, self._init_options)

    def __reduce__(self) -> tuple[Any, ...]:
        return (_restore_record, (type(self), dict(self), self._init_options))

    def to_dict(self) -> dict[Hashable, Any]:
        plain = to_plain(self)
        assert isinstance(plain, dict)
        return plain

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict.__repr__(self)})"


def _parent_registry(cls: type) -> SchemaRegistry | None:
    for base in cls.__mro__[1:]:
        registry = vars(base).get("__schema__")
        if isinstance(registry, SchemaRegistry):
            return registry
    return None


def _is_hashable(key: object) -> bool:
    # isinstance(key, Hashable) misses tuples holding unhashable items
    try:
        hash(key)
    except TypeError:
        return False
    return True


def _pairs(other: object) -> Iterable[tuple[Any, Any]]:
    if isinstance(other, Mapping):
        return other.items()
    if hasattr(other, "keys"):
        return ((key, other[key]) for key in other.keys())  # type: ignore[index]
    return other  # type: ignore[return-value]


def _restore_record(
    cls: type[SuperDict], data: Mapping[Hashable, Any], init_options: dict[str, Any]
) -> SuperDict:
    return cls._from_snapshot(data, init_options)


__all__ = [
    "PreInit",
    "Resolver",
    "SuperDict",
]
