"""
superdict — key normalization policies.

File: src/superdict/keys.py
Last updated: 2026-10-19

Purpose
- Convert incoming keys into the canonical form a record stores.

What should be included in this file
- ``StrictKeys``: accepts only whitelisted atomic key kinds, no conversion.
- ``IndifferentKeys``: canonicalizes any key-like input to ``str`` and
  converts nested mappings into ``IndifferentDict`` containers.
- ``IndifferentDict``: schema-less mapping used for nested indifferent values.

Functional requirements
- Write-path normalization raises ``UnsupportedKeyKindError`` on rejection.
- Read-path lookups never raise for unsupported kinds; they simply miss.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Mapping
from enum import Enum
from typing import Any, Protocol

from superdict.constants import INDIFFERENT_KEY_TYPES, STRICT_KEY_TYPES
from superdict.errors import InvalidAttributeKeyError, UnsupportedKeyKindError
from superdict.utils import to_plain


class KeyNormalizer(Protocol):
    """Pluggable policy selected when a record type is declared."""

    name: str
    attribute_key_types: tuple[type, ...]

    def normalize(self, key: object) -> Hashable: ...

    def lookup_key(self, key: object) -> object: ...

    def normalize_value(self, value: object) -> object: ...


def _is_instance_of(key: object, kinds: tuple[type, ...]) -> bool:
    if isinstance(key, bool):
        return False
    return isinstance(key, kinds)


def _kind_names(kinds: tuple[type, ...]) -> str:
    return ", ".join(kind.__name__ for kind in kinds)


def validate_attribute_key(
    normalizer: KeyNormalizer, key: object, *, record_type: str | None = None
) -> Hashable:
    """Return ``key`` when it may name an attribute under ``normalizer``."""

    kinds = normalizer.attribute_key_types
    if not _is_instance_of(key, kinds):
        raise InvalidAttributeKeyError(
            f"attribute key must be one of {_kind_names(kinds)} in {normalizer.name} mode, "
            f"got {type(key).__name__}",
            attribute=key if isinstance(key, Hashable) else None,
            record_type=record_type,
        )
    assert isinstance(key, Hashable)
    return key


class StrictKeys:
    """Keys must already be canonical atomic values."""

    name = "strict"
    attribute_key_types: tuple[type, ...] = STRICT_KEY_TYPES

    def normalize(self, key: object) -> Hashable:
        if not _is_instance_of(key, self.attribute_key_types):
            raise UnsupportedKeyKindError(
                f"key {key!r} of kind {type(key).__name__} is not supported in strict mode; "
                f"expected one of {_kind_names(self.attribute_key_types)}",
                attribute=key if isinstance(key, Hashable) else None,
            )
        assert isinstance(key, Hashable)
        return key

    def lookup_key(self, key: object) -> object:
        return key

    def normalize_value(self, value: object) -> object:
        return value

    def __repr__(self) -> str:
        return "StrictKeys()"


class IndifferentKeys:
    """Any key-like input is canonicalized to ``str``; nested maps follow suit."""

    name = "indifferent"
    attribute_key_types: tuple[type, ...] = INDIFFERENT_KEY_TYPES

    def normalize(self, key: object) -> Hashable:
        if key is None:
            raise UnsupportedKeyKindError("None is not a valid key in indifferent mode")
        if isinstance(key, str):
            return key
        if isinstance(key, Enum):
            member_value = key.value
            return member_value if isinstance(member_value, str) else str(member_value)
        if isinstance(key, (bytes, bytearray)):
            try:
                return bytes(key).decode("utf-8")
            except UnicodeDecodeError as exc:
                raise UnsupportedKeyKindError(
                    f"key {key!r} is not valid UTF-8 and cannot be used in indifferent mode"
                ) from exc
        return str(key)

    def lookup_key(self, key: object) -> object:
        if key is None:
            return None
        try:
            return self.normalize(key)
        except UnsupportedKeyKindError:
            return key

    def normalize_value(self, value: object) -> object:
        if isinstance(value, IndifferentDict) or _is_record(value):
            return value
        if isinstance(value, Mapping):
            return IndifferentDict(value)
        if isinstance(value, list):
            return [self.normalize_value(item) for item in value]
        if isinstance(value, tuple):
            return tuple(self.normalize_value(item) for item in value)
        return value

    def normalize_mapping(self, data: Mapping[Any, object]) -> dict[Hashable, object]:
        return {self.normalize(key): self.normalize_value(value) for key, value in data.items()}

    def __repr__(self) -> str:
        return "IndifferentKeys()"


def _is_record(value: object) -> bool:
    # Schema records keep their own contract when nested.
    return getattr(type(value), "__schema__", None) is not None


_INDIFFERENT = IndifferentKeys()


class IndifferentDict(dict):  # type: ignore[type-arg]
    """Plain nested mapping whose keys are canonicalized like an indifferent record."""

    def __init__(
        self,
        data: Mapping[Any, object] | Iterable[tuple[Any, object]] | None = None,
        /,
        **kwargs: object,
    ) -> None:
        super().__init__()
        self.update(data, **kwargs)

    def __setitem__(self, key: object, value: object) -> None:
        super().__setitem__(_INDIFFERENT.normalize(key), _INDIFFERENT.normalize_value(value))

    def __getitem__(self, key: object) -> Any:
        return super().__getitem__(_INDIFFERENT.lookup_key(key))

    def __delitem__(self, key: object) -> None:
        super().__delitem__(_INDIFFERENT.lookup_key(key))

    def __contains__(self, key: object) -> bool:
        return super().__contains__(_INDIFFERENT.lookup_key(key))

    def get(self, key: object, default: object = None) -> Any:
        return super().get(_INDIFFERENT.lookup_key(key), default)

    def pop(self, key: object, *default: object) -> Any:
        return super().pop(_INDIFFERENT.lookup_key(key), *default)

    def setdefault(self, key: object, default: object = None) -> Any:
        if key not in self:
            self[key] = default
        return self[key]

    def update(self, data: object = None, /, **kwargs: object) -> None:  # type: ignore[override]
        if data is not None:
            pairs = data.items() if isinstance(data, Mapping) else data
            for key, value in pairs:  # type: ignore[union-attr]
                self[key] = value
        for key, value in kwargs.items():
            self[key] = value

    def copy(self) -> IndifferentDict:
        return IndifferentDict(self)

    def __or__(self, other: object) -> IndifferentDict:
        if not isinstance(other, Mapping):
            return NotImplemented
        merged = self.copy()
        merged.update(other)
        return merged

    def __ior__(self, other: object) -> IndifferentDict:  # type: ignore[override,misc]
        self.update(other)
        return self

    def to_dict(self) -> dict[str, Any]:
        plain = to_plain(self)
        assert isinstance(plain, dict)
        return plain


__all__ = [
    "IndifferentDict",
    "IndifferentKeys",
    "KeyNormalizer",
    "StrictKeys",
    "validate_attribute_key",
]
