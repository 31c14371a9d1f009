"""
superdict — unit tests for type capabilities

File: tests/unit/test_type_capabilities.py
Last updated: 2026-10-19

Purpose
- Validate the pydantic-backed ``TypeCapability`` implementation.

What this test file should cover
- Coercion and constraint failures.
- Built-in defaults: literal, factory, copy isolation.
- Protocol conformance of third-party capabilities.
"""

from __future__ import annotations

import copy

import pytest

from superdict.types import UNDEFINED, ConstraintError, PydanticType, TypeCapability


def test_coerce_returns_validated_value() -> None:
    assert PydanticType(int).coerce("3") == 3
    assert PydanticType(str).coerce("Yoda") == "Yoda"


def test_coerce_failure_raises_constraint_error_with_details() -> None:
    capability = PydanticType(str)

    with pytest.raises(ConstraintError) as excinfo:
        capability.coerce(1)

    assert excinfo.value.value == 1
    assert excinfo.value.errors
    assert isinstance(excinfo.value, ValueError)


def test_strict_mode_rejects_lax_conversions() -> None:
    with pytest.raises(ConstraintError):
        PydanticType(int, strict=True).coerce("3")


def test_default_is_reported_and_produced() -> None:
    capability = PydanticType(str, default="Yoda")

    assert capability.has_default() is True
    assert capability.coerce_undefined() == "Yoda"
    assert capability.coerce(UNDEFINED) == "Yoda"


def test_without_default_coerce_undefined_fails() -> None:
    capability = PydanticType(str)

    assert capability.has_default() is False
    with pytest.raises(ConstraintError):
        capability.coerce_undefined()


def test_container_default_is_copied_per_use() -> None:
    capability = PydanticType(list[int], default=[])

    first = capability.coerce_undefined()
    first.append(1)  # type: ignore[attr-defined]

    assert capability.coerce_undefined() == []


def test_factory_default_is_called() -> None:
    calls: list[int] = []

    def factory() -> dict[str, int]:
        calls.append(1)
        return {"count": len(calls)}

    capability = PydanticType(dict[str, int], default=factory)

    assert capability.coerce_undefined() == {"count": 1}
    assert capability.coerce_undefined() == {"count": 2}


def test_optional_accepts_none_and_keeps_default() -> None:
    capability = PydanticType(str, default="x").optional()

    assert capability.coerce(None) is None
    assert capability.has_default() is True


def test_with_default_derives_new_capability() -> None:
    base = PydanticType(int)
    derived = base.with_default(7)

    assert base.has_default() is False
    assert derived.coerce_undefined() == 7
    assert derived("8") == 8


def test_undefined_is_falsy_singleton() -> None:
    assert not UNDEFINED
    assert copy.deepcopy(UNDEFINED) is UNDEFINED
    assert repr(UNDEFINED) == "UNDEFINED"


def test_custom_capability_satisfies_protocol() -> None:
    class Upper:
        def has_default(self) -> bool:
            return False

        def coerce(self, value: object) -> object:
            return str(value).upper()

        def coerce_undefined(self) -> object:
            raise ConstraintError("no default")

    assert isinstance(Upper(), TypeCapability)
    assert isinstance(PydanticType(int), TypeCapability)
    assert not isinstance(object(), TypeCapability)
