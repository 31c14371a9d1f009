"""
superdict — unit tests for default resolution

File: tests/unit/schema/test_default_resolution.py
Last updated: 2026-10-19

Purpose
- Validate default classification, callable arity, conflict detection, and the
  construction-time default sweep.
"""

from __future__ import annotations

import functools

import pytest
from structlog.testing import capture_logs

from superdict import PydanticType, SuperDict
from superdict.errors import ConflictingDefaultsError, MissingRequiredAttributeError
from superdict.schema.attributes import AttributeDefinition
from superdict.schema.defaults import (
    DefaultKind,
    callable_arity,
    classify_default,
    resolve_default,
)


@pytest.fixture
def record_cls() -> type[SuperDict]:
    class Payload(SuperDict):
        pass

    return Payload


def test_classify_default() -> None:
    assert classify_default("John") is DefaultKind.SCALAR
    assert classify_default(3) is DefaultKind.SCALAR
    assert classify_default((1, 2)) is DefaultKind.SCALAR
    assert classify_default([]) is DefaultKind.CONTAINER
    assert classify_default({"a": 1}) is DefaultKind.CONTAINER
    assert classify_default(lambda: 1) is DefaultKind.CALLABLE
    assert classify_default(str) is DefaultKind.SCALAR


def test_callable_arity() -> None:
    def with_optional(record: object, extra: int = 1) -> None:
        return None

    def varargs(*args: object) -> None:
        return None

    assert callable_arity(lambda: None) == 0
    assert callable_arity(lambda record: None) == 1
    assert callable_arity(with_optional) == 1
    assert callable_arity(varargs) == 1
    assert callable_arity(functools.partial(lambda a, b: None, 1)) == 1


def test_conflicting_defaults_fail_on_resolution(record_cls: type[SuperDict]) -> None:
    record_cls.optional_attribute(
        "name", default="John", type=PydanticType(str, default="Yoda")
    )

    with pytest.raises(ConflictingDefaultsError) as excinfo:
        record_cls()

    assert excinfo.value.attribute == "name"


def test_conflicting_defaults_are_not_checked_when_value_supplied(
    record_cls: type[SuperDict],
) -> None:
    record_cls.optional_attribute(
        "name", default="John", type=PydanticType(str, default="Yoda")
    )

    assert record_cls({"name": "Luke"})["name"] == "Luke"


def test_resolve_default_reports_source(record_cls: type[SuperDict]) -> None:
    record = record_cls()

    assert resolve_default(AttributeDefinition(key="a", default=1), record) == (1, "explicit")
    typed = AttributeDefinition(key="a", type=PydanticType(int, default=2))
    assert resolve_default(typed, record) == (2, "type")
    assert resolve_default(AttributeDefinition(key="a"), record)[1] is None


def test_zero_and_one_argument_callables(record_cls: type[SuperDict]) -> None:
    record_cls.attribute("name", default=lambda: "John")
    record_cls.attribute("nickname", default=lambda record: record["name"] + "ny")

    assert record_cls()["nickname"] == "Johnny"
    assert record_cls({"name": "Luke"})["nickname"] == "Lukeny"


def test_container_defaults_are_not_shared(record_cls: type[SuperDict]) -> None:
    record_cls.attribute("tags", default=[])

    first = record_cls()
    first["tags"].append("x")

    assert record_cls()["tags"] == []


def test_nil_default_is_skipped_for_optional_attribute(record_cls: type[SuperDict]) -> None:
    record_cls.optional_attribute("name", default=None)
    record_cls.optional_attribute("plain")

    with capture_logs() as logs:
        record = record_cls()

    assert "name" not in record
    assert "plain" not in record
    assert {entry["event"] for entry in logs} == {"default_skipped_nil"}


def test_nil_default_is_stored_when_policy_disabled(record_cls: type[SuperDict]) -> None:
    record_cls.configure(ignore_nil_default_values=False)
    record_cls.optional_attribute("name", default=None)

    record = record_cls()

    assert "name" in record
    assert record["name"] is None


def test_nil_default_for_required_attribute_fails(record_cls: type[SuperDict]) -> None:
    record_cls.attribute("name", default=None)

    with pytest.raises(MissingRequiredAttributeError):
        record_cls()
    assert record_cls(skip_required_attrs=["name"]).get("name") is None


def test_defaults_resolve_in_declaration_order(record_cls: type[SuperDict]) -> None:
    record_cls.attribute("first", default="a")
    record_cls.attribute("second", default=lambda record: record["first"] + "b")
    record_cls.attribute("third", default=lambda record: record["second"] + "c")

    assert record_cls().to_dict() == {"first": "a", "second": "ab", "third": "abc"}


def test_default_resolution_is_logged_with_source(record_cls: type[SuperDict]) -> None:
    record_cls.attribute("name", default="John")
    record_cls.attribute("kind", type=PydanticType(str, default="jedi"))

    with capture_logs() as logs:
        record_cls()

    resolved = [entry for entry in logs if entry["event"] == "default_resolved"]
    assert [(entry["attribute"], entry["source"]) for entry in resolved] == [
        ("name", "explicit"),
        ("kind", "type"),
    ]
    assert all("value" not in entry for entry in resolved)
