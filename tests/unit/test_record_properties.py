"""
superdict — property-based tests for record invariants

File: tests/unit/test_record_properties.py
Last updated: 2026-10-19

Purpose
- Check the "for all" guarantees of records with hypothesis.

What this test file should cover
- Reads of undeclared keys never raise.
- Missing required attributes always fail unless skipped.
- Explicit input always beats a declared default.
- Duplicates equal their source and keep their options.
"""

from __future__ import annotations

from hypothesis import given, settings
from hypothesis import strategies as st

from superdict import IndifferentSuperDict, SuperDict
from superdict.errors import MissingRequiredAttributeError, UndeclaredAttributeError

_NAMES = st.text(alphabet="abcdefghijklmnopqrstuvwxyz_", min_size=1, max_size=12)
_VALUES = st.one_of(
    st.integers(),
    st.text(max_size=20),
    st.lists(st.integers(), max_size=4),
    st.booleans(),
)


def _record_type(
    required: list[str], optional: list[str], *, indifferent: bool = False
) -> type[SuperDict]:
    base: type[SuperDict] = IndifferentSuperDict if indifferent else SuperDict

    class Payload(base):  # type: ignore[misc,valid-type]
        pass

    for name in required:
        Payload.attribute(name)
    for name in optional:
        Payload.optional_attribute(name)
    return Payload


@settings(max_examples=40, deadline=None)
@given(declared=st.lists(_NAMES, max_size=5, unique=True), probe=_NAMES)
def test_undeclared_reads_never_raise(declared: list[str], probe: str) -> None:
    record_cls = _record_type([], declared)
    record = record_cls()

    assert record.get(probe) is None
    assert record[probe] is None


@settings(max_examples=40, deadline=None)
@given(
    names=st.lists(_NAMES, min_size=1, max_size=5, unique=True),
    indifferent=st.booleans(),
)
def test_missing_required_attribute_always_fails(names: list[str], indifferent: bool) -> None:
    record_cls = _record_type(names, [], indifferent=indifferent)

    try:
        record_cls()
    except MissingRequiredAttributeError as exc:
        assert exc.attribute == names[0]
    else:
        raise AssertionError("construction without required attributes must fail")

    assert record_cls(skip_required_attrs=names) == {}


@settings(max_examples=40, deadline=None)
@given(name=_NAMES, default=_VALUES, supplied=_VALUES)
def test_explicit_input_beats_default(name: str, default: object, supplied: object) -> None:
    record_cls = _record_type([], [])
    record_cls.attribute(name, default=lambda: default)

    assert record_cls({name: supplied})[name] == supplied
    assert record_cls()[name] == default


@settings(max_examples=40, deadline=None)
@given(data=st.dictionaries(_NAMES, _VALUES, max_size=5))
def test_duplicate_equals_source(data: dict[str, object]) -> None:
    record_cls = _record_type([], list(data))
    record = record_cls(data, label="copy")

    duplicate = record.duplicate()

    assert duplicate == record
    assert duplicate.init_options == {"label": "copy"}


@settings(max_examples=40, deadline=None)
@given(declared=st.lists(_NAMES, max_size=4, unique=True), key=_NAMES, value=_VALUES)
def test_dynamic_policy_decides_undeclared_writes(
    declared: list[str], key: str, value: object
) -> None:
    record_cls = _record_type([], declared)
    record = record_cls()

    if key in declared:
        record[key] = value
        assert record[key] == value
        return

    try:
        record[key] = value
    except UndeclaredAttributeError:
        pass
    else:
        raise AssertionError("undeclared write must fail while dynamic attributes are off")

    record_cls.configure(allow_dynamic_attributes=True)
    record[key] = value
    assert record[key] == value
