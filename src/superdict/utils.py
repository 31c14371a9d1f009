"""Deep-path helpers for nested mappings: bury, flatten_to_root, and plain conversion."""

from __future__ import annotations

from collections.abc import Callable, Hashable, Mapping
from typing import Any

KeyMethod = Callable[[str], Hashable]
DescendPredicate = Callable[[Mapping[Any, object]], bool]


def bury(obj: Any, *path_and_value: object) -> Any:
    """Deeply set a value, creating intermediate dicts for missing path segments.

    The last argument is the value; every argument before it is a path segment.
    Existing sibling keys along the path are left untouched. Returns ``obj``.

    >>> bury({}, "a", "b", 1)
    {'a': {'b': 1}}
    """

    if len(path_and_value) < 2:
        raise ValueError("bury requires at least one path segment and a value")

    key, *rest = path_and_value
    if len(rest) == 1:
        obj[key] = rest[0]
        return obj

    child = _child(obj, key)
    if child is None or child is False:
        obj[key] = {}
    # re-read: the container may have been converted on write
    bury(obj[key], *rest)
    return obj


def _child(obj: Any, key: object) -> object:
    try:
        return obj[key]
    except (KeyError, IndexError):
        return None


def flatten_to_root(
    obj: Mapping[Any, object] | list[object] | tuple[object, ...],
    *,
    flatten_arrays: bool = False,
    join_with: str = ".",
    key_method: KeyMethod = str,
    should_descend: DescendPredicate | None = None,
) -> dict[Hashable, object]:
    """Flatten nested mappings into a single level keyed by joined paths.

    Lists and tuples are flattened by index only when ``flatten_arrays`` is set.
    Empty containers stay as leaves. ``should_descend`` may veto descending into
    a particular mapping, which is then kept as a leaf.
    """

    if isinstance(obj, Mapping):
        items: Any = obj.items()
    elif isinstance(obj, (list, tuple)):
        items = enumerate(obj)
    else:
        raise TypeError(f"expected a mapping, list or tuple, got {type(obj).__name__}")

    flat: dict[Hashable, object] = {}
    for key, value in items:
        descendable = isinstance(value, Mapping) or (
            flatten_arrays and isinstance(value, (list, tuple))
        )
        vetoed = (
            should_descend is not None
            and isinstance(value, Mapping)
            and not should_descend(value)
        )
        if descendable and not vetoed and value:
            nested = flatten_to_root(
                value,  # type: ignore[arg-type]
                flatten_arrays=flatten_arrays,
                join_with=join_with,
                should_descend=should_descend,
            )
            for nested_key, leaf in nested.items():
                flat[key_method(f"{key}{join_with}{nested_key}")] = leaf
        else:
            flat[key_method(str(key))] = value
    return flat


def to_plain(value: object) -> object:
    """Recursively convert mappings (records included) into plain dicts and lists."""

    if isinstance(value, Mapping):
        return {key: to_plain(item) for key, item in value.items()}
    if isinstance(value, list):
        return [to_plain(item) for item in value]
    if isinstance(value, tuple):
        return tuple(to_plain(item) for item in value)
    return value


class Helpers:
    """Mixin exposing the deep-path helpers on a mapping instance."""

    def bury(self, *path_and_value: object) -> Any:
        return bury(self, *path_and_value)

    def flatten_to_root(self, **options: Any) -> dict[Hashable, object]:
        assert isinstance(self, Mapping)
        return flatten_to_root(self, **options)


__all__ = [
    "Helpers",
    "bury",
    "flatten_to_root",
    "to_plain",
]
