"""
superdict — library settings schema.

File: src/superdict/config/schema.py
Last updated: 2026-10-19

Purpose
- Define the process-wide defaults applied to record types declared without
  explicit policy keywords, plus logging preferences.

What should be included in this file
- ``Settings`` frozen dataclass and its built-in defaults.
- Strict validation of raw payloads collecting structured issues.

Functional requirements
- Unknown fields are rejected.
- Every issue carries a dotted path and a message; all issues are reported at
  once.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import asdict, dataclass, fields
from typing import Any

from superdict.constants import LOG_FORMATS, LOG_LEVELS


@dataclass(frozen=True, slots=True)
class Settings:
    """Effective library settings."""

    allow_dynamic_attributes: bool = False
    ignore_nil_default_values: bool = True
    cascade: bool = False
    log_level: str = "INFO"
    log_format: str = "json"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class SettingsIssue:
    """Single structured validation failure."""

    path: str
    message: str


class SettingsError(ValueError):
    """Raised when settings cannot be loaded or fail validation."""

    def __init__(self, issues: Sequence[SettingsIssue]) -> None:
        self.issues = tuple(issues)
        if not self.issues:
            rendered = "unknown validation failure"
        else:
            rendered = "\n".join(f"- {item.path}: {item.message}" for item in self.issues)
        super().__init__(f"invalid superdict settings:\n{rendered}")


class _IssueCollector:
    __slots__ = ("_items",)

    def __init__(self) -> None:
        self._items: list[SettingsIssue] = []

    def add(self, path: str, message: str) -> None:
        self._items.append(SettingsIssue(path=path, message=message))

    def items(self) -> tuple[SettingsIssue, ...]:
        return tuple(self._items)

    @property
    def has_issues(self) -> bool:
        return bool(self._items)


SETTINGS_FIELDS: tuple[str, ...] = tuple(item.name for item in fields(Settings))


def default_settings() -> Settings:
    return Settings()


def validate_settings(payload: Mapping[str, object], *, path: str = "") -> Settings:
    """Build ``Settings`` from ``payload`` layered on the defaults.

    Raises ``SettingsError`` listing every issue found.
    """

    issues = _IssueCollector()
    _reject_unknown_keys(payload, set(SETTINGS_FIELDS), path, issues)

    values: dict[str, Any] = default_settings().to_dict()
    for name in ("allow_dynamic_attributes", "ignore_nil_default_values", "cascade"):
        if name in payload:
            values[name] = _as_bool(payload[name], _join(path, name), issues)
    if "log_level" in payload:
        level = _as_str(payload["log_level"], _join(path, "log_level"), issues)
        values["log_level"] = _as_enum(
            level.upper() if level is not None else None,
            _join(path, "log_level"),
            issues,
            allowed_values=LOG_LEVELS,
        )
    if "log_format" in payload:
        fmt = _as_str(payload["log_format"], _join(path, "log_format"), issues)
        values["log_format"] = _as_enum(
            fmt.lower() if fmt is not None else None,
            _join(path, "log_format"),
            issues,
            allowed_values=LOG_FORMATS,
        )

    if issues.has_issues:
        raise SettingsError(issues.items())
    return Settings(**values)


def _as_bool(value: object, path: str, issues: _IssueCollector) -> bool | None:
    if isinstance(value, bool):
        return value
    issues.add(path, f"expected boolean, got {type(value).__name__}")
    return None


def _as_str(value: object, path: str, issues: _IssueCollector) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    if isinstance(value, str):
        issues.add(path, "must not be empty")
        return None
    issues.add(path, f"expected string, got {type(value).__name__}")
    return None


def _as_enum(
    value: str | None,
    path: str,
    issues: _IssueCollector,
    *,
    allowed_values: tuple[str, ...],
) -> str | None:
    if value is None:
        return None
    if value not in allowed_values:
        expected = ", ".join(sorted(allowed_values))
        issues.add(path, f"invalid value {value!r}; expected one of: {expected}")
        return None
    return value


def _reject_unknown_keys(
    payload: Mapping[str, object],
    allowed: set[str],
    path: str,
    issues: _IssueCollector,
) -> None:
    for key in sorted(payload):
        if key not in allowed:
            issues.add(_join(path, key), "unknown field")


def _join(path: str, key: str) -> str:
    if not path:
        return key
    return f"{path}.{key}"


__all__ = [
    "SETTINGS_FIELDS",
    "Settings",
    "SettingsError",
    "SettingsIssue",
    "default_settings",
    "validate_settings",
]
