"""
superdict — settings loader.

File: src/superdict/config/loader.py
Last updated: 2026-10-19

Purpose
- Load effective library settings from defaults, a ``pyproject.toml``
  ``[tool.superdict]`` table, and ``SUPERDICT_`` environment variables.

What should be included in this file
- Precedence logic: env (SUPERDICT_) > file > defaults.
- TOML loading via ``tomllib``.
- Deterministic environment variable mapping and coercion.
- Process-wide settings holder used when record types are declared.

Functional requirements
- A missing default file is not an error; a missing explicit file is.
- Invalid values raise ``SettingsError`` with structured issues.

Non-functional requirements
- Loading is deterministic; it reads the file and environment only when called.
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final, Literal

from superdict.config.schema import (
    SETTINGS_FIELDS,
    Settings,
    SettingsError,
    SettingsIssue,
    default_settings,
    validate_settings,
)
from superdict.constants import ENV_PREFIX, PYPROJECT_FILE, PYPROJECT_TABLE

_BOOLEAN_TRUE: Final[frozenset[str]] = frozenset({"1", "true", "t", "yes", "y", "on"})
_BOOLEAN_FALSE: Final[frozenset[str]] = frozenset({"0", "false", "f", "no", "n", "off"})

_settings: Settings | None = None


@dataclass(frozen=True, slots=True)
class _Binding:
    field: str
    value_type: Literal["str", "bool"]


def load_settings(
    config_path: str | Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Load effective settings with deterministic precedence: env > file > defaults."""

    resolved_path = _resolve_config_path(config_path)
    env_map = dict(os.environ if environ is None else environ)

    document = _load_toml_file(resolved_path, required=config_path is not None)
    table = _extract_table(document, resolved_path)
    table_path = ".".join(PYPROJECT_TABLE)

    merged: dict[str, Any] = dict(table)
    validate_settings(merged, path=table_path)

    merged.update(_collect_env_overrides(env_map))
    return validate_settings(merged, path=table_path)


def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""

    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def set_settings(settings: Settings) -> Settings:
    """Replace the process-wide settings; returns the previous value."""

    global _settings
    if not isinstance(settings, Settings):
        raise TypeError(f"expected Settings, got {type(settings).__name__}")
    previous = _settings if _settings is not None else default_settings()
    _settings = settings
    return previous


def reset_settings() -> None:
    """Forget cached settings so the next ``get_settings`` reloads them."""

    global _settings
    _settings = None


def _resolve_config_path(config_path: str | Path | None) -> Path:
    if config_path is None:
        return (Path.cwd() / PYPROJECT_FILE).resolve()
    return Path(config_path).expanduser().resolve()


def _load_toml_file(path: Path, *, required: bool) -> dict[str, Any]:
    if not path.exists():
        if required:
            raise SettingsError([SettingsIssue(str(path), "settings file not found")])
        return {}

    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise SettingsError([SettingsIssue(str(path), f"invalid TOML: {exc}")]) from exc
    except OSError as exc:
        raise SettingsError([SettingsIssue(str(path), f"unable to read file: {exc}")]) from exc


def _extract_table(document: Mapping[str, object], path: Path) -> Mapping[str, object]:
    cursor: object = document
    for part in PYPROJECT_TABLE:
        if not isinstance(cursor, Mapping) or part not in cursor:
            return {}
        cursor = cursor[part]
    if not isinstance(cursor, Mapping):
        table = ".".join(PYPROJECT_TABLE)
        raise SettingsError([SettingsIssue(table, f"must be a table in {path}")])
    return cursor


def _build_bindings() -> dict[str, _Binding]:
    defaults = default_settings()
    bindings: dict[str, _Binding] = {}
    for name in SETTINGS_FIELDS:
        value_type: Literal["str", "bool"] = (
            "bool" if isinstance(getattr(defaults, name), bool) else "str"
        )
        bindings[_env_name_for_field(name)] = _Binding(field=name, value_type=value_type)
    return bindings


def _collect_env_overrides(environ: Mapping[str, str]) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    issues: list[SettingsIssue] = []
    bindings = _build_bindings()
    for env_name in sorted(bindings):
        raw = environ.get(env_name)
        if raw is None:
            continue
        binding = bindings[env_name]
        try:
            overrides[binding.field] = _coerce_env(raw, binding.value_type)
        except ValueError as exc:
            issues.append(SettingsIssue(f"{env_name} -> {binding.field}", str(exc)))
    if issues:
        raise SettingsError(issues)
    return overrides


def _coerce_env(raw: str, value_type: Literal["str", "bool"]) -> object:
    value = raw.strip()
    if value_type == "str":
        return value

    lowered = value.lower()
    if lowered in _BOOLEAN_TRUE:
        return True
    if lowered in _BOOLEAN_FALSE:
        return False
    raise ValueError("must be a boolean (true/false/1/0/yes/no/on/off)")


def _env_name_for_field(name: str) -> str:
    return ENV_PREFIX + name.upper()


__all__ = [
    "get_settings",
    "load_settings",
    "reset_settings",
    "set_settings",
]
