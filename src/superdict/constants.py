"""Stable constants shared across the schema engine, key policies, and settings."""

from __future__ import annotations

from typing import Final

# Attribute key kinds accepted in strict mode (bool is excluded explicitly).
STRICT_KEY_TYPES: Final[tuple[type, ...]] = (str, int, float)

# Attribute key kinds accepted in indifferent mode.
INDIFFERENT_KEY_TYPES: Final[tuple[type, ...]] = (str,)

# Options understood by attribute declarations.
ATTRIBUTE_OPTIONS: Final[frozenset[str]] = frozenset({"required", "type", "default", "transform"})

# Library settings sources.
ENV_PREFIX: Final[str] = "SUPERDICT_"
PYPROJECT_FILE: Final[str] = "pyproject.toml"
PYPROJECT_TABLE: Final[tuple[str, ...]] = ("tool", "superdict")

# Logging.
DEFAULT_LOGGER_NAME: Final[str] = "superdict"
LOG_LEVELS: Final[tuple[str, ...]] = ("DEBUG", "INFO", "WARNING", "ERROR")
LOG_FORMATS: Final[tuple[str, ...]] = ("json", "text")

__all__ = [
    "ATTRIBUTE_OPTIONS",
    "DEFAULT_LOGGER_NAME",
    "ENV_PREFIX",
    "INDIFFERENT_KEY_TYPES",
    "LOG_FORMATS",
    "LOG_LEVELS",
    "PYPROJECT_FILE",
    "PYPROJECT_TABLE",
    "STRICT_KEY_TYPES",
]
