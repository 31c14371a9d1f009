"""Library settings: schema, validation, and the TOML + environment loader."""

from superdict.config.loader import get_settings, load_settings, reset_settings, set_settings
from superdict.config.schema import (
    Settings,
    SettingsError,
    SettingsIssue,
    default_settings,
    validate_settings,
)

__all__ = [
    "Settings",
    "SettingsError",
    "SettingsIssue",
    "default_settings",
    "get_settings",
    "load_settings",
    "reset_settings",
    "set_settings",
    "validate_settings",
]
