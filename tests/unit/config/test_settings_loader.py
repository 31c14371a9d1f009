"""
superdict — unit tests for the settings loader

File: tests/unit/config/test_settings_loader.py
Last updated: 2026-10-19

Purpose
- Validate settings precedence (env > pyproject table > defaults), env
  coercion, and the process-wide settings holder.

Functional requirements
- Offline; every test uses ``tmp_path`` and explicit ``environ`` mappings.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from superdict.config import (
    Settings,
    SettingsError,
    get_settings,
    load_settings,
    reset_settings,
    set_settings,
)


def _write_pyproject(path: Path, text: str) -> Path:
    target = path / "pyproject.toml"
    target.write_text(text, encoding="utf-8")
    return target


def test_defaults_when_file_has_no_table(tmp_path: Path) -> None:
    pyproject = _write_pyproject(tmp_path, '[project]\nname = "app"\n')

    assert load_settings(pyproject, environ={}) == Settings()


def test_precedence_default_file_env(tmp_path: Path) -> None:
    pyproject = _write_pyproject(
        tmp_path,
        """
[tool.superdict]
allow_dynamic_attributes = true
log_level = "debug"
""".strip(),
    )

    file_loaded = load_settings(pyproject, environ={})
    env_loaded = load_settings(
        pyproject,
        environ={
            "SUPERDICT_ALLOW_DYNAMIC_ATTRIBUTES": "no",
            "SUPERDICT_LOG_FORMAT": "TEXT",
        },
    )

    assert file_loaded.allow_dynamic_attributes is True
    assert file_loaded.log_level == "DEBUG"
    assert env_loaded.allow_dynamic_attributes is False
    assert env_loaded.log_level == "DEBUG"
    assert env_loaded.log_format == "text"


@pytest.mark.parametrize("raw", ["1", "true", "YES", " on "])
def test_env_booleans_accept_true_words(tmp_path: Path, raw: str) -> None:
    pyproject = _write_pyproject(tmp_path, "")

    loaded = load_settings(pyproject, environ={"SUPERDICT_CASCADE": raw})

    assert loaded.cascade is True


def test_invalid_env_boolean_reports_issue(tmp_path: Path) -> None:
    pyproject = _write_pyproject(tmp_path, "")

    with pytest.raises(SettingsError) as excinfo:
        load_settings(pyproject, environ={"SUPERDICT_CASCADE": "maybe"})

    assert excinfo.value.issues[0].path == "SUPERDICT_CASCADE -> cascade"


def test_invalid_file_values_collect_all_issues(tmp_path: Path) -> None:
    pyproject = _write_pyproject(
        tmp_path,
        """
[tool.superdict]
cascade = "yes"
log_format = "xml"
colour = true
""".strip(),
    )

    with pytest.raises(SettingsError) as excinfo:
        load_settings(pyproject, environ={})

    paths = sorted(issue.path for issue in excinfo.value.issues)
    assert paths == [
        "tool.superdict.cascade",
        "tool.superdict.colour",
        "tool.superdict.log_format",
    ]


def test_missing_explicit_file_is_an_error(tmp_path: Path) -> None:
    with pytest.raises(SettingsError, match="not found"):
        load_settings(tmp_path / "missing.toml", environ={})


def test_invalid_toml_is_an_error(tmp_path: Path) -> None:
    pyproject = _write_pyproject(tmp_path, "[tool.superdict\n")

    with pytest.raises(SettingsError, match="invalid TOML"):
        load_settings(pyproject, environ={})


def test_default_path_is_optional(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)

    assert load_settings(environ={}) == Settings()


def test_get_settings_loads_once_and_can_be_overridden(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("SUPERDICT_ALLOW_DYNAMIC_ATTRIBUTES", "true")
    reset_settings()

    loaded = get_settings()
    assert loaded.allow_dynamic_attributes is True
    assert get_settings() is loaded

    previous = set_settings(Settings(cascade=True))
    assert previous is loaded
    assert get_settings().cascade is True

    with pytest.raises(TypeError):
        set_settings({"cascade": True})  # type: ignore[arg-type]
