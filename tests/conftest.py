"""Shared fixtures: every test starts from built-in settings and unconfigured logging."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from superdict.config import Settings, reset_settings, set_settings
from superdict.observability import reset_logging

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture(autouse=True)
def _default_settings() -> Iterator[None]:
    set_settings(Settings())
    yield
    reset_settings()
    reset_logging()
