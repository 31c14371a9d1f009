"""Public observability primitives: structlog-backed loggers and their configuration."""

from superdict.observability.logging import (
    configure_logging,
    configure_logging_from_settings,
    get_logger,
    reset_logging,
)

__all__ = [
    "configure_logging",
    "configure_logging_from_settings",
    "get_logger",
    "reset_logging",
]
