"""Structured logging: structlog loggers bound to stdlib loggers, JSON-lines or console output."""

from __future__ import annotations

import logging
import sys
from typing import IO, Any, Final

import structlog

from superdict.config import Settings, get_settings
from superdict.constants import DEFAULT_LOGGER_NAME, LOG_FORMATS, LOG_LEVELS

_HANDLER_MARKER: Final[str] = "_superdict_handler"


def get_logger(name: str) -> Any:
    """Return a lazily-bound structlog logger backed by the stdlib logger ``name``.

    Stdlib levels gate output, so nothing is emitted until an application
    configures handlers (``configure_logging`` or its own setup).
    """

    return structlog.wrap_logger(
        logging.getLogger(name),
        wrapper_class=structlog.stdlib.BoundLogger,
    )


def configure_logging(
    level: int | str = "INFO",
    fmt: str = "json",
    *,
    stream: IO[str] | None = None,
    logger_name: str = DEFAULT_LOGGER_NAME,
) -> logging.Logger:
    """Configure structlog processors and a stream handler for ``logger_name``.

    Parameters
    ----------
    level:
        Stdlib level name or number; events below it are filtered.
    fmt:
        ``"json"`` for one JSON object per line, ``"text"`` for console output.
    stream:
        Target stream, ``sys.stderr`` by default.
    logger_name:
        Stdlib logger that receives the handler.
    """

    parsed_level = _parse_log_level(level)
    renderer = _renderer_for(fmt)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    logger = logging.getLogger(logger_name)
    logger.setLevel(parsed_level)
    logger.propagate = False
    for existing in list(logger.handlers):
        if getattr(existing, _HANDLER_MARKER, False):
            logger.removeHandler(existing)
            existing.close()

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(parsed_level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    setattr(handler, _HANDLER_MARKER, True)
    logger.addHandler(handler)
    return logger


def configure_logging_from_settings(
    settings: Settings | None = None,
    *,
    stream: IO[str] | None = None,
) -> logging.Logger:
    """Configure logging from ``Settings`` (or the process-wide settings)."""

    if settings is None:
        settings = get_settings()
    return configure_logging(settings.log_level, settings.log_format, stream=stream)


def reset_logging(logger_name: str = DEFAULT_LOGGER_NAME) -> None:
    """Remove handlers installed by ``configure_logging`` and restore structlog defaults."""

    logger = logging.getLogger(logger_name)
    for existing in list(logger.handlers):
        if getattr(existing, _HANDLER_MARKER, False):
            logger.removeHandler(existing)
            existing.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    structlog.reset_defaults()


def _renderer_for(fmt: str) -> Any:
    normalized = fmt.strip().lower()
    if normalized not in LOG_FORMATS:
        expected = ", ".join(LOG_FORMATS)
        raise ValueError(f"unsupported log format {fmt!r}; expected one of: {expected}")
    if normalized == "json":
        return structlog.processors.JSONRenderer(sort_keys=True)
    return structlog.dev.ConsoleRenderer(colors=False)


def _parse_log_level(level: int | str) -> int:
    if isinstance(level, bool):
        raise ValueError("log level must be a level name or number")
    if isinstance(level, int):
        return level
    normalized = level.strip().upper()
    if normalized not in LOG_LEVELS:
        expected = ", ".join(LOG_LEVELS)
        raise ValueError(f"unsupported log level {level!r}; expected one of: {expected}")
    return int(logging.getLevelName(normalized))


__all__ = [
    "configure_logging",
    "configure_logging_from_settings",
    "get_logger",
    "reset_logging",
]
