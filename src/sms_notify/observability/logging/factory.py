"""Observability – structlog configuration."""
from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

import structlog

from sms_notify.observability.logging.filters import SensitiveFieldsFilter

DEFAULT_LEVEL = logging.WARNING


def resolve_level(value: str | int | None, default: int = DEFAULT_LEVEL) -> int:
    """Map ``"debug"``, ``"INFO"``, ``10`` … to a :mod:`logging` level."""
    if value is None or value == "":
        return default
    if isinstance(value, int):
        return value
    if value.strip().isdigit():
        return int(value)
    level = logging.getLevelName(value.strip().upper())
    return level if isinstance(level, int) else default


def configure_logging(
    level: int = DEFAULT_LEVEL,
    sensitive_fields: frozenset[str] | None = None,
    stream: TextIO | None = None,
) -> None:
    """Route structlog through stdlib logging as JSON lines on *stream* (stderr)."""
    shared_processors: list[Any] = [
        SensitiveFieldsFilter(sensitive_fields),
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    structlog.configure(
        processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        # module-level loggers may be first used before configure_logging runs
        cache_logger_on_first_use=False,
    )
    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.JSONRenderer(),
        ],
    )
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(formatter)
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    # httpx logs full request URLs (ntfy topics) at INFO
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))
    logging.getLogger("httpcore").setLevel(max(level, logging.WARNING))


def get_logger(name: str | None = None, **initial_values: Any) -> Any:
    """Return a structlog logger, optionally bound to *initial_values*."""
    logger = structlog.get_logger(name)
    if initial_values:
        logger = logger.bind(**initial_values)
    return logger


__all__ = ["DEFAULT_LEVEL", "configure_logging", "get_logger", "resolve_level"]
