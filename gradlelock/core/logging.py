"""Structured logging for gradlelock — structlog rendered through stdlib logging.

Log output goes to stderr by default so that ``gradlelock render`` can pipe
the reconciled lock file from stdout.

Environment:
    GRADLELOCK_LOG_LEVEL   level for the gradlelock loggers (default: INFO)
    GRADLELOCK_LOG_FORMAT  console | json (default: console)
"""

from __future__ import annotations

import logging
import logging.config
import os
from typing import IO

import structlog

LOGGER_NAMES = ("gradlelock.engine", "gradlelock.cli")

_FORMATS = ("console", "json")


def _resolve(level: str | None, fmt: str | None) -> tuple[str, str]:
    log_level = (level or os.environ.get("GRADLELOCK_LOG_LEVEL") or "INFO").upper()
    if not isinstance(logging.getLevelName(log_level), int):
        log_level = "INFO"
    log_format = (fmt or os.environ.get("GRADLELOCK_LOG_FORMAT") or "console").lower()
    if log_format not in _FORMATS:
        log_format = "console"
    return log_level, log_format


def _pre_chain() -> list[structlog.types.Processor]:
    """Processors applied to both structlog events and foreign stdlib records."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
    ]


def _renderer(log_format: str) -> structlog.types.Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer(sort_keys=True)
    return structlog.dev.ConsoleRenderer(colors=False)


def setup_logging(
    level: str | None = None,
    fmt: str | None = None,
    stream: IO[str] | None = None,
) -> None:
    """Route structlog through a single stdlib handler.

    Explicit arguments win over the environment; unknown levels or formats
    fall back to INFO / console. Libraries outside gradlelock stay at WARNING.
    """
    log_level, log_format = _resolve(level, fmt)
    pre_chain = _pre_chain()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *pre_chain,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler: dict = {
        "class": "logging.StreamHandler",
        "formatter": "gradlelock",
        "stream": stream if stream is not None else "ext://sys.stderr",
    }
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "gradlelock": {
                    "()": structlog.stdlib.ProcessorFormatter,
                    "foreign_pre_chain": pre_chain,
                    "processors": [
                        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                        _renderer(log_format),
                    ],
                },
            },
            "handlers": {"stderr": handler},
            "root": {"handlers": ["stderr"], "level": "WARNING"},
            "loggers": {name: {"level": log_level} for name in LOGGER_NAMES},
        }
    )
