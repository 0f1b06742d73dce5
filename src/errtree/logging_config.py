"""
Diagnostics for errtree's own events, routed through structlog.

Rendered error trees never pass through here; they go to sinks. This module
only carries the library's internal events (``settings_installed``,
``sink_flush_failed``, ``fatal_exit``) on the ``errtree`` logger hierarchy,
which does not propagate into the application's root logger.
"""

from __future__ import annotations

import logging.config
import sys
from typing import Any, Optional

import structlog

_CONFIGURED = False

LIBRARY_LOGGER = "errtree"

# Shared by structlog events and foreign stdlib records on the errtree loggers.
_PRE_CHAIN: list[Any] = [
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso", utc=False),
]


def _renderer(json_output: Optional[bool]) -> Any:
    """JSON lines for files and pipes, a readable console line on a terminal."""
    if json_output is None:
        json_output = not sys.stderr.isatty()
    if json_output:
        return structlog.processors.JSONRenderer(sort_keys=True)
    return structlog.dev.ConsoleRenderer(colors=False)


def configure_logging(log_level: str = "WARNING", json_output: Optional[bool] = None) -> None:
    """
    Configure the errtree diagnostics loggers. Idempotent - the first call wins.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: Render JSON lines (True), console lines (False), or pick by
            whether stderr is a terminal (None)
    """
    global _CONFIGURED

    if _CONFIGURED:
        return

    level = log_level.upper()

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "errtree": {
                    "()": structlog.stdlib.ProcessorFormatter,
                    "processors": [
                        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                        _renderer(json_output),
                    ],
                    "foreign_pre_chain": _PRE_CHAIN,
                },
            },
            "handlers": {
                "errtree_stderr": {
                    "class": "logging.StreamHandler",
                    "formatter": "errtree",
                    "stream": "ext://sys.stderr",
                },
            },
            "loggers": {
                LIBRARY_LOGGER: {
                    "level": level,
                    "propagate": False,
                    "handlers": ["errtree_stderr"],
                },
            },
        }
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_PRE_CHAIN,
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    _CONFIGURED = True


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger; pass a name under ``errtree`` for library events."""
    return structlog.get_logger(name)  # type: ignore[no-any-return]
