"""Structlog configuration for the adapter and its host pipeline."""
import logging
import sys
from typing import Optional

import structlog


def configure_logging(level: int = logging.INFO, json_output: Optional[bool] = None):
    """
    Configure structlog for console or machine-readable output.

    Args:
        level: Minimum stdlib log level that gets rendered
        json_output: Force JSON (True) or console (False) rendering;
            None picks console output when stderr is a terminal
    """
    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.CallsiteParameterAdder(
            {
                structlog.processors.CallsiteParameter.MODULE,
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            }
        ),
    ]

    if json_output is None:
        json_output = not sys.stderr.isatty()

    if json_output:
        processors = shared_processors + [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = shared_processors + [structlog.dev.ConsoleRenderer()]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=False,
    )


def bind_feed_context(**context):
    """Attach feed-level fields (input path, prefix) to every later log line."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(**context)


def get_logger(name: str = None):
    """Get a configured structlog logger."""
    return structlog.get_logger(name)
