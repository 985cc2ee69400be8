"""
Structured logging configuration for the DAX tooling.
Provides console or JSON-structured logging through structlog.
"""

import logging
import sys
from typing import Optional

import structlog

from workflow_dag.core.config import Settings, get_settings


def configure_logging(settings: Optional[Settings] = None, level: Optional[str] = None) -> None:
    """Configure structured logging for the application."""
    settings = settings or get_settings()
    log_level = getattr(logging, (level or settings.log_level).upper())

    # Configure standard library logging
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=log_level,
    )

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if settings.log_format == "console":
        processors.extend([
            structlog.dev.ConsoleRenderer(colors=False),
        ])
    else:
        processors.extend([
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ])

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def bind_graph_id(graph_id: str) -> None:
    """Bind the graph being processed to the logging context."""
    structlog.contextvars.bind_contextvars(graph_id=graph_id)


def clear_graph_id() -> None:
    """Clear graph context from logging context."""
    structlog.contextvars.clear_contextvars()
