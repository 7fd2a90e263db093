"""
Logging Configuration for Retail Sales Dashboard

structlog on top of the standard library: application loggers, server
loggers and third-party libraries all end up in one stdout handler,
rendered as JSON lines or as colored console output.
"""

import logging
import sys
from typing import List, Optional

import structlog
from structlog.types import Processor

from src.config.settings import get_settings

# Server loggers get our handler instead of their own
_SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access", "gunicorn.error")

# Chatty libraries, capped at WARNING unless DEBUG is requested
_QUIET_LOGGERS = ("sqlalchemy.engine", "aiosqlite", "asyncio", "faker")


def _shared_processors() -> List[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(log_format: str) -> Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


def configure_logging(log_level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """
    Configure structured logging for the application.

    Safe to call more than once; handlers are replaced, not stacked.

    Args:
        log_level: Override log level (DEBUG, INFO, WARNING, ERROR)
        log_format: Override renderer, "json" or "text"
    """
    settings = get_settings()
    level_name = (log_level or settings.monitoring.log_level).upper()
    fmt = (log_format or settings.monitoring.log_format).lower()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.INFO

    shared = _shared_processors()
    structlog.configure(
        processors=shared + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=_renderer(fmt),
            foreign_pre_chain=shared,
        )
    )

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)

    for name in _SERVER_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers = [handler]
        server_logger.setLevel(level)
        server_logger.propagate = False

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(level if level <= logging.DEBUG else logging.WARNING)

    structlog.get_logger(__name__).info(
        "Logging configured",
        level=level_name,
        format=fmt,
        environment=settings.app_env,
    )
