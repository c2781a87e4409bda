"""
Structured logging for the CopyWorx service.

structlog renders every event; the standard library ``logging`` module owns
the handlers, so uvicorn and library loggers end up on the same streams.
Loggers are resolved against the current configuration on every call, which
lets the CLI reapply settings after modules have already created their
module-level loggers.
"""

import logging
import os
import sys
from typing import Any, List, Optional

import structlog
from structlog.stdlib import BoundLogger
from structlog.types import Processor

SHARED_PROCESSORS: List[Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.UnicodeDecoder(),
]


def _renderer(json_format: bool) -> Processor:
    if json_format:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=False)


def _handlers(log_file: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    for handler in handlers:
        handler.setFormatter(logging.Formatter("%(message)s"))
    return handlers


def setup_logging(
    level: str = "INFO",
    json_format: bool = True,
    log_file: Optional[str] = None
) -> None:
    """
    Apply a logging configuration. Safe to call more than once.

    Args:
        level (str): Log level (DEBUG, INFO, WARNING, ERROR)
        json_format (bool): JSON lines when true, plain console output otherwise
        log_file (Optional[str]): Also write to this file
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        handlers=_handlers(log_file),
        force=True,
    )

    structlog.configure(
        processors=[*SHARED_PROCESSORS, _renderer(json_format)],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        # Module-level loggers are created at import time, before settings load
        cache_logger_on_first_use=False,
    )


def configure_logging(settings: Any) -> None:
    """Apply the ``log_level``, ``log_json`` and ``log_file`` settings."""
    setup_logging(level=settings.log_level, json_format=settings.log_json, log_file=settings.log_file)


def get_logger(name: str) -> BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name (str): Logger name (usually __name__)

    Returns:
        BoundLogger: Logger that follows the latest configuration
    """
    return structlog.get_logger(name)


setup_logging(
    level=os.getenv("LOG_LEVEL", "INFO"),
    json_format=os.getenv("LOG_JSON", "true").lower() == "true",
    log_file=os.getenv("LOG_FILE"),
)
