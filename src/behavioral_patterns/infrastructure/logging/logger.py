"""Logging setup for the application.

Module code logs through ``get_logger(__name__)`` (stdlib loggers). Event-style
logging with key/value context goes through ``get_structured_logger`` which
returns a structlog logger bound to the same stdlib handlers.
"""
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import List, Optional

import structlog

from behavioral_patterns.config.schemas.logging_schema import LoggingConfig

_SHARED_PROCESSORS = [
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
]

_HANDLER_MARKER = "_bpatterns_handler"


def configure_structlog() -> None:
    """Route structlog through stdlib logging so one set of handlers renders everything."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_SHARED_PROCESSORS,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def _build_formatter(log_format: str) -> logging.Formatter:
    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)
    return structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=_SHARED_PROCESSORS,
    )


def setup_logging(config: Optional[LoggingConfig] = None) -> structlog.stdlib.BoundLogger:
    """
    Set up logging for the application.

    Args:
        config: Logging configuration. Defaults to ``LoggingConfig()``.

    Returns:
        Configured structlog logger for the application.
    """
    config = config or LoggingConfig()

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, config.level.upper()))

    handlers: List[logging.Handler] = []
    formatter = _build_formatter(config.format)

    if config.destination in ("file", "both"):
        log_path = os.path.expandvars(config.file_path)
        log_dir = os.path.dirname(log_path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=config.max_size_mb * 1024 * 1024,
            backupCount=config.backup_count,
        )
        handlers.append(file_handler)

    if config.destination in ("console", "both"):
        # Console logs go to stderr so command output on stdout stays parseable
        handlers.append(logging.StreamHandler(sys.stderr))

    # Remove handlers installed by a previous call and add the new ones
    for handler in root_logger.handlers[:]:
        if getattr(handler, _HANDLER_MARKER, False):
            root_logger.removeHandler(handler)
            handler.close()

    for handler in handlers:
        handler.setFormatter(formatter)
        setattr(handler, _HANDLER_MARKER, True)
        root_logger.addHandler(handler)

    configure_structlog()

    logger = get_structured_logger("behavioral_patterns")
    logger.debug(
        "Logging configured",
        log_level=config.level,
        log_destination=config.destination,
        log_format=config.format,
    )
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a module logger."""
    return logging.getLogger(name)


def get_structured_logger(name: str, **initial_values) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger, optionally bound to initial context values."""
    logger = structlog.get_logger(name)
    if initial_values:
        logger = logger.bind(**initial_values)
    return logger


configure_structlog()
