"""
Structured logging configuration for VectorGate.

This module provides the logging infrastructure with support for structured
logging, JSON formatting and rich console output. It integrates structlog for
structured key-value logging while remaining compatible with the standard
Python logging module used by the Qdrant client and httpx.

Functions:
    setup_logging(): Initialize logging configuration
    get_logger(name): Get configured logger instance

Configuration:
    Logging behavior is controlled by settings / environment variables:
    - LOG_LEVEL: Minimum log level (DEBUG/INFO/WARNING/ERROR/CRITICAL)
    - LOG_FORMAT: Output format (json/text)
    - LOG_FILE_PATH: Optional file output path
    - DEBUG / ENVIRONMENT: Development mode selects rich console output

Example:
    >>> from vectorgate.core.logging.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("Collection created", collection="user_memories")
"""


import logging
import sys
from pathlib import Path
from typing import List, Optional

import structlog
from rich.console import Console
from rich.logging import RichHandler
from structlog.types import Processor

from vectorgate.core.config.settings import settings

# Client libraries that log every HTTP/gRPC round trip to the vector engine
CLIENT_LOGGERS = ("httpx", "httpcore", "qdrant_client", "grpc", "urllib3")


def _build_processors(log_format: str) -> List[Processor]:
    processors: List[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="ISO"),
        structlog.processors.format_exc_info,
    ]

    if log_format.lower() == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))
    return processors


def _build_handlers(level: str) -> List[logging.Handler]:
    handlers: List[logging.Handler] = []

    if settings.DEBUG or settings.ENVIRONMENT == "development":
        # stderr keeps CLI table output on stdout clean
        handlers.append(
            RichHandler(
                console=Console(stderr=True),
                show_path=False,
                markup=False,
                rich_tracebacks=True,
            )
        )
    else:
        handlers.append(logging.StreamHandler(sys.stdout))

    if settings.LOG_FILE_PATH:
        file_path = Path(settings.LOG_FILE_PATH)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(file_path))

    for handler in handlers:
        handler.setLevel(level)
    return handlers


def setup_logging(level: Optional[str] = None) -> None:
    """
    Initialize logging configuration.

    Args:
        level: Overrides ``LOG_LEVEL``; the CLI passes "DEBUG" for --verbose

    Engine client loggers stay at WARNING unless the effective level is
    DEBUG, so per-request HTTP lines only show up while debugging.
    Calling this again replaces the previously installed handlers.
    """
    level = (level or settings.LOG_LEVEL).upper()

    structlog.configure(
        processors=_build_processors(settings.LOG_FORMAT),
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        level=level,
        handlers=_build_handlers(level),
        format="%(message)s",
        force=True,
    )

    client_level = logging.DEBUG if level == "DEBUG" else logging.WARNING
    for name in CLIENT_LOGGERS:
        logging.getLogger(name).setLevel(client_level)


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Get a configured structured logger instance.

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("Memory upserted", point_id="mem_1_a")
        >>> logger.bind(collection="user_documents").info("Stats aggregated")
    """
    if not structlog.is_configured():
        setup_logging()
    return structlog.get_logger(name)


# Setup logging on import
setup_logging()
