"""
VectorGate Logging Module - Structured Application Logging.

Structured logging for the storage layer, built on structlog with rich
console output in development and JSON lines in production.

Output Formats:
    - JSON: Structured format for log aggregation systems
    - Text: Human-readable format for development and console output
    - Rich: Enhanced console output with colors and formatting

Example:
    >>> from vectorgate.core.logging import get_logger
    >>>
    >>> logger = get_logger(__name__)
    >>> logger.info("Search finished", user_id=1, hits=3)
    >>>
    >>> # Bind persistent context
    >>> scoped = logger.bind(collection="user_memories_feedback")
    >>> scoped.info("Collection provisioned")
"""

from vectorgate.core.logging.logger import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
