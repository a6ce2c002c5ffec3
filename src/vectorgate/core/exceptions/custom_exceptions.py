"""
Custom exception hierarchy for VectorGate error handling.

This module defines the structured exception hierarchy used throughout the
storage layer. Each exception carries a machine-readable error code, a
details dictionary for logging, and the HTTP-equivalent status that whatever
boundary hosts the layer should answer with.

Exception Hierarchy:
    VectorGateError (base)
    ├── ConfigurationError: Invalid settings or unknown backends
    ├── InvalidRequestError: Caller errors (dimension mismatch, bad batch size)
    ├── NotFoundError: A requested single entity does not exist
    ├── EngineError: The vector engine call failed or answered unexpectedly
    │   └── CollectionExistsError: Create raced with another creator
    └── DecodeError: A stored payload no longer matches its record model

Propagation rules:
    - InvalidRequestError is raised before any engine call and is never retried
    - NotFoundError is raised only at the boundary; stores return ``None``
    - EngineError is logged with full detail, callers see a generic message
    - DecodeError signals data drift and is never coerced to defaults

Example:
    >>> try:
    ...     await store.upsert("mem_1_a", vector, record)
    ... except InvalidRequestError as e:
    ...     logger.warning("Rejected upsert", error_code=e.error_code,
    ...                    details=e.details)
    >>>
    >>> raise EngineError(
    ...     "Qdrant upsert failed",
    ...     error_code="ENGINE_UPSERT_ERROR",
    ...     details={"collection": "user_memories"}
    ... )
"""

from typing import Any, Dict, Optional


class VectorGateError(Exception):
    """
    Base exception class for all VectorGate errors.

    Attributes:
        message (str): Human-readable error description
        error_code (str): Machine-readable error identifier
        details (Dict[str, Any]): Additional contextual information
        status_code (int): HTTP-equivalent status for the error class

    The error_code follows the MODULE_OPERATION_ERROR convention
    (e.g. "ENGINE_SEARCH_ERROR") and defaults to the class name.
    """

    status_code: int = 500

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}

    @property
    def public_message(self) -> str:
        """Message that is safe to show to callers."""
        return self.message

    def to_response(self) -> Dict[str, Any]:
        """
        Render the error as a response body for the hosting boundary.

        Returns:
            Dict[str, Any]: ``{"error": <message>, "status": <status_code>}``
        """
        return {"error": self.public_message, "status": self.status_code}


class ConfigurationError(VectorGateError):
    """
    Raised when configuration validation or setup fails.

    Example:
        >>> raise ConfigurationError(
        ...     "Unknown vector backend",
        ...     error_code="CONFIG_UNKNOWN_BACKEND",
        ...     details={"backend": "faiss"}
        ... )
    """

    pass


class InvalidRequestError(VectorGateError):
    """
    Raised for caller errors that are detected before any engine call.

    Common scenarios:
        - Vector length differs from the configured dimension
        - Empty batch or batch above the configured maximum
        - Blank text handed to an embedding-backed operation
    """

    status_code = 400


class NotFoundError(VectorGateError):
    """Raised by the boundary when a requested entity does not exist"""

    status_code = 404


class EngineError(VectorGateError):
    """
    Raised when a vector engine operation fails.

    Wraps transport errors, unexpected HTTP statuses and malformed responses
    from the engine. The original exception is chained as ``__cause__`` and
    the full detail is logged; callers only see :attr:`public_message`.
    """

    @property
    def public_message(self) -> str:
        return "Database operation failed"


class CollectionExistsError(EngineError):
    """Raised when creating a collection that already exists"""

    pass


class DecodeError(VectorGateError):
    """Raised when a stored payload does not match the expected record shape"""

    pass
