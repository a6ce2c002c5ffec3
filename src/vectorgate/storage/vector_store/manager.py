"""
Engine selection from settings.
"""

from vectorgate.core.config.settings import Settings
from vectorgate.core.exceptions.custom_exceptions import ConfigurationError
from vectorgate.core.logging.logger import get_logger
from vectorgate.storage.vector_store.base import BaseVectorEngine
from vectorgate.storage.vector_store.memory import InMemoryVectorEngine
from vectorgate.storage.vector_store.qdrant import QdrantVectorEngine

logger = get_logger(__name__)


def create_engine(settings: Settings) -> BaseVectorEngine:
    """
    Build the vector engine named by ``settings.VECTOR_BACKEND``.

    Raises:
        ConfigurationError: If the backend is unknown
    """
    backend = settings.VECTOR_BACKEND.lower()

    if backend == "qdrant":
        logger.info(f"Using Qdrant engine at {settings.QDRANT_URL}")
        return QdrantVectorEngine(
            url=settings.QDRANT_URL,
            api_key=settings.QDRANT_API_KEY,
            timeout=settings.QDRANT_TIMEOUT,
            prefer_grpc=settings.QDRANT_PREFER_GRPC,
        )
    if backend == "memory":
        logger.info("Using in-memory vector engine")
        return InMemoryVectorEngine()

    raise ConfigurationError(
        f"Unknown vector backend: {settings.VECTOR_BACKEND}",
        error_code="CONFIG_UNKNOWN_BACKEND",
        details={"backend": settings.VECTOR_BACKEND},
    )
