"""
VectorGate - Multi-tenant access layer over a vector database

VectorGate exposes user memories and document chunks stored in Qdrant as
addressable points with tenant-isolated filtering, similarity search and
document lifecycle operations.

Key Features:
    - Deterministic string IDs mapped onto the engine's numeric point IDs
    - Namespaced physical collections provisioned on first write
    - Typed payload round-tripping with drift detection
    - Owner-scoped search, scroll, bulk deletes and group reassignment
    - Per-owner document statistics
    - In-process operation counters

Modules:
    core: Configuration, logging and exceptions
    storage: Stores, codec, provisioning and engine backends
    embedding: Embedding capability interface
    service: Process-wide facade
    cli: Command-line tools

Example:
    >>> from vectorgate import Settings, get_logger
    >>> settings = Settings()
    >>> logger = get_logger(__name__)
    >>> logger.info("VectorGate initialized")
"""

__version__ = "0.1.0"
__description__ = (
    "Multi-tenant access layer exposing memories and document chunks "
    "stored in a vector database."
)

from vectorgate.core.config.settings import Settings
from vectorgate.core.logging.logger import get_logger

__all__ = [
    "Settings",
    "get_logger",
]
