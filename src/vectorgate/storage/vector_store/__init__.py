"""
Vector engine backends.

    - base: capability interface (BaseVectorEngine) and filter/point types
    - qdrant: production backend over AsyncQdrantClient
    - memory: dictionary-backed backend for development and tests
    - manager: backend selection from settings
"""

from vectorgate.storage.vector_store.base import (
    BaseVectorEngine,
    EngineCollectionInfo,
    EnginePoint,
    FieldMatch,
    PointFilter,
    ScoredPoint,
)
from vectorgate.storage.vector_store.manager import create_engine
from vectorgate.storage.vector_store.memory import InMemoryVectorEngine
from vectorgate.storage.vector_store.qdrant import QdrantVectorEngine

__all__ = [
    "BaseVectorEngine",
    "EngineCollectionInfo",
    "EnginePoint",
    "FieldMatch",
    "InMemoryVectorEngine",
    "PointFilter",
    "QdrantVectorEngine",
    "ScoredPoint",
    "create_engine",
]
