"""
VectorGate Storage Module - Tenant-isolated access to a vector database.

This package turns a vector engine into two tenant-scoped stores:

    - MemoryStore: per-user memories with optional namespace collections,
      similarity search and scroll over active records
    - DocumentStore: per-user document chunks with group keys, bulk deletes,
      group reassignment and aggregated statistics

Supporting pieces:
    - identity: string ID to native numeric point ID
    - namespace: namespace sanitization and collection naming
    - provisioner: idempotent, race-tolerant collection creation
    - codec: record <-> payload mapping with the embedded original ID
    - stats: thread-safe operation counters
    - vector_store: engine interface plus Qdrant and in-memory backends

Example:
    >>> from vectorgate.storage import MemoryStore, InMemoryVectorEngine
    >>> store = MemoryStore(InMemoryVectorEngine(), "user_memories", dimension=128)
    >>> await store.upsert("mem_1_a", vector, record)
    >>> hits = await store.search(vector, user_id=1, limit=5, min_score=0.5)
"""

from vectorgate.storage.document_store import DocumentStore
from vectorgate.storage.memory_store import MemoryStore
from vectorgate.storage.models import (
    BatchError,
    BatchResult,
    CollectionInfo,
    DocumentChunk,
    DocumentPoint,
    DocumentSearchResult,
    DocumentStats,
    MemoryEntry,
    MemoryPoint,
    MemoryRecord,
    MemorySearchResult,
)
from vectorgate.storage.provisioner import CollectionProvisioner
from vectorgate.storage.stats import StatsSnapshot, StatsTracker
from vectorgate.storage.vector_store import (
    BaseVectorEngine,
    InMemoryVectorEngine,
    QdrantVectorEngine,
    create_engine,
)

__all__ = [
    "BaseVectorEngine",
    "BatchError",
    "BatchResult",
    "CollectionInfo",
    "CollectionProvisioner",
    "DocumentChunk",
    "DocumentPoint",
    "DocumentSearchResult",
    "DocumentStats",
    "DocumentStore",
    "InMemoryVectorEngine",
    "MemoryEntry",
    "MemoryPoint",
    "MemoryRecord",
    "MemorySearchResult",
    "MemoryStore",
    "QdrantVectorEngine",
    "StatsSnapshot",
    "StatsTracker",
    "create_engine",
]
