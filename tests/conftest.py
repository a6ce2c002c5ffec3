"""
Pytest configuration and fixtures for VectorGate tests
"""

from typing import List

import pytest

from vectorgate.core.config.settings import Settings
from vectorgate.storage.document_store import DocumentStore
from vectorgate.storage.memory_store import MemoryStore
from vectorgate.storage.models import DocumentChunk, MemoryRecord
from vectorgate.storage.stats import StatsTracker
from vectorgate.storage.vector_store.memory import InMemoryVectorEngine

DIMENSION = 128


def unit_vector(index: int, dimension: int = DIMENSION) -> List[float]:
    """Vector with a single 1.0 at ``index``."""
    vector = [0.0] * dimension
    vector[index] = 1.0
    return vector


@pytest.fixture(name="unit_vector")
def unit_vector_fixture():
    return unit_vector


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Test settings using the in-memory engine"""
    return Settings(
        ENVIRONMENT="testing",
        DEBUG=True,
        VECTOR_BACKEND="memory",
        VECTOR_DIMENSION=DIMENSION,
        LOG_LEVEL="DEBUG",
    )


@pytest.fixture
def engine() -> InMemoryVectorEngine:
    return InMemoryVectorEngine()


@pytest.fixture
def stats() -> StatsTracker:
    return StatsTracker()


@pytest.fixture
def memory_store(engine, stats) -> MemoryStore:
    return MemoryStore(engine, "user_memories", DIMENSION, stats=stats)


@pytest.fixture
def document_store(engine, stats) -> DocumentStore:
    return DocumentStore(engine, "user_documents", DIMENSION, stats=stats, stats_page_size=2)


@pytest.fixture
def make_memory():
    """Factory for memory records with sensible defaults"""

    def _make(user_id: int = 1, **overrides) -> MemoryRecord:
        fields = {
            "user_id": user_id,
            "category": "personal",
            "key": "food_preferences",
            "value": "Likes spicy ramen",
            "source": "manual",
            "created": 1700000000,
            "updated": 1700000000,
            "active": True,
        }
        fields.update(overrides)
        return MemoryRecord(**fields)

    return _make


@pytest.fixture
def make_chunk():
    """Factory for document chunks with sensible defaults"""

    def _make(user_id: int = 7, file_id: int = 42, **overrides) -> DocumentChunk:
        fields = {
            "user_id": user_id,
            "file_id": file_id,
            "file_type": 1,
            "chunk_index": 0,
            "start_line": 1,
            "end_line": 20,
            "text": "Quarterly revenue grew by eight percent.",
            "created": 1700000000,
        }
        fields.update(overrides)
        return DocumentChunk(**fields)

    return _make
