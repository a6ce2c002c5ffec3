"""
Domain records and result structures for the storage layer.

Records (:class:`MemoryRecord`, :class:`DocumentChunk`) are pydantic models
in strict mode so that a payload which drifted from the expected shape fails
validation instead of being coerced. Results returned by the stores are plain
dataclasses with ``to_dict()`` for serialization.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict

DEFAULT_GROUP_KEY = "DEFAULT"


class MemoryRecord(BaseModel):
    """
    A single remembered fact about a user.

    Attributes:
        user_id: Owner of the memory (tenant key)
        category: Free-text classification ("personal", "work", ...)
        key: Short identifier of the fact ("food_preferences")
        value: The remembered content
        source: Provenance tag ("auto_detected", "manual", ...)
        message_id: Originating chat message, if any
        created: Creation time (unix seconds)
        updated: Last update time (unix seconds)
        active: Soft-delete marker; inactive memories are hidden from
            search and scroll but still removed by deletes
    """

    model_config = ConfigDict(strict=True, extra="ignore", frozen=True)

    user_id: int
    category: str
    key: str
    value: str
    source: str
    message_id: Optional[int] = None
    created: int
    updated: int
    active: bool


class DocumentChunk(BaseModel):
    """
    One chunk of an uploaded file.

    Attributes:
        user_id: Owner of the file (tenant key)
        file_id: Source file reference
        group_key: Free-text grouping tag, ``"DEFAULT"`` when untagged
        file_type: Numeric file-type code
        chunk_index: Position of the chunk within its file
        start_line: First source line covered by the chunk
        end_line: Last source line covered by the chunk
        text: Chunk content
        created: Creation time (unix seconds)
    """

    model_config = ConfigDict(strict=True, extra="ignore", frozen=True)

    user_id: int
    file_id: int
    group_key: str = DEFAULT_GROUP_KEY
    file_type: int
    chunk_index: int
    start_line: int
    end_line: int
    text: str
    created: int


@dataclass
class MemoryPoint:
    """A memory to upsert: caller ID, vector and record."""

    point_id: str
    vector: List[float]
    record: MemoryRecord
    namespace: Optional[str] = None


@dataclass
class DocumentPoint:
    """A document chunk to upsert: caller ID, vector and chunk."""

    point_id: str
    vector: List[float]
    chunk: DocumentChunk


@dataclass
class MemorySearchResult:
    """A memory hit from a similarity search."""

    id: str
    score: float
    record: MemoryRecord

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "score": self.score, "payload": self.record.model_dump()}


@dataclass
class MemoryEntry:
    """A memory returned by scroll (no score, no vector)."""

    id: str
    record: MemoryRecord

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "payload": self.record.model_dump()}


@dataclass
class DocumentSearchResult:
    """
    A document chunk hit.

    ``vector`` is only populated by an exact get, which also reports a
    synthetic score of 1.0.
    """

    id: str
    score: float
    chunk: DocumentChunk
    vector: Optional[List[float]] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "score": self.score,
            "payload": self.chunk.model_dump(),
        }
        if self.vector is not None:
            data["vector"] = self.vector
        return data


@dataclass
class BatchError:
    """A failed item of a batch upsert."""

    point_id: str
    error: str


@dataclass
class BatchResult:
    """Outcome of a batch upsert; partial success is expected."""

    success_count: int = 0
    failed_count: int = 0
    errors: List[BatchError] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class DocumentStats:
    """Per-owner aggregate over all stored document chunks."""

    total_chunks: int = 0
    total_files: int = 0
    total_groups: int = 0
    chunks_by_group: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class CollectionInfo:
    """Status and size of a physical collection."""

    status: str
    points_count: int
    vectors_count: int
    indexed_vectors_count: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
