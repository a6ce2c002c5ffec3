"""
Engine capability interface and engine-neutral data structures.

The stores never talk to a concrete client. They depend on
:class:`BaseVectorEngine`, a narrow async interface over the operations the
layer actually needs, so they can run against Qdrant in production and
against :class:`~vectorgate.storage.vector_store.memory.InMemoryVectorEngine`
in development and tests.

Filters are expressed with :class:`PointFilter`, a conjunction of exact
payload matches, which every backend translates into its own query form.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

DISTANCE_COSINE = "cosine"


@dataclass(frozen=True)
class FieldMatch:
    """Exact match of a payload field against a value."""

    key: str
    value: Any


@dataclass(frozen=True)
class PointFilter:
    """Conjunction of field matches; every condition must hold."""

    must: Tuple[FieldMatch, ...] = ()

    @classmethod
    def of(cls, **conditions: Any) -> "PointFilter":
        """Build a filter from keyword conditions, skipping ``None`` values."""
        return cls(
            must=tuple(
                FieldMatch(key, value)
                for key, value in conditions.items()
                if value is not None
            )
        )

    def matches(self, payload: Dict[str, Any]) -> bool:
        for condition in self.must:
            if condition.key not in payload:
                return False
            value = payload[condition.key]
            # bool is an int subclass; keep True from matching 1
            if isinstance(value, bool) != isinstance(condition.value, bool):
                return False
            if value != condition.value:
                return False
        return True


@dataclass
class EnginePoint:
    """A point as stored in the engine."""

    id: int
    payload: Dict[str, Any] = field(default_factory=dict)
    vector: Optional[List[float]] = None


@dataclass
class ScoredPoint(EnginePoint):
    """A point returned by similarity search."""

    score: float = 0.0


@dataclass
class EngineCollectionInfo:
    """Collection status as reported by the engine."""

    status: str
    points_count: int
    indexed_vectors_count: int


class BaseVectorEngine(ABC):
    """Abstract base class for vector engine backends."""

    @abstractmethod
    async def list_collections(self) -> List[str]:
        """Return the names of all collections."""
        pass

    @abstractmethod
    async def create_collection(
        self, name: str, dimension: int, distance: str = DISTANCE_COSINE
    ) -> None:
        """
        Create a collection.

        Raises:
            CollectionExistsError: If the collection already exists
        """
        pass

    @abstractmethod
    async def create_field_index(
        self, collection: str, field_name: str, field_type: str
    ) -> None:
        """Create a secondary index on a payload field."""
        pass

    @abstractmethod
    async def upsert_points(self, collection: str, points: Sequence[EnginePoint]) -> None:
        """Insert or replace points by native ID."""
        pass

    @abstractmethod
    async def get_points(
        self, collection: str, ids: Sequence[int], with_vectors: bool = False
    ) -> List[EnginePoint]:
        """Fetch points by native ID; missing IDs are omitted."""
        pass

    @abstractmethod
    async def delete_points(self, collection: str, ids: Sequence[int]) -> None:
        """Delete points by native ID; unknown IDs are ignored."""
        pass

    @abstractmethod
    async def delete_by_filter(self, collection: str, point_filter: PointFilter) -> None:
        """Delete every point matching the filter."""
        pass

    @abstractmethod
    async def search_points(
        self,
        collection: str,
        vector: Sequence[float],
        limit: int,
        point_filter: Optional[PointFilter] = None,
        score_threshold: Optional[float] = None,
    ) -> List[ScoredPoint]:
        """Similarity search ordered by descending score, payload included."""
        pass

    @abstractmethod
    async def scroll_points(
        self,
        collection: str,
        point_filter: Optional[PointFilter] = None,
        limit: int = 100,
        offset: Optional[Any] = None,
        with_vectors: bool = False,
    ) -> Tuple[List[EnginePoint], Optional[Any]]:
        """
        Return one page of matching points and the cursor of the next page.

        The cursor is ``None`` when there are no further pages.
        """
        pass

    @abstractmethod
    async def set_payload(
        self, collection: str, point_filter: PointFilter, payload: Dict[str, Any]
    ) -> None:
        """Merge ``payload`` into every point matching the filter."""
        pass

    @abstractmethod
    async def count_points(
        self, collection: str, point_filter: Optional[PointFilter] = None
    ) -> int:
        """Count points matching the filter."""
        pass

    @abstractmethod
    async def collection_info(self, collection: str) -> EngineCollectionInfo:
        """Return status and point counts of a collection."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Return True when the engine answers."""
        pass

    async def close(self) -> None:
        """Release the underlying client."""
        return None
