"""
Memory records over the "memories" logical collection family.

Every operation takes an optional namespace which selects a physical
collection (``user_memories`` or ``user_memories_<namespace>``). Search and
scroll are always scoped to one owner and only see active memories; get and
delete address a single point and ignore the active flag.
"""

from typing import List, Optional, Sequence

from vectorgate.core.exceptions.custom_exceptions import VectorGateError
from vectorgate.core.logging.logger import get_logger
from vectorgate.storage.codec import decode, encode, extract_point_id
from vectorgate.storage.identity import to_native_id
from vectorgate.storage.models import (
    BatchError,
    BatchResult,
    CollectionInfo,
    MemoryEntry,
    MemoryPoint,
    MemoryRecord,
    MemorySearchResult,
)
from vectorgate.storage.namespace import resolve_collection_name
from vectorgate.storage.provisioner import MEMORY_INDEXES, CollectionProvisioner
from vectorgate.storage.stats import StatsTracker
from vectorgate.storage.validation import (
    resolve_limit,
    validate_batch_size,
    validate_dimension,
)
from vectorgate.storage.vector_store.base import (
    DISTANCE_COSINE,
    BaseVectorEngine,
    EnginePoint,
    PointFilter,
)

logger = get_logger(__name__)


class MemoryStore:
    """
    Tenant-scoped access to memory records.

    Attributes:
        engine: Shared vector engine
        provisioner: Creates namespace collections on first write
        collection_name: Logical (default) collection name
        dimension: Required length of every vector
        stats: Optional counters updated by writes, searches and deletes
    """

    def __init__(
        self,
        engine: BaseVectorEngine,
        collection_name: str,
        dimension: int,
        provisioner: Optional[CollectionProvisioner] = None,
        stats: Optional[StatsTracker] = None,
        default_limit: int = 5,
        default_min_score: float = 0.7,
        default_scroll_limit: int = 1000,
        max_batch_size: int = 100,
    ):
        self.engine = engine
        self.collection_name = collection_name
        self.dimension = dimension
        self.provisioner = provisioner or CollectionProvisioner(engine)
        self.stats = stats
        self.default_limit = default_limit
        self.default_min_score = default_min_score
        self.default_scroll_limit = default_scroll_limit
        self.max_batch_size = max_batch_size

    def collection_for(self, namespace: Optional[str] = None) -> str:
        return resolve_collection_name(self.collection_name, namespace)

    async def ensure_collection(self, namespace: Optional[str] = None) -> str:
        """Provision the collection for ``namespace`` and return its name."""
        collection = self.collection_for(namespace)
        await self.provisioner.ensure_collection(
            collection, self.dimension, DISTANCE_COSINE, MEMORY_INDEXES
        )
        return collection

    @staticmethod
    def _owner_filter(user_id: int, category: Optional[str]) -> PointFilter:
        return PointFilter.of(user_id=user_id, active=True, category=category)

    async def _upsert(
        self,
        point_id: str,
        vector: Sequence[float],
        record: MemoryRecord,
        namespace: Optional[str],
    ) -> None:
        validate_dimension(vector, self.dimension)

        collection = await self.ensure_collection(namespace)
        native_id = to_native_id(point_id)
        await self.engine.upsert_points(
            collection,
            [EnginePoint(id=native_id, vector=list(vector), payload=encode(record, point_id))],
        )
        logger.debug(f"Memory upserted: {point_id} (numeric: {native_id})")

    async def upsert(
        self,
        point_id: str,
        vector: Sequence[float],
        record: MemoryRecord,
        namespace: Optional[str] = None,
    ) -> None:
        """
        Insert or replace a memory.

        Re-upserting the same ``point_id`` replaces both vector and payload.

        Raises:
            InvalidRequestError: If the vector has the wrong dimension; no
                engine call is made in that case
            EngineError: If provisioning or the upsert fails
        """
        await self._upsert(point_id, vector, record, namespace)
        if self.stats:
            self.stats.increment_upserts(1)

    async def batch_upsert(
        self,
        points: Sequence[MemoryPoint],
        namespace: Optional[str] = None,
        max_batch: Optional[int] = None,
    ) -> BatchResult:
        """
        Upsert several memories, isolating per-item failures.

        Items are processed in order; a failing item is recorded in
        ``errors`` and does not stop the rest. Nothing is retried. An item's
        own namespace takes precedence over ``namespace``.

        Raises:
            InvalidRequestError: If the batch is empty or too large
        """
        max_batch = self.max_batch_size if max_batch is None else max_batch
        validate_batch_size(len(points), max_batch)
        logger.info(f"Batch upserting {len(points)} memories")

        result = BatchResult()
        for point in points:
            try:
                await self._upsert(
                    point.point_id,
                    point.vector,
                    point.record,
                    namespace if point.namespace is None else point.namespace,
                )
            except VectorGateError as e:
                result.failed_count += 1
                result.errors.append(
                    BatchError(point_id=point.point_id, error=e.public_message)
                )
            else:
                result.success_count += 1

        if self.stats:
            self.stats.increment_upserts(result.success_count)
        return result

    async def get(
        self, point_id: str, namespace: Optional[str] = None
    ) -> Optional[MemoryRecord]:
        """
        Fetch a memory by its string ID.

        Returns:
            Optional[MemoryRecord]: The record, or None if no such point

        Raises:
            DecodeError: If the stored payload no longer matches MemoryRecord
        """
        points = await self.engine.get_points(
            self.collection_for(namespace), [to_native_id(point_id)]
        )
        if not points:
            return None
        return decode(points[0].payload, MemoryRecord)

    async def delete(self, point_id: str, namespace: Optional[str] = None) -> None:
        """Delete a memory; deleting an unknown ID succeeds."""
        native_id = to_native_id(point_id)
        await self.engine.delete_points(self.collection_for(namespace), [native_id])
        if self.stats:
            self.stats.increment_deletes()
        logger.debug(f"Memory deleted: {point_id} (numeric: {native_id})")

    async def search(
        self,
        query_vector: Sequence[float],
        user_id: int,
        category: Optional[str] = None,
        limit: Optional[int] = None,
        min_score: Optional[float] = None,
        namespace: Optional[str] = None,
    ) -> List[MemorySearchResult]:
        """
        Similarity search over one owner's active memories.

        Results come back in the engine's order (descending score). Points
        scoring below ``min_score`` are excluded by the engine.

        Raises:
            InvalidRequestError: If the query vector has the wrong dimension
                or ``limit`` is below 1
        """
        validate_dimension(query_vector, self.dimension, "Query vector")
        limit = resolve_limit(limit, self.default_limit)

        hits = await self.engine.search_points(
            self.collection_for(namespace),
            list(query_vector),
            limit=limit,
            point_filter=self._owner_filter(user_id, category),
            score_threshold=self.default_min_score if min_score is None else min_score,
        )

        results = [
            MemorySearchResult(
                id=extract_point_id(hit.payload, hit.id),
                score=hit.score,
                record=decode(hit.payload, MemoryRecord),
            )
            for hit in hits
        ]

        if self.stats:
            self.stats.increment_searches()
        logger.debug(f"Search found {len(results)} memories for user {user_id}")
        return results

    async def scroll(
        self,
        user_id: int,
        category: Optional[str] = None,
        limit: Optional[int] = None,
        namespace: Optional[str] = None,
    ) -> List[MemoryEntry]:
        """
        List one owner's active memories without a query vector.

        Returns a single page of at most ``limit`` entries; vectors are not
        fetched.

        Raises:
            InvalidRequestError: If ``limit`` is below 1
        """
        limit = resolve_limit(limit, self.default_scroll_limit)
        points, _ = await self.engine.scroll_points(
            self.collection_for(namespace),
            point_filter=self._owner_filter(user_id, category),
            limit=limit,
            with_vectors=False,
        )

        entries = [
            MemoryEntry(
                id=extract_point_id(point.payload, point.id),
                record=decode(point.payload, MemoryRecord),
            )
            for point in points
        ]
        logger.debug(f"Scroll found {len(entries)} memories for user {user_id}")
        return entries

    async def get_collection_info(self, namespace: Optional[str] = None) -> CollectionInfo:
        """
        Return status and counts of the namespace's collection.

        The engine only reports points, so ``vectors_count`` mirrors
        ``points_count`` (one vector per point).
        """
        info = await self.engine.collection_info(self.collection_for(namespace))
        return CollectionInfo(
            status=info.status,
            points_count=info.points_count,
            vectors_count=info.points_count,
            indexed_vectors_count=info.indexed_vectors_count,
        )
