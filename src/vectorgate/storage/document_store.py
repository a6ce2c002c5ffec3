"""
Document chunks over the "documents" logical collection.

Every read, search and bulk delete is scoped to one owner (``user_id``);
there is no cross-tenant query path. Bulk deletes and group-key
reassignment are filter-based and report a best-effort count: the number of
matching chunks counted immediately before the mutation. Concurrent writers
can make that number inexact, so callers must not treat it as authoritative.
"""

from typing import List, Optional, Sequence, Set

from vectorgate.core.exceptions.custom_exceptions import VectorGateError
from vectorgate.core.logging.logger import get_logger
from vectorgate.storage.codec import decode, encode, extract_point_id
from vectorgate.storage.identity import to_native_id
from vectorgate.storage.models import (
    BatchError,
    BatchResult,
    DocumentChunk,
    DocumentPoint,
    DocumentSearchResult,
    DocumentStats,
)
from vectorgate.storage.provisioner import DOCUMENT_INDEXES, CollectionProvisioner
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


class DocumentStore:
    """Tenant-isolated access to document chunks."""

    def __init__(
        self,
        engine: BaseVectorEngine,
        collection_name: str,
        dimension: int,
        provisioner: Optional[CollectionProvisioner] = None,
        stats: Optional[StatsTracker] = None,
        default_limit: int = 5,
        default_min_score: float = 0.7,
        max_batch_size: int = 100,
        stats_page_size: int = 256,
    ):
        self.engine = engine
        self.collection_name = collection_name
        self.dimension = dimension
        self.provisioner = provisioner or CollectionProvisioner(engine)
        self.stats = stats
        self.default_limit = default_limit
        self.default_min_score = default_min_score
        self.max_batch_size = max_batch_size
        self.stats_page_size = stats_page_size

    async def ensure_collection(self) -> str:
        await self.provisioner.ensure_collection(
            self.collection_name, self.dimension, DISTANCE_COSINE, DOCUMENT_INDEXES
        )
        return self.collection_name

    async def _upsert(
        self, point_id: str, vector: Sequence[float], chunk: DocumentChunk
    ) -> None:
        validate_dimension(vector, self.dimension)

        collection = await self.ensure_collection()
        native_id = to_native_id(point_id)
        await self.engine.upsert_points(
            collection,
            [EnginePoint(id=native_id, vector=list(vector), payload=encode(chunk, point_id))],
        )
        logger.debug(f"Document chunk upserted: {point_id} (numeric: {native_id})")

    async def upsert(
        self, point_id: str, vector: Sequence[float], chunk: DocumentChunk
    ) -> None:
        """
        Insert or replace a single chunk.

        Raises:
            InvalidRequestError: If the vector has the wrong dimension
            EngineError: If provisioning or the upsert fails
        """
        await self._upsert(point_id, vector, chunk)
        if self.stats:
            self.stats.increment_upserts(1)

    async def batch_upsert(
        self, items: Sequence[DocumentPoint], max_batch: Optional[int] = None
    ) -> BatchResult:
        """
        Upsert chunks one by one, collecting per-item failures.

        One failing chunk never aborts the batch; it is reported in
        ``errors`` with its ID and is not retried.

        Raises:
            InvalidRequestError: If the batch is empty or exceeds ``max_batch``
        """
        max_batch = self.max_batch_size if max_batch is None else max_batch
        validate_batch_size(len(items), max_batch)
        logger.info(f"Batch upserting {len(items)} document chunks")

        result = BatchResult()
        for item in items:
            try:
                await self._upsert(item.point_id, item.vector, item.chunk)
            except VectorGateError as e:
                result.failed_count += 1
                result.errors.append(
                    BatchError(point_id=item.point_id, error=e.public_message)
                )
            else:
                result.success_count += 1

        if self.stats:
            self.stats.increment_upserts(result.success_count)
        if result.failed_count:
            logger.warning(
                f"Batch upsert finished with {result.failed_count} failures",
                success_count=result.success_count,
            )
        return result

    async def search(
        self,
        query_vector: Sequence[float],
        user_id: int,
        group_key: Optional[str] = None,
        limit: Optional[int] = None,
        min_score: Optional[float] = None,
    ) -> List[DocumentSearchResult]:
        """
        Similarity search over one owner's chunks, optionally one group.

        Raises:
            InvalidRequestError: If the query vector has the wrong dimension
                or ``limit`` is below 1
        """
        validate_dimension(query_vector, self.dimension, "Query vector")
        limit = resolve_limit(limit, self.default_limit)

        hits = await self.engine.search_points(
            self.collection_name,
            list(query_vector),
            limit=limit,
            point_filter=PointFilter.of(user_id=user_id, group_key=group_key),
            score_threshold=self.default_min_score if min_score is None else min_score,
        )

        results = [
            DocumentSearchResult(
                id=extract_point_id(hit.payload, hit.id),
                score=hit.score,
                chunk=decode(hit.payload, DocumentChunk),
            )
            for hit in hits
        ]

        if self.stats:
            self.stats.increment_searches()
        logger.debug(f"Search found {len(results)} chunks for user {user_id}")
        return results

    async def get(self, point_id: str) -> Optional[DocumentSearchResult]:
        """
        Fetch a chunk together with its stored vector.

        An exact ID match is reported with a synthetic score of 1.0.
        Returns None when the point does not exist.
        """
        points = await self.engine.get_points(
            self.collection_name, [to_native_id(point_id)], with_vectors=True
        )
        if not points:
            return None

        point = points[0]
        return DocumentSearchResult(
            id=extract_point_id(point.payload, point.id),
            score=1.0,
            chunk=decode(point.payload, DocumentChunk),
            vector=point.vector,
        )

    async def delete_by_id(self, point_id: str) -> None:
        """Delete one chunk; unknown IDs are ignored."""
        await self.engine.delete_points(self.collection_name, [to_native_id(point_id)])
        if self.stats:
            self.stats.increment_deletes()
        logger.debug(f"Document chunk deleted: {point_id}")

    async def _delete_matching(self, point_filter: PointFilter, description: str) -> int:
        count = await self.engine.count_points(self.collection_name, point_filter)
        await self.engine.delete_by_filter(self.collection_name, point_filter)
        if self.stats:
            self.stats.increment_deletes()
        logger.info(f"Deleted ~{count} chunks {description}")
        return count

    async def delete_by_file(self, user_id: int, file_id: int) -> int:
        """
        Delete every chunk of one file.

        Returns:
            int: Best-effort number of deleted chunks (counted before deleting)
        """
        return await self._delete_matching(
            PointFilter.of(user_id=user_id, file_id=file_id),
            f"for user {user_id}, file {file_id}",
        )

    async def delete_by_group_key(self, user_id: int, group_key: str) -> int:
        """
        Delete every chunk tagged with ``group_key``.

        Returns:
            int: Best-effort number of deleted chunks (counted before deleting)
        """
        return await self._delete_matching(
            PointFilter.of(user_id=user_id, group_key=group_key),
            f"for user {user_id}, group '{group_key}'",
        )

    async def delete_all_for_owner(self, user_id: int) -> int:
        """
        Delete every chunk of one owner.

        Returns:
            int: Best-effort number of deleted chunks (counted before deleting)
        """
        return await self._delete_matching(
            PointFilter.of(user_id=user_id), f"for user {user_id}"
        )

    async def reassign_group_key(self, user_id: int, file_id: int, new_group_key: str) -> int:
        """
        Move all chunks of a file to ``new_group_key``.

        Patches the payload in place; vectors and IDs are untouched.

        Returns:
            int: Best-effort number of updated chunks (counted before the patch)
        """
        point_filter = PointFilter.of(user_id=user_id, file_id=file_id)
        count = await self.engine.count_points(self.collection_name, point_filter)
        await self.engine.set_payload(
            self.collection_name, point_filter, {"group_key": new_group_key}
        )
        logger.info(
            f"Reassigned ~{count} chunks of file {file_id} to group '{new_group_key}'",
            user_id=user_id,
        )
        return count

    async def get_stats(self, user_id: int) -> DocumentStats:
        """
        Aggregate chunk, file and group counts for one owner.

        Walks every chunk of the owner with a cursor-paged scroll, so the cost
        is O(chunks for that owner). An engine failure on any page aborts the
        whole aggregation; partial counts are never returned.
        """
        point_filter = PointFilter.of(user_id=user_id)
        stats = DocumentStats()
        file_ids: Set[int] = set()

        offset = None
        while True:
            points, offset = await self.engine.scroll_points(
                self.collection_name,
                point_filter=point_filter,
                limit=self.stats_page_size,
                offset=offset,
                with_vectors=False,
            )
            for point in points:
                chunk = decode(point.payload, DocumentChunk)
                stats.total_chunks += 1
                file_ids.add(chunk.file_id)
                stats.chunks_by_group[chunk.group_key] = (
                    stats.chunks_by_group.get(chunk.group_key, 0) + 1
                )
            if offset is None:
                break

        stats.total_files = len(file_ids)
        stats.total_groups = len(stats.chunks_by_group)
        logger.debug(
            f"Document stats for user {user_id}",
            total_chunks=stats.total_chunks,
            total_files=stats.total_files,
        )
        return stats

    async def get_group_keys(self, user_id: int) -> List[str]:
        """Distinct group keys of one owner, sorted."""
        stats = await self.get_stats(user_id)
        return sorted(stats.chunks_by_group)
