"""
In-memory vector engine for development and testing.

Mirrors the observable behavior of the Qdrant backend closely enough for the
stores to be exercised without a server: cosine scoring, inclusive score
thresholds, upsert replacing vector and payload, and scroll pages ordered by
ascending native ID with the next ID as the continuation cursor.
"""

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np

from vectorgate.core.exceptions.custom_exceptions import (
    CollectionExistsError,
    EngineError,
    InvalidRequestError,
)
from vectorgate.core.logging.logger import get_logger
from vectorgate.storage.vector_store.base import (
    DISTANCE_COSINE,
    BaseVectorEngine,
    EngineCollectionInfo,
    EnginePoint,
    PointFilter,
    ScoredPoint,
)

logger = get_logger(__name__)


@dataclass
class _Collection:
    dimension: int
    distance: str
    indexes: Dict[str, str] = field(default_factory=dict)
    points: Dict[int, Tuple[np.ndarray, Dict[str, Any]]] = field(default_factory=dict)


class InMemoryVectorEngine(BaseVectorEngine):
    """Dictionary-backed engine; state lives only as long as the instance."""

    def __init__(self):
        self._collections: Dict[str, _Collection] = {}

    def _get(self, name: str) -> _Collection:
        collection = self._collections.get(name)
        if collection is None:
            raise EngineError(
                f"Collection '{name}' not found",
                error_code="ENGINE_COLLECTION_NOT_FOUND",
                details={"collection": name},
            )
        return collection

    def _matching(
        self, collection: _Collection, point_filter: Optional[PointFilter]
    ) -> List[int]:
        return sorted(
            point_id
            for point_id, (_, payload) in collection.points.items()
            if point_filter is None or point_filter.matches(payload)
        )

    async def list_collections(self) -> List[str]:
        return list(self._collections)

    async def create_collection(
        self, name: str, dimension: int, distance: str = DISTANCE_COSINE
    ) -> None:
        if name in self._collections:
            raise CollectionExistsError(
                f"Collection '{name}' already exists",
                error_code="ENGINE_COLLECTION_EXISTS",
                details={"collection": name},
            )
        if distance != DISTANCE_COSINE:
            raise EngineError(f"Unsupported distance metric: {distance}")
        self._collections[name] = _Collection(dimension=dimension, distance=distance)
        logger.debug(f"In-memory collection '{name}' created", dimension=dimension)

    async def create_field_index(
        self, collection: str, field_name: str, field_type: str
    ) -> None:
        self._get(collection).indexes[field_name] = field_type

    async def upsert_points(self, collection: str, points: Sequence[EnginePoint]) -> None:
        target = self._get(collection)
        arrays = []
        for point in points:
            if point.vector is None or len(point.vector) != target.dimension:
                raise EngineError(
                    "Wrong input: vector dimension error",
                    error_code="ENGINE_UPSERT_ERROR",
                    details={"collection": collection, "point": point.id},
                )
            try:
                arrays.append(np.asarray(point.vector, dtype=np.float32))
            except (TypeError, ValueError) as e:
                raise InvalidRequestError(
                    f"Malformed point: {e}",
                    error_code="ENGINE_INVALID_POINT",
                    details={"collection": collection, "point": point.id},
                ) from e

        for point, array in zip(points, arrays):
            target.points[point.id] = (array, copy.deepcopy(point.payload))

    async def get_points(
        self, collection: str, ids: Sequence[int], with_vectors: bool = False
    ) -> List[EnginePoint]:
        target = self._get(collection)
        found = []
        for point_id in ids:
            if point_id in target.points:
                vector, payload = target.points[point_id]
                found.append(
                    EnginePoint(
                        id=point_id,
                        payload=copy.deepcopy(payload),
                        vector=vector.tolist() if with_vectors else None,
                    )
                )
        return found

    async def delete_points(self, collection: str, ids: Sequence[int]) -> None:
        target = self._get(collection)
        for point_id in ids:
            target.points.pop(point_id, None)

    async def delete_by_filter(self, collection: str, point_filter: PointFilter) -> None:
        target = self._get(collection)
        for point_id in self._matching(target, point_filter):
            del target.points[point_id]

    async def search_points(
        self,
        collection: str,
        vector: Sequence[float],
        limit: int,
        point_filter: Optional[PointFilter] = None,
        score_threshold: Optional[float] = None,
    ) -> List[ScoredPoint]:
        target = self._get(collection)
        query = np.asarray(vector, dtype=np.float32)
        if query.shape[0] != target.dimension:
            raise EngineError(
                "Wrong input: vector dimension error",
                error_code="ENGINE_SEARCH_ERROR",
                details={"collection": collection},
            )

        query_norm = np.linalg.norm(query)
        hits = []
        for point_id in self._matching(target, point_filter):
            stored, payload = target.points[point_id]
            denominator = query_norm * np.linalg.norm(stored)
            score = float(np.dot(query, stored) / denominator) if denominator else 0.0
            if score_threshold is not None and score < score_threshold:
                continue
            hits.append(
                ScoredPoint(id=point_id, payload=copy.deepcopy(payload), score=score)
            )

        hits.sort(key=lambda hit: hit.score, reverse=True)
        return hits[:limit]

    async def scroll_points(
        self,
        collection: str,
        point_filter: Optional[PointFilter] = None,
        limit: int = 100,
        offset: Optional[Any] = None,
        with_vectors: bool = False,
    ) -> Tuple[List[EnginePoint], Optional[Any]]:
        target = self._get(collection)
        ids = self._matching(target, point_filter)
        if offset is not None:
            ids = [point_id for point_id in ids if point_id >= offset]

        page_ids = ids[:limit]
        next_offset = ids[limit] if len(ids) > limit else None

        page = []
        for point_id in page_ids:
            vector, payload = target.points[point_id]
            page.append(
                EnginePoint(
                    id=point_id,
                    payload=copy.deepcopy(payload),
                    vector=vector.tolist() if with_vectors else None,
                )
            )
        return page, next_offset

    async def set_payload(
        self, collection: str, point_filter: PointFilter, payload: Dict[str, Any]
    ) -> None:
        target = self._get(collection)
        for point_id in self._matching(target, point_filter):
            target.points[point_id][1].update(copy.deepcopy(payload))

    async def count_points(
        self, collection: str, point_filter: Optional[PointFilter] = None
    ) -> int:
        return len(self._matching(self._get(collection), point_filter))

    async def collection_info(self, collection: str) -> EngineCollectionInfo:
        target = self._get(collection)
        return EngineCollectionInfo(
            status="green",
            points_count=len(target.points),
            indexed_vectors_count=len(target.points),
        )

    async def health_check(self) -> bool:
        return True

    def indexes_of(self, collection: str) -> Dict[str, str]:
        """Return the payload indexes created on ``collection``."""
        return dict(self._get(collection).indexes)
