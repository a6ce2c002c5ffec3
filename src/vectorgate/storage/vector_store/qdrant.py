"""
Qdrant backend for the engine capability interface.

Wraps a single shared :class:`qdrant_client.AsyncQdrantClient`. The client is
safe for concurrent use and is created once per process, never per request.

Every client failure is re-raised as :class:`EngineError` with the original
exception chained and logged; a create that fails because the collection is
already there is raised as :class:`CollectionExistsError` so the provisioner
can treat the race as success.
"""

from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

from pydantic import ValidationError
from qdrant_client import AsyncQdrantClient, models
from qdrant_client.http.exceptions import UnexpectedResponse

from vectorgate.core.exceptions.custom_exceptions import (
    CollectionExistsError,
    EngineError,
    InvalidRequestError,
    VectorGateError,
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

_DISTANCES = {DISTANCE_COSINE: models.Distance.COSINE}

_FIELD_SCHEMAS = {
    "keyword": models.PayloadSchemaType.KEYWORD,
    "integer": models.PayloadSchemaType.INTEGER,
    "bool": models.PayloadSchemaType.BOOL,
    "float": models.PayloadSchemaType.FLOAT,
}


def to_qdrant_filter(point_filter: Optional[PointFilter]) -> Optional[models.Filter]:
    """Translate an engine-neutral filter into a Qdrant ``Filter``."""
    if point_filter is None or not point_filter.must:
        return None
    return models.Filter(
        must=[
            models.FieldCondition(
                key=condition.key, match=models.MatchValue(value=condition.value)
            )
            for condition in point_filter.must
        ]
    )


def _plain_vector(vector: Any) -> Optional[List[float]]:
    if vector is None:
        return None
    if isinstance(vector, dict):
        # Named vectors; the layer only ever writes the unnamed default
        vector = vector.get("", next(iter(vector.values()), None))
    return list(vector) if vector is not None else None


class QdrantVectorEngine(BaseVectorEngine):
    """Vector engine backed by a Qdrant server."""

    def __init__(
        self,
        url: str = "http://localhost:6333",
        api_key: Optional[str] = None,
        timeout: int = 10,
        prefer_grpc: bool = False,
        client: Optional[AsyncQdrantClient] = None,
    ):
        self.url = url
        self.client = client or AsyncQdrantClient(
            url=url, api_key=api_key, timeout=timeout, prefer_grpc=prefer_grpc
        )

    def _engine_error(
        self, operation: str, collection: Optional[str], error: Exception
    ) -> EngineError:
        logger.error(
            f"Qdrant {operation} failed: {error}",
            collection=collection,
            exc_info=error,
        )
        return EngineError(
            f"Qdrant {operation} failed: {error}",
            error_code=f"ENGINE_{operation.upper()}_ERROR",
            details={"collection": collection, "url": self.url},
        )

    @contextmanager
    def _call(self, operation: str, collection: Optional[str] = None) -> Iterator[None]:
        try:
            yield
        except VectorGateError:
            raise
        except Exception as e:
            raise self._engine_error(operation, collection, e) from e

    async def list_collections(self) -> List[str]:
        with self._call("list_collections"):
            response = await self.client.get_collections()
        return [collection.name for collection in response.collections]

    async def create_collection(
        self, name: str, dimension: int, distance: str = DISTANCE_COSINE
    ) -> None:
        if distance not in _DISTANCES:
            raise EngineError(f"Unsupported distance metric: {distance}")

        try:
            await self.client.create_collection(
                collection_name=name,
                vectors_config=models.VectorParams(
                    size=dimension, distance=_DISTANCES[distance]
                ),
            )
        except Exception as e:
            if _is_already_exists(e):
                raise CollectionExistsError(
                    f"Collection '{name}' already exists",
                    error_code="ENGINE_COLLECTION_EXISTS",
                    details={"collection": name},
                ) from e
            raise self._engine_error("create_collection", name, e) from e

    async def create_field_index(
        self, collection: str, field_name: str, field_type: str
    ) -> None:
        if field_type not in _FIELD_SCHEMAS:
            raise EngineError(f"Unsupported payload index type: {field_type}")
        with self._call("create_field_index", collection):
            await self.client.create_payload_index(
                collection_name=collection,
                field_name=field_name,
                field_schema=_FIELD_SCHEMAS[field_type],
                wait=True,
            )

    async def upsert_points(self, collection: str, points: Sequence[EnginePoint]) -> None:
        try:
            structs = [
                models.PointStruct(id=point.id, vector=point.vector, payload=point.payload)
                for point in points
            ]
        except ValidationError as e:
            raise InvalidRequestError(
                f"Malformed point: {e.error_count()} validation error(s)",
                error_code="ENGINE_INVALID_POINT",
                details={"collection": collection, "errors": e.errors(include_url=False)},
            ) from e

        with self._call("upsert", collection):
            await self.client.upsert(collection_name=collection, points=structs, wait=True)

    async def get_points(
        self, collection: str, ids: Sequence[int], with_vectors: bool = False
    ) -> List[EnginePoint]:
        with self._call("retrieve", collection):
            records = await self.client.retrieve(
                collection_name=collection,
                ids=list(ids),
                with_payload=True,
                with_vectors=with_vectors,
            )
        return [
            EnginePoint(
                id=record.id,
                payload=record.payload or {},
                vector=_plain_vector(record.vector) if with_vectors else None,
            )
            for record in records
        ]

    async def delete_points(self, collection: str, ids: Sequence[int]) -> None:
        with self._call("delete", collection):
            await self.client.delete(
                collection_name=collection,
                points_selector=models.PointIdsList(points=list(ids)),
                wait=True,
            )

    async def delete_by_filter(self, collection: str, point_filter: PointFilter) -> None:
        with self._call("delete", collection):
            await self.client.delete(
                collection_name=collection,
                points_selector=models.FilterSelector(filter=to_qdrant_filter(point_filter)),
                wait=True,
            )

    async def search_points(
        self,
        collection: str,
        vector: Sequence[float],
        limit: int,
        point_filter: Optional[PointFilter] = None,
        score_threshold: Optional[float] = None,
    ) -> List[ScoredPoint]:
        with self._call("search", collection):
            response = await self.client.query_points(
                collection_name=collection,
                query=list(vector),
                query_filter=to_qdrant_filter(point_filter),
                limit=limit,
                score_threshold=score_threshold,
                with_payload=True,
            )
        return [
            ScoredPoint(id=point.id, payload=point.payload or {}, score=point.score)
            for point in response.points
        ]

    async def scroll_points(
        self,
        collection: str,
        point_filter: Optional[PointFilter] = None,
        limit: int = 100,
        offset: Optional[Any] = None,
        with_vectors: bool = False,
    ) -> Tuple[List[EnginePoint], Optional[Any]]:
        with self._call("scroll", collection):
            records, next_offset = await self.client.scroll(
                collection_name=collection,
                scroll_filter=to_qdrant_filter(point_filter),
                limit=limit,
                offset=offset,
                with_payload=True,
                with_vectors=with_vectors,
            )
        points = [
            EnginePoint(
                id=record.id,
                payload=record.payload or {},
                vector=_plain_vector(record.vector) if with_vectors else None,
            )
            for record in records
        ]
        return points, next_offset

    async def set_payload(
        self, collection: str, point_filter: PointFilter, payload: Dict[str, Any]
    ) -> None:
        with self._call("set_payload", collection):
            await self.client.set_payload(
                collection_name=collection,
                payload=payload,
                points=models.FilterSelector(filter=to_qdrant_filter(point_filter)),
                wait=True,
            )

    async def count_points(
        self, collection: str, point_filter: Optional[PointFilter] = None
    ) -> int:
        with self._call("count", collection):
            result = await self.client.count(
                collection_name=collection,
                count_filter=to_qdrant_filter(point_filter),
                exact=True,
            )
        return result.count

    async def collection_info(self, collection: str) -> EngineCollectionInfo:
        with self._call("collection_info", collection):
            info = await self.client.get_collection(collection_name=collection)

        if info is None:
            raise EngineError(
                "Collection info result is empty",
                error_code="ENGINE_COLLECTION_INFO_ERROR",
                details={"collection": collection},
            )

        status = getattr(info.status, "value", info.status)
        points_count = info.points_count or 0
        return EngineCollectionInfo(
            status=str(status),
            points_count=points_count,
            indexed_vectors_count=info.indexed_vectors_count or 0,
        )

    async def health_check(self) -> bool:
        try:
            await self.client.get_collections()
            return True
        except Exception as e:
            logger.warning(f"Health check failed: {e}")
            return False

    async def close(self) -> None:
        await self.client.close()


def _is_already_exists(error: Exception) -> bool:
    if isinstance(error, UnexpectedResponse) and error.status_code == 409:
        return True
    return "already exists" in str(error).lower()
