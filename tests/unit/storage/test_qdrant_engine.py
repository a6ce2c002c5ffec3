"""
Tests for the Qdrant engine adapter with a mocked client.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from qdrant_client import models

from vectorgate.core.exceptions.custom_exceptions import (
    CollectionExistsError,
    EngineError,
    InvalidRequestError,
)
from vectorgate.storage.document_store import DocumentStore
from vectorgate.storage.models import DocumentPoint
from vectorgate.storage.vector_store.base import EnginePoint, PointFilter
from vectorgate.storage.vector_store.qdrant import QdrantVectorEngine, to_qdrant_filter


@pytest.fixture
def client():
    return AsyncMock()


@pytest.fixture
def engine(client):
    return QdrantVectorEngine(url="http://qdrant:6333", client=client)


def test_to_qdrant_filter():
    qdrant_filter = to_qdrant_filter(PointFilter.of(user_id=1, active=True, category=None))

    assert [condition.key for condition in qdrant_filter.must] == ["user_id", "active"]
    assert qdrant_filter.must[0].match.value == 1
    assert qdrant_filter.must[1].match.value is True


def test_empty_filter_is_none():
    assert to_qdrant_filter(None) is None
    assert to_qdrant_filter(PointFilter()) is None


class TestQdrantVectorEngine:
    """Test cases for the Qdrant adapter."""

    @pytest.mark.asyncio
    async def test_list_collections(self, engine, client):
        client.get_collections.return_value = SimpleNamespace(
            collections=[SimpleNamespace(name="user_memories")]
        )
        assert await engine.list_collections() == ["user_memories"]

    @pytest.mark.asyncio
    async def test_create_collection_uses_cosine(self, engine, client):
        await engine.create_collection("user_memories", 1024)

        kwargs = client.create_collection.await_args.kwargs
        assert kwargs["collection_name"] == "user_memories"
        assert kwargs["vectors_config"].size == 1024
        assert kwargs["vectors_config"].distance == models.Distance.COSINE

    @pytest.mark.asyncio
    async def test_create_collection_already_exists(self, engine, client):
        client.create_collection.side_effect = ValueError(
            "Collection `user_memories` already exists!"
        )
        with pytest.raises(CollectionExistsError):
            await engine.create_collection("user_memories", 1024)

    @pytest.mark.asyncio
    async def test_create_field_index(self, engine, client):
        await engine.create_field_index("user_memories", "active", "bool")

        kwargs = client.create_payload_index.await_args.kwargs
        assert kwargs["field_name"] == "active"
        assert kwargs["field_schema"] == models.PayloadSchemaType.BOOL

    @pytest.mark.asyncio
    async def test_upsert(self, engine, client):
        await engine.upsert_points(
            "user_memories", [EnginePoint(id=7, vector=[0.1, 0.2], payload={"user_id": 1})]
        )

        points = client.upsert.await_args.kwargs["points"]
        assert points[0].id == 7
        assert points[0].payload == {"user_id": 1}

    @pytest.mark.asyncio
    async def test_malformed_point_is_invalid_request(self, engine, client):
        with pytest.raises(InvalidRequestError) as exc_info:
            await engine.upsert_points("user_memories", [EnginePoint(id=1, vector=[0.1, None])])

        assert exc_info.value.error_code == "ENGINE_INVALID_POINT"
        assert exc_info.value.details["collection"] == "user_memories"
        client.upsert.assert_not_called()

    @pytest.mark.asyncio
    async def test_batch_with_malformed_vector_continues(self, engine, client, make_chunk):
        client.get_collections.return_value = SimpleNamespace(collections=[])
        store = DocumentStore(engine, "user_documents", 8)
        bad = [0.1] * 8
        bad[5] = None
        items = [
            DocumentPoint("doc_7_42_0", [0.1] * 8, make_chunk(chunk_index=0)),
            DocumentPoint("doc_7_42_1", bad, make_chunk(chunk_index=1)),
            DocumentPoint("doc_7_42_2", [0.2] * 8, make_chunk(chunk_index=2)),
        ]

        result = await store.batch_upsert(items)

        assert result.success_count == 2
        assert result.failed_count == 1
        assert result.errors[0].point_id == "doc_7_42_1"
        assert "element 5" in result.errors[0].error
        assert client.upsert.await_count == 2

    @pytest.mark.asyncio
    async def test_client_failure_becomes_engine_error(self, engine, client):
        client.upsert.side_effect = ConnectionError("connection refused")

        with pytest.raises(EngineError) as exc_info:
            await engine.upsert_points("user_memories", [EnginePoint(id=1, vector=[0.1])])

        assert exc_info.value.error_code == "ENGINE_UPSERT_ERROR"
        assert exc_info.value.details["collection"] == "user_memories"
        assert isinstance(exc_info.value.__cause__, ConnectionError)

    @pytest.mark.asyncio
    async def test_search(self, engine, client):
        client.query_points.return_value = SimpleNamespace(
            points=[SimpleNamespace(id=5, payload={"_point_id": "mem_1_a"}, score=0.93)]
        )

        hits = await engine.search_points(
            "user_memories", [0.1, 0.2], limit=5,
            point_filter=PointFilter.of(user_id=1), score_threshold=0.7,
        )

        assert hits[0].id == 5
        assert hits[0].score == 0.93
        kwargs = client.query_points.await_args.kwargs
        assert kwargs["score_threshold"] == 0.7
        assert kwargs["query_filter"].must[0].key == "user_id"

    @pytest.mark.asyncio
    async def test_get_points_with_named_vector(self, engine, client):
        client.retrieve.return_value = [
            SimpleNamespace(id=5, payload={"k": "v"}, vector={"": [0.5, 0.5]})
        ]

        points = await engine.get_points("user_documents", [5], with_vectors=True)

        assert points[0].vector == [0.5, 0.5]

    @pytest.mark.asyncio
    async def test_scroll_returns_cursor(self, engine, client):
        client.scroll.return_value = ([SimpleNamespace(id=1, payload={}, vector=None)], 2)

        points, offset = await engine.scroll_points("user_documents", limit=1)

        assert [point.id for point in points] == [1]
        assert offset == 2

    @pytest.mark.asyncio
    async def test_set_payload_uses_filter_selector(self, engine, client):
        await engine.set_payload(
            "user_documents", PointFilter.of(user_id=7, file_id=42), {"group_key": "NEW"}
        )

        kwargs = client.set_payload.await_args.kwargs
        assert kwargs["payload"] == {"group_key": "NEW"}
        assert isinstance(kwargs["points"], models.FilterSelector)

    @pytest.mark.asyncio
    async def test_count(self, engine, client):
        client.count.return_value = SimpleNamespace(count=3)
        assert await engine.count_points("user_documents", PointFilter.of(user_id=7)) == 3

    @pytest.mark.asyncio
    async def test_collection_info(self, engine, client):
        client.get_collection.return_value = SimpleNamespace(
            status=models.CollectionStatus.GREEN, points_count=10, indexed_vectors_count=0
        )

        info = await engine.collection_info("user_memories")

        assert info.status == "green"
        assert info.points_count == 10

    @pytest.mark.asyncio
    async def test_health_check(self, engine, client):
        assert await engine.health_check() is True

        client.get_collections.side_effect = ConnectionError("down")
        assert await engine.health_check() is False

    @pytest.mark.asyncio
    async def test_close(self, engine, client):
        await engine.close()
        client.close.assert_awaited_once()
