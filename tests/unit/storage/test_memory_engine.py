"""
Tests for the in-memory vector engine.
"""

import pytest

from vectorgate.core.exceptions.custom_exceptions import (
    CollectionExistsError,
    EngineError,
    InvalidRequestError,
)
from vectorgate.storage.vector_store.base import EnginePoint, PointFilter
from vectorgate.storage.vector_store.memory import InMemoryVectorEngine


@pytest.fixture
def engine():
    return InMemoryVectorEngine()


async def _seed(engine, count=5):
    await engine.create_collection("c", 2)
    await engine.upsert_points(
        "c",
        [
            EnginePoint(id=i, vector=[1.0, float(i)], payload={"user_id": i % 2, "n": i})
            for i in range(count)
        ],
    )


class TestInMemoryVectorEngine:
    """Test cases for the in-memory backend."""

    @pytest.mark.asyncio
    async def test_create_twice_raises_exists(self, engine):
        await engine.create_collection("c", 2)
        with pytest.raises(CollectionExistsError):
            await engine.create_collection("c", 2)

    @pytest.mark.asyncio
    async def test_unknown_collection(self, engine):
        with pytest.raises(EngineError) as exc_info:
            await engine.count_points("missing")
        assert exc_info.value.error_code == "ENGINE_COLLECTION_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_wrong_dimension_rejected(self, engine):
        await engine.create_collection("c", 2)
        with pytest.raises(EngineError):
            await engine.upsert_points("c", [EnginePoint(id=1, vector=[1.0])])

    @pytest.mark.asyncio
    async def test_malformed_vector_rejected(self, engine):
        await engine.create_collection("c", 2)
        with pytest.raises(InvalidRequestError) as exc_info:
            await engine.upsert_points(
                "c",
                [EnginePoint(id=1, vector=[1.0, 0.0]), EnginePoint(id=2, vector=[1.0, None])],
            )

        assert exc_info.value.error_code == "ENGINE_INVALID_POINT"
        assert await engine.count_points("c") == 0

    @pytest.mark.asyncio
    async def test_search_orders_and_thresholds(self, engine):
        await engine.create_collection("c", 2)
        await engine.upsert_points(
            "c",
            [
                EnginePoint(id=1, vector=[1.0, 0.0], payload={"k": "a"}),
                EnginePoint(id=2, vector=[1.0, 1.0], payload={"k": "b"}),
                EnginePoint(id=3, vector=[0.0, 1.0], payload={"k": "c"}),
            ],
        )

        hits = await engine.search_points("c", [1.0, 0.0], limit=10, score_threshold=0.5)

        assert [hit.id for hit in hits] == [1, 2]
        assert hits[0].score == pytest.approx(1.0)
        assert hits[1].score == pytest.approx(0.7071, abs=1e-3)

    @pytest.mark.asyncio
    async def test_threshold_is_inclusive(self, engine):
        await engine.create_collection("c", 2)
        await engine.upsert_points("c", [EnginePoint(id=1, vector=[1.0, 0.0])])

        hits = await engine.search_points("c", [1.0, 0.0], limit=1, score_threshold=1.0)
        assert len(hits) == 1

    @pytest.mark.asyncio
    async def test_filter_does_not_match_bool_against_int(self, engine):
        await engine.create_collection("c", 2)
        await engine.upsert_points(
            "c", [EnginePoint(id=1, vector=[1.0, 0.0], payload={"active": 1})]
        )
        assert await engine.count_points("c", PointFilter.of(active=True)) == 0

    @pytest.mark.asyncio
    async def test_scroll_pages(self, engine):
        await _seed(engine, count=5)

        first, offset = await engine.scroll_points("c", limit=2)
        assert [p.id for p in first] == [0, 1]
        assert offset == 2

        second, offset = await engine.scroll_points("c", limit=2, offset=offset)
        third, offset = await engine.scroll_points("c", limit=2, offset=offset)
        assert [p.id for p in second] == [2, 3]
        assert [p.id for p in third] == [4]
        assert offset is None

    @pytest.mark.asyncio
    async def test_filter_delete_and_set_payload(self, engine):
        await _seed(engine, count=5)

        await engine.set_payload("c", PointFilter.of(user_id=1), {"tag": "odd"})
        assert await engine.count_points("c", PointFilter.of(tag="odd")) == 2

        await engine.delete_by_filter("c", PointFilter.of(user_id=0))
        assert await engine.count_points("c") == 2

    @pytest.mark.asyncio
    async def test_returned_payloads_are_copies(self, engine):
        await _seed(engine, count=1)
        points = await engine.get_points("c", [0])
        points[0].payload["n"] = 999

        again = await engine.get_points("c", [0], with_vectors=True)
        assert again[0].payload["n"] == 0
        assert again[0].vector == [1.0, 0.0]
