"""
Unit tests for CLI functionality
"""

import asyncio
from unittest.mock import AsyncMock, patch

import pytest
from typer.testing import CliRunner

from vectorgate.cli.main import app
from vectorgate.service import VectorService
from vectorgate.storage.models import DocumentPoint
from vectorgate.storage.vector_store.memory import InMemoryVectorEngine

runner = CliRunner()


@pytest.fixture
def service(test_settings):
    """A service over a shared in-memory engine, patched into the CLI"""
    service = VectorService(test_settings, InMemoryVectorEngine())
    with patch("vectorgate.cli.utils.service.build_service", return_value=service):
        yield service


@pytest.fixture
def seeded(service, make_memory, make_chunk, unit_vector):
    async def _seed():
        await service.startup()
        await service.memories.upsert("mem_1_a", unit_vector(0), make_memory(key="coffee"))
        await service.documents.batch_upsert(
            [
                DocumentPoint("doc_7_42_0", unit_vector(0), make_chunk(group_key="REPORTS")),
                DocumentPoint("doc_7_42_1", unit_vector(1), make_chunk(chunk_index=1)),
            ]
        )

    asyncio.run(_seed())
    return service


def test_version_command():
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert "VectorGate" in result.output


def test_help_command():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "memories" in result.stdout


def test_status_health(service):
    result = runner.invoke(app, ["status", "health"])
    assert result.exit_code == 0
    assert "healthy" in result.stdout


def test_status_info(seeded):
    result = runner.invoke(app, ["status", "info"])
    assert result.exit_code == 0
    assert "VectorGate Service Information" in result.stdout


def test_status_info_missing_collection(service):
    result = runner.invoke(app, ["status", "info"])
    assert result.exit_code == 1
    assert "Database operation failed" in result.stdout


def test_status_info_engine_unhealthy(service):
    with patch.object(service.engine, "health_check", AsyncMock(return_value=False)):
        result = runner.invoke(app, ["status", "info"])
    assert result.exit_code == 0
    assert "unavailable" in result.stdout
    assert "unhealthy" in result.stdout


def test_collections_ensure(service):
    result = runner.invoke(app, ["collections", "ensure"])
    assert result.exit_code == 0
    assert "user_memories" in result.stdout

    result = runner.invoke(app, ["collections", "ensure", "--namespace", "Feedback"])
    assert result.exit_code == 0
    assert "user_memories_feedback" in result.stdout


def test_collections_info(seeded):
    result = runner.invoke(app, ["collections", "info"])
    assert result.exit_code == 0
    assert "Points" in result.stdout


def test_memories_list_and_get(seeded):
    result = runner.invoke(app, ["memories", "list", "--user-id", "1"])
    assert result.exit_code == 0
    assert "mem_1_a" in result.stdout

    result = runner.invoke(app, ["memories", "get", "mem_1_a"])
    assert result.exit_code == 0
    assert "coffee" in result.stdout


def test_memories_get_missing(seeded):
    result = runner.invoke(app, ["memories", "get", "mem_404"])
    assert result.exit_code == 1
    assert "Memory not found: mem_404" in result.stdout


def test_memories_delete(seeded):
    result = runner.invoke(app, ["memories", "delete", "mem_1_a"])
    assert result.exit_code == 0
    assert asyncio.run(seeded.memories.get("mem_1_a")) is None


def test_documents_stats_and_groups(seeded):
    result = runner.invoke(app, ["documents", "stats", "--user-id", "7"])
    assert result.exit_code == 0
    assert "Chunks: 2" in result.stdout

    result = runner.invoke(app, ["documents", "groups", "--user-id", "7"])
    assert result.exit_code == 0
    assert "REPORTS" in result.stdout
    assert "DEFAULT" in result.stdout


def test_documents_reassign_and_delete(seeded):
    result = runner.invoke(
        app,
        ["documents", "reassign-group", "-u", "7", "-f", "42", "-g", "NEWGROUP"],
    )
    assert result.exit_code == 0
    assert asyncio.run(seeded.documents.get_group_keys(7)) == ["NEWGROUP"]

    result = runner.invoke(app, ["documents", "delete-file", "-u", "7", "-f", "42"])
    assert result.exit_code == 0
    assert "Deleted ~2 chunks" in result.stdout
