"""
Service facade wiring settings, engine, stores and counters.

A process builds one :class:`VectorService` at startup and shares it across
requests: the engine client, provisioner and stats tracker inside it are
reusable handles with no per-request state.

Example:
    >>> service = VectorService.from_settings(settings)
    >>> await service.startup()
    >>> hits = await service.memories.search(vector, user_id=1)
    >>> await service.close()
"""

import asyncio
from typing import Any, Dict, List, Optional

from vectorgate.core.config.settings import Settings
from vectorgate.core.exceptions.custom_exceptions import InvalidRequestError
from vectorgate.core.logging.logger import get_logger
from vectorgate.embedding.base import BaseEmbedder
from vectorgate.storage.document_store import DocumentStore
from vectorgate.storage.memory_store import MemoryStore
from vectorgate.storage.models import MemoryRecord, MemorySearchResult
from vectorgate.storage.provisioner import CollectionProvisioner
from vectorgate.storage.stats import StatsTracker, report_periodically
from vectorgate.storage.vector_store.base import BaseVectorEngine
from vectorgate.storage.vector_store.manager import create_engine

logger = get_logger(__name__)


class VectorService:
    """Owns the shared engine and exposes the memory and document stores."""

    def __init__(
        self,
        settings: Settings,
        engine: BaseVectorEngine,
        embedder: Optional[BaseEmbedder] = None,
        stats: Optional[StatsTracker] = None,
    ):
        self.settings = settings
        self.engine = engine
        self.embedder = embedder
        self.stats = stats or StatsTracker()
        self.provisioner = CollectionProvisioner(engine)

        self.memories = MemoryStore(
            engine,
            settings.MEMORY_COLLECTION_NAME,
            settings.VECTOR_DIMENSION,
            provisioner=self.provisioner,
            stats=self.stats,
            default_limit=settings.DEFAULT_SEARCH_LIMIT,
            default_min_score=settings.DEFAULT_MIN_SCORE,
            default_scroll_limit=settings.DEFAULT_SCROLL_LIMIT,
            max_batch_size=settings.MAX_BATCH_SIZE,
        )
        self.documents = DocumentStore(
            engine,
            settings.DOCUMENT_COLLECTION_NAME,
            settings.VECTOR_DIMENSION,
            provisioner=self.provisioner,
            stats=self.stats,
            default_limit=settings.DEFAULT_SEARCH_LIMIT,
            default_min_score=settings.DEFAULT_MIN_SCORE,
            max_batch_size=settings.MAX_BATCH_SIZE,
            stats_page_size=settings.STATS_PAGE_SIZE,
        )

    @classmethod
    def from_settings(
        cls, settings: Settings, embedder: Optional[BaseEmbedder] = None
    ) -> "VectorService":
        return cls(settings, create_engine(settings), embedder=embedder)

    async def startup(self) -> None:
        """Provision the default memory and document collections."""
        await self.memories.ensure_collection()
        await self.documents.ensure_collection()
        logger.info(
            "Collections ready",
            memories=self.settings.MEMORY_COLLECTION_NAME,
            documents=self.settings.DOCUMENT_COLLECTION_NAME,
        )

    def start_stats_reporter(self) -> "asyncio.Task[None]":
        """Start the background task that logs and resets counters."""
        return asyncio.create_task(
            report_periodically(self.stats, self.settings.STATS_REPORT_INTERVAL)
        )

    async def close(self) -> None:
        await self.engine.close()

    async def health_check(self) -> bool:
        return await self.engine.health_check()

    def capabilities(self) -> Dict[str, Any]:
        """Service identity and embedding capability; makes no engine call."""
        embedder = self.embedder
        return {
            "service": self.settings.APP_NAME,
            "version": self.settings.APP_VERSION,
            "vector_dimension": self.settings.VECTOR_DIMENSION,
            "embedding": {
                "supported": embedder is not None,
                "backend": embedder.backend if embedder else self.settings.EMBEDDING_BACKEND,
                "model": embedder.model if embedder else self.settings.EMBEDDING_MODEL,
                "device": embedder.device if embedder else self.settings.EMBEDDING_DEVICE,
                "vector_dimension": self.settings.VECTOR_DIMENSION,
            },
        }

    async def service_info(self, namespace: Optional[str] = None) -> Dict[str, Any]:
        """
        Capabilities plus memory collection info and operation counters.

        When the engine does not answer, ``status`` is ``"unhealthy"`` and
        ``collection`` is None; no collection lookup is attempted.
        """
        healthy = await self.health_check()
        collection = None
        if healthy:
            info = await self.memories.get_collection_info(namespace)
            collection = info.to_dict()
        return {
            **self.capabilities(),
            "status": "healthy" if healthy else "unhealthy",
            "collection": collection,
            "stats": self.stats.snapshot().to_dict(),
        }

    async def _embed(self, text: str) -> List[float]:
        if self.embedder is None:
            raise InvalidRequestError(
                "Embedding backend not configured", error_code="EMBEDDING_UNAVAILABLE"
            )
        if not text.strip():
            raise InvalidRequestError("Text must not be empty", error_code="EMPTY_TEXT")
        return await self.embedder.embed(text)

    async def upsert_memory_text(
        self,
        point_id: str,
        text: str,
        record: MemoryRecord,
        namespace: Optional[str] = None,
    ) -> None:
        """Embed ``text`` and upsert the memory with the resulting vector."""
        vector = await self._embed(text)
        await self.memories.upsert(point_id, vector, record, namespace)

    async def search_memories_text(
        self,
        query_text: str,
        user_id: int,
        category: Optional[str] = None,
        limit: Optional[int] = None,
        min_score: Optional[float] = None,
        namespace: Optional[str] = None,
    ) -> List[MemorySearchResult]:
        """Embed ``query_text`` and run a memory similarity search."""
        vector = await self._embed(query_text)
        return await self.memories.search(
            vector, user_id, category, limit, min_score, namespace
        )
