"""
Idempotent collection provisioning.

Collections are created on demand, right before the first write that targets
them. Concurrent callers may both see the collection missing and both try to
create it; the loser's "already exists" failure is treated as success, so no
lock is needed.
"""

from typing import Sequence, Set, Tuple

from vectorgate.core.exceptions.custom_exceptions import CollectionExistsError
from vectorgate.core.logging.logger import get_logger
from vectorgate.storage.vector_store.base import DISTANCE_COSINE, BaseVectorEngine

logger = get_logger(__name__)

IndexSpec = Tuple[str, str]

MEMORY_INDEXES: Tuple[IndexSpec, ...] = (
    ("user_id", "integer"),
    ("category", "keyword"),
    ("active", "bool"),
)

DOCUMENT_INDEXES: Tuple[IndexSpec, ...] = (
    ("user_id", "integer"),
    ("file_id", "integer"),
    ("group_key", "keyword"),
)


class CollectionProvisioner:
    """
    Creates collections and their payload indexes when missing.

    Index creation is idempotent in the engine. A collection only counts as
    provisioned once every requested index was created by this instance, so
    an index failure is retried on the next call even though the collection
    itself already exists.
    """

    def __init__(self, engine: BaseVectorEngine):
        self.engine = engine
        self._indexed: Set[str] = set()

    async def ensure_collection(
        self,
        name: str,
        dimension: int,
        distance: str = DISTANCE_COSINE,
        indexes: Sequence[IndexSpec] = (),
    ) -> None:
        """
        Make sure ``name`` exists with the given vector size, metric and
        payload indexes.

        Safe to call before every write: only a listing call once the
        collection and its indexes are in place.

        Raises:
            EngineError: If listing, creating or indexing fails for any reason
                other than the collection already existing
        """
        existing = await self.engine.list_collections()
        if name in existing:
            logger.debug(f"Collection '{name}' already exists")
        else:
            logger.info(
                f"Creating collection '{name}'", dimension=dimension, distance=distance
            )
            try:
                await self.engine.create_collection(name, dimension, distance)
            except CollectionExistsError:
                logger.info(f"Collection '{name}' was created concurrently")
            else:
                logger.info(f"Collection '{name}' created successfully")

        if name in self._indexed:
            return

        for field_name, field_type in indexes:
            await self.engine.create_field_index(name, field_name, field_type)
            logger.debug(f"Payload index '{field_name}' ({field_type}) ensured on '{name}'")
        self._indexed.add(name)
