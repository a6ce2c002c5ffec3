"""
Base class for embedding backends.
"""
from abc import ABC, abstractmethod
from typing import List, Optional


class BaseEmbedder(ABC):
    """Abstract base class for text embedding backends."""

    @abstractmethod
    async def embed(self, text: str) -> List[float]:
        """Converts a text into a single vector embedding."""
        pass

    @property
    @abstractmethod
    def backend(self) -> str:
        """Name of the backend ("ollama", "onnxruntime", ...)."""
        pass

    @property
    def model(self) -> Optional[str]:
        """Model identifier, if the backend exposes one."""
        return None

    @property
    def device(self) -> str:
        """Device the backend runs on."""
        return "external"
