"""
Embedding capability consumed by the text-based service operations.
"""

from .base import BaseEmbedder

__all__ = ["BaseEmbedder"]
