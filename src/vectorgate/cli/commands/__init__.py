"""
CLI commands module for VectorGate
"""

from . import collections, documents, memories, status

__all__ = ["collections", "documents", "memories", "status"]
