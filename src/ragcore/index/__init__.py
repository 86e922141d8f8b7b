"""Chunk indexes: Chroma-backed and in-process."""

from .base import BaseIndex, IndexStats
from .chroma import ChromaIndex, flatten_metadata
from .factory import IndexFactory
from .in_memory import InMemoryIndex

__all__ = [
    "BaseIndex",
    "IndexStats",
    "ChromaIndex",
    "InMemoryIndex",
    "IndexFactory",
    "flatten_metadata",
]
