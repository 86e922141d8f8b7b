"""In-process brute-force index."""

import threading
from typing import Any

from loguru import logger

from ragcore.embedder.base import BaseEmbedder
from ragcore.entities.document import Chunk
from ragcore.entities.search_result import RetrievalResult
from ragcore.utils.similarity import CorpusEntry, rank
from .base import BaseIndex


class InMemoryIndex(BaseIndex):
    """Index that keeps chunks in a dict and ranks all of them per query.

    Used directly for development and as the stand-in for an unreachable
    Chroma server, in which case it is constructed with ``degraded=True``.
    Contents are lost when the process exits.

    Attributes:
        _chunks: Dictionary mapping chunk IDs to Chunk objects
    """

    backend = "memory"

    def __init__(self, embedder: BaseEmbedder, degraded: bool = False):
        super().__init__(embedder)
        self._chunks: dict[str, Chunk] = {}
        self._degraded = degraded
        self._lock = threading.Lock()
        logger.info(f"Initialized InMemoryIndex (degraded={degraded})")

    def init(self) -> bool:
        return True

    @property
    def ready(self) -> bool:
        return True

    @property
    def degraded(self) -> bool:
        return self._degraded

    def add(self, chunks: list[Chunk]) -> list[str]:
        if not chunks:
            return []

        self._ensure_embeddings(chunks)
        with self._lock:
            for chunk in chunks:
                self._chunks[chunk.id] = chunk
            total = len(self._chunks)

        logger.info(f"Added {len(chunks)} chunks to in-memory index (total: {total})")
        return [chunk.id for chunk in chunks]

    def search(self, query_text: str, n: int = 5, where: dict[str, Any] | None = None) -> list[RetrievalResult]:
        with self._lock:
            candidates = list(self._chunks.values())

        if where:
            candidates = [
                c for c in candidates
                if all(c.metadata.get(key) == value for key, value in where.items())
            ]

        if not candidates or n <= 0:
            logger.debug("In-memory index has no candidates, returning no results")
            return []

        query_vector = self.embedder.embed_query(query_text)
        corpus = [CorpusEntry(id=c.id, vector=c.embedding, payload=c) for c in candidates]
        ranked = rank(query_vector, corpus, top_k=n)

        results = [
            RetrievalResult(
                chunk_id=item.payload.id,
                text=item.payload.text,
                metadata=dict(item.payload.metadata),
                distance=min(2.0, max(0.0, 1.0 - item.similarity)),
            )
            for item in ranked
        ]

        logger.debug(f"Ranked {len(candidates)} chunks, returning top {len(results)}")
        return results

    def delete(self, ids: list[str]) -> None:
        with self._lock:
            for chunk_id in ids:
                self._chunks.pop(chunk_id, None)
        logger.info(f"Deleted {len(ids)} chunks")

    def clear(self) -> None:
        with self._lock:
            self._chunks.clear()
        logger.info("Cleared in-memory index")

    def count(self) -> int:
        return len(self._chunks)
