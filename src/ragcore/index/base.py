"""Index base class definition."""

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel

from ragcore.embedder.base import BaseEmbedder
from ragcore.entities.document import Chunk
from ragcore.entities.search_result import RetrievalResult


class IndexStats(BaseModel):
    """Snapshot of an index for status reporting."""

    document_count: int = 0
    backend: str
    ready: bool
    degraded: bool = False
    collection_name: str | None = None


class BaseIndex(ABC):
    """Abstract base class for chunk indexes.

    An index owns its chunks, keyed by chunk id: re-adding an id overwrites
    the stored chunk. Queries are plain text; the index embeds them with the
    injected embedder so that stored and query vectors share one space.

    Attributes:
        embedder: Embedder used for queries (and for chunks added without a vector)
    """

    backend: str = "base"

    def __init__(self, embedder: BaseEmbedder):
        self.embedder = embedder

    @abstractmethod
    def init(self) -> bool:
        """Prepare the backend.

        Returns:
            True if the index is ready; False if the backend is unreachable.
            Never raises.
        """
        pass

    @property
    @abstractmethod
    def ready(self) -> bool:
        pass

    @property
    def degraded(self) -> bool:
        """True when this index stands in for an unavailable primary backend."""
        return False

    @abstractmethod
    def add(self, chunks: list[Chunk]) -> list[str]:
        """Add (or overwrite) chunks.

        Args:
            chunks: Chunks to store; missing embeddings are computed in one batch

        Returns:
            The ids of the stored chunks

        Raises:
            IndexUnavailableError: If the backend is not initialised or unreachable
            ProviderError: If embedding missing vectors fails
        """
        pass

    @abstractmethod
    def search(self, query_text: str, n: int = 5, where: dict[str, Any] | None = None) -> list[RetrievalResult]:
        """Return up to ``n`` chunks nearest to the query, by ascending distance.

        Args:
            query_text: The query string
            n: Maximum number of results
            where: Optional exact-match metadata filter

        Raises:
            IndexUnavailableError: If the backend is not initialised or unreachable
            ProviderError: If embedding the query fails
        """
        pass

    @abstractmethod
    def delete(self, ids: list[str]) -> None:
        pass

    @abstractmethod
    def clear(self) -> None:
        pass

    @abstractmethod
    def count(self) -> int:
        pass

    def stats(self) -> IndexStats:
        return IndexStats(
            document_count=self.count() if self.ready else 0,
            backend=self.backend,
            ready=self.ready,
            degraded=self.degraded,
        )

    def _ensure_embeddings(self, chunks: list[Chunk]) -> None:
        missing = [chunk for chunk in chunks if chunk.embedding is None]
        if not missing:
            return
        vectors = self.embedder.embed([chunk.text for chunk in missing])
        for chunk, vector in zip(missing, vectors):
            chunk.embedding = vector
