"""ChromaDB index backed by a Chroma server.

The collection uses cosine space, so Chroma distances are
``1 - cosine_similarity`` in ``[0, 2]``.
"""

from typing import Any

from loguru import logger

try:
    import chromadb

    CHROMA_AVAILABLE = True
except ImportError as e:
    CHROMA_AVAILABLE = False
    logger.warning(f"chromadb not installed - ChromaIndex unavailable: {e}")

from ragcore.embedder.base import BaseEmbedder
from ragcore.entities.document import Chunk
from ragcore.entities.search_result import RetrievalResult
from ragcore.errors import IndexUnavailableError
from .base import BaseIndex, IndexStats

_PRIMITIVES = (str, int, float, bool)


def flatten_metadata(metadata: dict[str, Any]) -> dict[str, str | int | float | bool]:
    """Reduce metadata to the primitive values Chroma accepts.

    ``None`` values are dropped, other non-primitives are stringified.
    """
    flat = {}
    for key, value in metadata.items():
        if value is None:
            continue
        flat[key] = value if isinstance(value, _PRIMITIVES) else str(value)
    return flat


class ChromaIndex(BaseIndex):
    """Index stored in a remote Chroma collection.

    Nothing touches the network until ``init()``; every other operation
    raises ``IndexUnavailableError`` until ``init()`` has succeeded.

    Attributes:
        host: Chroma server host
        port: Chroma server port
        collection_name: Name of the Chroma collection
    """

    backend = "chroma"

    def __init__(
        self,
        embedder: BaseEmbedder,
        host: str = "localhost",
        port: int = 8000,
        collection_name: str = "ragcore_knowledge",
        client: Any = None,
    ):
        """Initialize the Chroma index.

        Args:
            embedder: Embedder for queries and for chunks without vectors
            host: Chroma server host
            port: Chroma server port
            collection_name: Name of the collection to use
            client: Pre-built Chroma client (skips ``chromadb.HttpClient``)

        Raises:
            ImportError: If chromadb is not installed
        """
        if not CHROMA_AVAILABLE and client is None:
            raise ImportError(
                "chromadb is required for ChromaIndex. "
                "Install with: pip install chromadb"
            )

        super().__init__(embedder)
        self.host = host
        self.port = port
        self.collection_name = collection_name
        self._client = client
        self._collection = None

    def init(self) -> bool:
        try:
            if self._client is None:
                self._client = chromadb.HttpClient(host=self.host, port=self.port)
            self._client.heartbeat()
            self._collection = self._client.get_or_create_collection(
                name=self.collection_name,
                metadata={"hnsw:space": "cosine"}
            )
        except Exception as e:
            logger.warning(f"Chroma at {self.host}:{self.port} unavailable: {type(e).__name__}: {e}")
            self._collection = None
            return False

        logger.info(
            f"ChromaIndex ready: collection={self.collection_name}, "
            f"items={self._collection.count()}"
        )
        return True

    @property
    def ready(self) -> bool:
        return self._collection is not None

    def _require_collection(self):
        if self._collection is None:
            raise IndexUnavailableError(
                "Chroma index used before a successful init()",
                details={"host": self.host, "port": self.port, "collection": self.collection_name},
            )
        return self._collection

    def _unavailable(self, operation: str, error: Exception) -> IndexUnavailableError:
        logger.error(f"Chroma {operation} failed: {error}")
        return IndexUnavailableError(
            f"Chroma {operation} failed",
            details={"collection": self.collection_name},
            original_error=error,
        )

    def add(self, chunks: list[Chunk]) -> list[str]:
        collection = self._require_collection()
        if not chunks:
            return []

        self._ensure_embeddings(chunks)

        ids = [chunk.id for chunk in chunks]
        try:
            # upsert keeps re-ingestion idempotent per chunk id
            collection.upsert(
                ids=ids,
                embeddings=[chunk.embedding for chunk in chunks],
                documents=[chunk.text for chunk in chunks],
                metadatas=[flatten_metadata(chunk.metadata) for chunk in chunks],
            )
        except Exception as e:
            raise self._unavailable("upsert", e) from e

        logger.info(f"Upserted {len(chunks)} chunks to Chroma collection {self.collection_name}")
        return ids

    def search(self, query_text: str, n: int = 5, where: dict[str, Any] | None = None) -> list[RetrievalResult]:
        collection = self._require_collection()
        if n <= 0:
            return []

        query_vector = self.embedder.embed_query(query_text)

        try:
            results = collection.query(
                query_embeddings=[query_vector],
                n_results=n,
                where=where or None,
                include=["documents", "metadatas", "distances"]
            )
        except Exception as e:
            raise self._unavailable("query", e) from e

        if not results["ids"] or not results["ids"][0]:
            logger.debug("No results found")
            return []

        # Chroma returns nested lists (one per query)
        ids = results["ids"][0]
        documents = results["documents"][0]
        metadatas = results["metadatas"][0]
        distances = results["distances"][0]

        search_results = [
            RetrievalResult(
                chunk_id=chunk_id,
                text=documents[i] or "",
                metadata=dict(metadatas[i] or {}),
                distance=min(2.0, max(0.0, distances[i])),
            )
            for i, chunk_id in enumerate(ids)
        ]
        search_results.sort()

        logger.debug(f"Chroma search returned {len(search_results)} results (requested n={n})")
        return search_results

    def delete(self, ids: list[str]) -> None:
        collection = self._require_collection()
        if not ids:
            return
        try:
            collection.delete(ids=ids)
        except Exception as e:
            raise self._unavailable("delete", e) from e
        logger.info(f"Deleted {len(ids)} chunks from Chroma collection {self.collection_name}")

    def clear(self) -> None:
        collection = self._require_collection()
        try:
            all_results = collection.get()
            if all_results["ids"]:
                collection.delete(ids=all_results["ids"])
                logger.info(f"Cleared all chunks from collection {self.collection_name}")
            else:
                logger.debug(f"Collection {self.collection_name} already empty")
        except Exception as e:
            raise self._unavailable("clear", e) from e

    def count(self) -> int:
        collection = self._require_collection()
        try:
            return collection.count()
        except Exception as e:
            raise self._unavailable("count", e) from e

    def stats(self) -> IndexStats:
        document_count = 0
        if self.ready:
            try:
                document_count = self.count()
            except IndexUnavailableError:
                pass
        return IndexStats(
            document_count=document_count,
            backend=self.backend,
            ready=self.ready,
            degraded=False,
            collection_name=self.collection_name,
        )
