"""RAG query pipeline - retrieval, prompt assembly, generation and memory."""

import asyncio
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any

from loguru import logger

from ragcore.config.models import IngestionConfig, QueryOptions
from ragcore.config.settings import Settings, get_settings
from ragcore.embedder.base import BaseEmbedder
from ragcore.embedder.factory import EmbedderFactory
from ragcore.entities.query_result import QueryResult, SourceCitation
from ragcore.entities.search_result import RetrievalResult
from ragcore.errors import (
    IndexUnavailableError,
    InvalidQueryError,
    NotInitializedError,
    ProviderError,
    RAGCoreError,
)
from ragcore.index.base import BaseIndex
from ragcore.index.factory import IndexFactory
from ragcore.index.in_memory import InMemoryIndex
from ragcore.ingestion.orchestrator import IngestionOrchestrator, IngestionReport, IngestionState
from ragcore.knowledge.responder import RuleBasedResponder
from ragcore.knowledge.static import STATIC_SOURCE_NAME, StaticKnowledgeBase
from ragcore.llm.base import BaseLLM
from ragcore.llm.providers.openai import OpenAIChatLLM
from ragcore.memory.session import SessionMemory
from ragcore.utils.performance import timer
from .prompt import DEFAULT_ORGANIZATION, build_context, build_messages

PREVIEW_LENGTH = 200


class PipelineState(str, Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY_VECTOR = "ready_vector"
    READY_FALLBACK = "ready_fallback"


def _preview(text: str) -> str:
    return text[:PREVIEW_LENGTH] + "..."


class RAGPipeline:
    """
    Answers questions from the indexed corpus, degrading gracefully.

    Modes:
    - READY_VECTOR: the primary index initialised and was ingested into;
      answers are grounded in retrieved chunks
    - READY_FALLBACK: the primary index is unavailable; chunks come from the
      in-process fallback index if one is configured and anything clears the
      threshold, otherwise the static knowledge base is the context

    A failed generation call never fails the query: the rule-based responder
    answers from the static knowledge base instead.

    Attributes:
        embedder: Embedder shared by the indexes
        llm: Generation capability
        index: Primary index
        fallback_index: Optional in-process index used when the primary is down
        knowledge_base: Static content for fallback answers
        memory: Session memory
        state: Current lifecycle state
    """

    def __init__(
        self,
        embedder: BaseEmbedder,
        llm: BaseLLM,
        index: BaseIndex,
        documents_dir: str | Path,
        *,
        fallback_index: BaseIndex | None = None,
        knowledge_base: StaticKnowledgeBase | None = None,
        memory: SessionMemory | None = None,
        ingestion_config: IngestionConfig | None = None,
        lazy_initialize: bool = True,
        embedding_timeout: float = 30.0,
        generation_timeout: float = 60.0,
        organization: str = DEFAULT_ORGANIZATION,
    ):
        self.embedder = embedder
        self.llm = llm
        self.index = index
        self.fallback_index = fallback_index
        self.documents_dir = Path(documents_dir)
        self.knowledge_base = knowledge_base or StaticKnowledgeBase()
        self.responder = RuleBasedResponder(self.knowledge_base)
        self.memory = memory or SessionMemory()
        self.ingestion_config = ingestion_config or IngestionConfig()
        self.lazy_initialize = lazy_initialize
        self.embedding_timeout = embedding_timeout
        self.generation_timeout = generation_timeout
        self.organization = organization

        self.state = PipelineState.UNINITIALIZED
        self.last_ingestion: IngestionReport | None = None
        self._active_index: BaseIndex | None = None
        self._orchestrator: IngestionOrchestrator | None = None
        self._init_lock = asyncio.Lock()

    @property
    def is_initialized(self) -> bool:
        return self.state in (PipelineState.READY_VECTOR, PipelineState.READY_FALLBACK)

    @property
    def rag_enabled(self) -> bool:
        return self.state == PipelineState.READY_VECTOR

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def initialize(self) -> PipelineState:
        """
        Bring the pipeline to a READY state, at most once.

        Concurrent callers share one run. Unavailable backends and failed
        ingestion runs degrade the mode instead of raising.

        Returns:
            The resulting state (READY_VECTOR or READY_FALLBACK)
        """
        async with self._init_lock:
            if self.is_initialized:
                return self.state

            self.state = PipelineState.INITIALIZING
            logger.info("Initializing RAG pipeline...")

            try:
                with timer("RAG pipeline initialization"):
                    if await self._try_index(self.index):
                        self.state = PipelineState.READY_VECTOR
                        logger.info(f"RAG pipeline ready (vector mode, backend={self.index.backend})")
                    else:
                        await self._enter_fallback()
            except BaseException:
                self.state = PipelineState.UNINITIALIZED
                raise

            return self.state

    async def _try_index(self, index: BaseIndex) -> bool:
        """Init the index and ingest the corpus into it; False on failure."""
        ready = await asyncio.to_thread(index.init)
        if not ready:
            logger.warning(f"{index.backend} index unavailable")
            return False

        orchestrator = IngestionOrchestrator(
            self.embedder,
            index,
            config=self.ingestion_config,
            state=IngestionState(),
        )
        try:
            report = await orchestrator.ingest_all(self.documents_dir)
        except RAGCoreError as e:
            logger.error(f"Ingestion into {index.backend} index failed: {e}")
            return False
        except Exception as e:
            logger.exception(f"Unexpected error ingesting into {index.backend} index: {type(e).__name__}: {e}")
            return False

        self.last_ingestion = report
        self._active_index = index
        self._orchestrator = orchestrator
        return True

    async def _enter_fallback(self):
        self._active_index = None
        self._orchestrator = None

        if self.fallback_index is not None and await self._try_index(self.fallback_index):
            logger.warning(
                f"RAG pipeline running in fallback mode with {self.fallback_index.backend} index "
                f"({self.last_ingestion.chunks_indexed if self.last_ingestion else 0} chunks)"
            )
        else:
            logger.warning("RAG pipeline running in fallback mode with the static knowledge base only")

        self.state = PipelineState.READY_FALLBACK

    async def _ensure_initialized(self):
        if self.is_initialized:
            return
        if not self.lazy_initialize:
            raise NotInitializedError(details={"state": self.state.value})
        await self.initialize()

    # ------------------------------------------------------------------
    # Query
    # ------------------------------------------------------------------

    async def process_query(
        self,
        message: str,
        session_id: str | None = None,
        options: QueryOptions | None = None,
    ) -> QueryResult:
        """
        Answer a query.

        Args:
            message: The user query
            session_id: Optional session whose history is replayed and extended
            options: Retrieval and generation options

        Returns:
            QueryResult with the response, cited sources and metadata

        Raises:
            InvalidQueryError: If the message is empty or blank
            NotInitializedError: If not initialized and lazy initialization is off
        """
        if not message or not message.strip():
            raise InvalidQueryError()

        options = options or QueryOptions()
        await self._ensure_initialized()

        history = []
        if session_id and options.include_history:
            history = self.memory.get_history(session_id)

        retrieved, retrieval_failed = await self._retrieve(message, options)
        use_static = retrieval_failed or self._active_index is None or (
            self.state == PipelineState.READY_FALLBACK and not retrieved
        )

        if use_static:
            context, sources = self._static_context(message)
        else:
            context = build_context(retrieved)
            sources = [
                SourceCitation(
                    filename=result.filename,
                    chunk_index=int(result.metadata.get("chunk_index", 0)),
                    similarity=result.similarity,
                    content=_preview(result.text),
                )
                for result in retrieved
            ]

        messages = build_messages(message, context, history, organization=self.organization)
        response, generation = await self._generate(message, messages, options)

        if session_id:
            self.memory.append(session_id, message, response)

        return QueryResult(
            response=response,
            sources=sources,
            metadata={
                "query": message,
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "session_id": session_id,
                "retrieved_docs": len(sources),
                "rag_enabled": self.rag_enabled and not use_static,
                "mode": "vector" if self.state == PipelineState.READY_VECTOR else "fallback",
                "backend": "static" if use_static else self._active_index.backend,
                "generation": generation,
            },
        )

    async def _retrieve(self, message: str, options: QueryOptions) -> tuple[list[RetrievalResult], bool]:
        """Return ``(results above threshold, retrieval_failed)``."""
        if self._active_index is None:
            return [], False

        try:
            results = await asyncio.wait_for(
                asyncio.to_thread(self._active_index.search, message, options.max_results),
                timeout=self.embedding_timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(f"Retrieval timed out after {self.embedding_timeout}s, using static knowledge base")
            return [], True
        except (ProviderError, IndexUnavailableError) as e:
            logger.warning(f"Retrieval failed, using static knowledge base: {e}")
            return [], True

        relevant = [r for r in results if r.similarity >= options.similarity_threshold]
        logger.info(
            f"Retrieved {len(relevant)} relevant documents for query "
            f"({len(results)} candidates, threshold={options.similarity_threshold})"
        )
        return relevant, False

    def _static_context(self, message: str) -> tuple[str, list[SourceCitation]]:
        matched = self.knowledge_base.match(message)
        context = self.knowledge_base.format(matched or None)
        logger.debug(f"Using static knowledge base context (sections: {matched or 'all'})")
        source = SourceCitation(
            filename=STATIC_SOURCE_NAME,
            chunk_index=0,
            similarity=1.0,
            content=_preview(context),
        )
        return context, [source]

    async def _generate(
        self,
        message: str,
        messages: list[dict[str, str]],
        options: QueryOptions,
    ) -> tuple[str, str]:
        """Return ``(response, generation)`` where generation is "llm" or "rule_based"."""
        try:
            response = await asyncio.wait_for(
                asyncio.to_thread(self.llm.chat, messages, options.temperature, options.max_tokens),
                timeout=self.generation_timeout,
            )
        except asyncio.TimeoutError:
            logger.error(f"Generation timed out after {self.generation_timeout}s, using rule-based answer")
        except ProviderError as e:
            logger.error(f"Generation failed, using rule-based answer: {e}")
        else:
            if response and response.strip():
                return response, "llm"
            logger.warning("Generation returned an empty response, using rule-based answer")

        return self.responder.respond(message), "rule_based"

    # ------------------------------------------------------------------
    # Management
    # ------------------------------------------------------------------

    async def search_documents(self, keyword: str, limit: int = 10) -> list[dict[str, Any]]:
        """Raw similarity search over the active index (no threshold)."""
        await self._ensure_initialized()
        if self._active_index is None:
            return []

        results = await asyncio.to_thread(self._active_index.search, keyword, limit)
        return [
            {
                "id": r.chunk_id,
                "content": r.text,
                "metadata": r.metadata,
                "similarity": r.similarity,
            }
            for r in results
        ]

    async def add_document(self, text: str, filename: str, metadata: dict[str, Any] | None = None) -> list[str]:
        """Index one ad-hoc document into the active index.

        Raises:
            IndexUnavailableError: If no index is active (static-only fallback)
        """
        await self._ensure_initialized()
        if self._orchestrator is None:
            raise IndexUnavailableError("No active index to add documents to")
        ids = await self._orchestrator.add_document(text, filename, metadata)
        logger.info(f"Added document {filename} as {len(ids)} chunks")
        return ids

    def clear_session_history(self, session_id: str) -> bool:
        return self.memory.clear(session_id)

    def get_stats(self) -> dict[str, Any]:
        return {
            "is_initialized": self.is_initialized,
            "state": self.state.value,
            "rag_enabled": self.rag_enabled,
            "vector_database": self.index.stats().model_dump(),
            "active_index": self._active_index.stats().model_dump() if self._active_index else None,
            "active_sessions": self.memory.active_sessions(),
            "total_conversations": self.memory.total_turns(),
            "last_ingestion": self.last_ingestion.model_dump() if self.last_ingestion else None,
        }


def build_pipeline(settings: Settings | None = None) -> RAGPipeline:
    """Compose a pipeline from settings (defaults to the environment)."""
    settings = settings or get_settings()

    if settings.EMBEDDER_TYPE == "openai":
        if not settings.OPENAI_API_KEY:
            logger.warning("OPENAI_API_KEY is not set; embedding calls will fail")
        embedder = EmbedderFactory.create(
            "openai",
            api_key=settings.OPENAI_API_KEY,
            base_url=settings.OPENAI_BASE_URL,
            model=settings.EMBEDDING_MODEL,
            timeout=settings.EMBEDDING_TIMEOUT,
        )
    else:
        embedder = EmbedderFactory.create(settings.EMBEDDER_TYPE)

    llm = OpenAIChatLLM(
        api_key=settings.OPENAI_API_KEY,
        base_url=settings.OPENAI_BASE_URL,
        model=settings.CHAT_MODEL,
        timeout=settings.GENERATION_TIMEOUT,
    )

    if settings.INDEX_BACKEND == "chroma":
        index = IndexFactory.create(
            "chroma",
            embedder,
            host=settings.CHROMA_HOST,
            port=settings.CHROMA_PORT,
            collection_name=settings.CHROMA_COLLECTION,
        )
    else:
        index = IndexFactory.create(settings.INDEX_BACKEND, embedder)

    fallback_index = None
    if settings.FALLBACK_TO_MEMORY and index.backend != InMemoryIndex.backend:
        fallback_index = InMemoryIndex(embedder, degraded=True)

    knowledge_base = (
        StaticKnowledgeBase.from_json(settings.KNOWLEDGE_BASE_PATH)
        if settings.KNOWLEDGE_BASE_PATH
        else StaticKnowledgeBase()
    )

    return RAGPipeline(
        embedder,
        llm,
        index,
        settings.DOCUMENTS_DIR,
        fallback_index=fallback_index,
        knowledge_base=knowledge_base,
        ingestion_config=IngestionConfig(
            max_concurrency=settings.INGEST_MAX_CONCURRENCY,
            embed_timeout=settings.EMBEDDING_TIMEOUT,
        ),
        lazy_initialize=settings.LAZY_INITIALIZE,
        embedding_timeout=settings.EMBEDDING_TIMEOUT,
        generation_timeout=settings.GENERATION_TIMEOUT,
    )


async def start_pipeline(settings: Settings | None = None) -> RAGPipeline:
    """Build a pipeline and, when ``INITIALIZE_ON_STARTUP`` is set, initialize it now.

    Otherwise initialization happens on the first query (``LAZY_INITIALIZE``);
    with both flags off every query raises ``NotInitializedError`` until
    ``initialize()`` is called explicitly.
    """
    settings = settings or get_settings()
    pipeline = build_pipeline(settings)

    if settings.INITIALIZE_ON_STARTUP:
        state = await pipeline.initialize()
        logger.info(f"Pipeline initialized on startup: {state.value}")
    elif settings.LAZY_INITIALIZE:
        logger.info("Pipeline will initialize on the first query")
    else:
        logger.warning("INITIALIZE_ON_STARTUP and LAZY_INITIALIZE are both off; queries will be rejected")
    return pipeline
