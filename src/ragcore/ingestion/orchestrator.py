"""
Ingestion orchestrator: corpus directory -> chunks -> index.

Flow per run:
1. Enumerate the corpus directory; unsupported extensions are skipped
2. Extract text per file; an unreadable file becomes a one-line placeholder
3. Clean and segment each document
4. Embed each chunk with bounded concurrency and a per-call timeout;
   failed chunks are dropped and counted
5. Add the surviving chunks to the index in one call

Runs are memoised through an ``IngestionState`` owned by the caller, so a
second ``ingest_all`` returns the first report instead of re-ingesting.
"""

import asyncio
import time
import uuid
from concurrent.futures import ThreadPoolExecutor
from enum import Enum
from pathlib import Path
from typing import Any

from loguru import logger
from pydantic import BaseModel, Field

from ragcore.config.models import ChunkingConfig, IngestionConfig
from ragcore.embedder.base import BaseEmbedder
from ragcore.entities.document import Chunk, SourceDocument
from ragcore.errors import ExtractionError, ProviderError
from ragcore.extractor.factory import ExtractorFactory
from ragcore.index.base import BaseIndex
from ragcore.splitter import TextSegmenter, clean_text
from .statistics import describe_document, log_corpus_statistics


class IngestionStatus(str, Enum):
    UNINITIALIZED = "uninitialized"
    RUNNING = "running"
    READY = "ready"


class IngestionReport(BaseModel):
    """Outcome of one ingestion run.

    Attributes:
        chunks_indexed: Chunks added to the index
        documents_processed: Supported files read (placeholders included)
        failed_files: Files whose extraction failed (indexed as placeholders)
        skipped_files: Files with unsupported extensions
        failed_chunks: Chunks dropped because embedding failed or timed out
        already_initialized: True when returned from a memoised earlier run
    """

    chunks_indexed: int = 0
    documents_processed: int = 0
    failed_files: list[str] = Field(default_factory=list)
    skipped_files: list[str] = Field(default_factory=list)
    failed_chunks: int = 0
    already_initialized: bool = False
    request_id: str = ""
    duration: float = 0.0


class IngestionState:
    """Lifecycle-owned memo of the ingestion run.

    Share one instance between orchestrators that feed the same index.
    """

    def __init__(self):
        self.status = IngestionStatus.UNINITIALIZED
        self.report: IngestionReport | None = None
        self.lock = asyncio.Lock()

    def reset(self):
        self.status = IngestionStatus.UNINITIALIZED
        self.report = None


def placeholder_text(path: Path) -> str:
    file_type = path.suffix.lstrip(".").upper() or "UNKNOWN"
    return f"[{file_type} file could not be processed: {path.name}]"


def build_document(filename: str, text: str) -> SourceDocument:
    """Clean extracted text and wrap it with ingestion and content metadata.

    Besides the standard metadata, each document carries its paragraph and
    sentence counts and its top keywords (comma-separated, so the value stays
    a Chroma-compatible primitive).
    """
    text = clean_text(text)
    document = SourceDocument.from_text(filename, text, Path(filename).suffix.lower())
    description = describe_document(text)
    return document.model_copy(update={
        "metadata": {
            **document.metadata,
            "paragraph_count": description.paragraph_count,
            "sentence_count": description.sentence_count,
            "top_keywords": ", ".join(description.top_keywords),
        }
    })


class IngestionOrchestrator:
    """
    Loads the corpus and feeds the index.

    Attributes:
        embedder: Embedder for chunk vectors
        index: Target index
        config: Ingestion configuration
        state: Memo shared with the owner of the index
    """

    def __init__(
        self,
        embedder: BaseEmbedder,
        index: BaseIndex,
        config: IngestionConfig | None = None,
        state: IngestionState | None = None,
    ):
        self.embedder = embedder
        self.index = index
        self.config = config or IngestionConfig()
        self.state = state or IngestionState()
        self.segmenter = TextSegmenter(self.config.chunking)

    async def ingest_all(self, source_dir: str | Path) -> IngestionReport:
        """
        Ingest every supported file of a directory into the index.

        Args:
            source_dir: Corpus directory (a missing directory ingests nothing)

        Returns:
            The run report; on repeated calls, the first report with
            ``already_initialized=True``

        Raises:
            IndexUnavailableError: If the final bulk add fails
        """
        async with self.state.lock:
            if self.state.status == IngestionStatus.READY and self.state.report is not None:
                logger.debug("Ingestion already completed, returning memoised report")
                return self.state.report.model_copy(update={"already_initialized": True})

            self.state.status = IngestionStatus.RUNNING
            try:
                report = await self._run(Path(source_dir))
            except Exception:
                self.state.status = IngestionStatus.UNINITIALIZED
                raise

            self.state.report = report
            self.state.status = IngestionStatus.READY
            return report

    async def _run(self, source_dir: Path) -> IngestionReport:
        request_id = str(uuid.uuid4())[:8]
        start_time = time.time()
        report = IngestionReport(request_id=request_id)

        logger.info(f"[{request_id}] Loading documents from {source_dir}")
        if not source_dir.is_dir():
            logger.warning(f"[{request_id}] Documents directory does not exist: {source_dir}")
            return report

        documents: list[SourceDocument] = []
        for path in sorted(p for p in source_dir.iterdir() if p.is_file()):
            if path.suffix.lower() not in self.config.supported_extensions:
                logger.warning(f"[{request_id}] Skipping unsupported file type: {path.name}")
                report.skipped_files.append(path.name)
                continue

            text, ok = await asyncio.to_thread(self._extract, path)
            if not ok:
                report.failed_files.append(path.name)
            documents.append(build_document(path.name, text))

        report.documents_processed = len(documents)
        if not documents:
            logger.warning(f"[{request_id}] No valid documents found in {source_dir}")
            report.duration = time.time() - start_time
            return report

        log_corpus_statistics(documents)

        chunks = [chunk for doc in documents for chunk in self.segmenter.split_document(doc)]
        embedded = await self._embed_chunks(chunks, request_id)
        report.failed_chunks = len(chunks) - len(embedded)

        if embedded:
            await asyncio.to_thread(self.index.add, embedded)
        report.chunks_indexed = len(embedded)
        report.duration = time.time() - start_time

        logger.info(
            f"[{request_id}] Ingestion complete: {report.chunks_indexed} chunks from "
            f"{report.documents_processed} documents in {report.duration:.2f}s "
            f"(failed files: {len(report.failed_files)}, failed chunks: {report.failed_chunks}, "
            f"skipped: {len(report.skipped_files)})"
        )
        return report

    def _extract(self, path: Path) -> tuple[str, bool]:
        """Return ``(text, ok)``; on failure the text is the placeholder."""
        try:
            extractor = ExtractorFactory.for_path(path)
            text = extractor.extract(path)
            logger.info(f"Successfully loaded document: {path.name}")
            return text, True
        except (ExtractionError, ImportError) as e:
            logger.error(f"Error processing {path.name}: {e}")
            return placeholder_text(path), False
        except Exception as e:
            logger.exception(f"Unexpected error processing {path.name}: {type(e).__name__}: {e}")
            return placeholder_text(path), False

    async def _embed_chunks(self, chunks: list[Chunk], request_id: str) -> list[Chunk]:
        semaphore = asyncio.Semaphore(self.config.max_concurrency)
        timeout = self.config.embed_timeout
        loop = asyncio.get_running_loop()
        # A timed-out call keeps its worker thread; the dedicated pool caps how
        # many such threads a hung provider can pin
        executor = ThreadPoolExecutor(
            max_workers=self.config.max_concurrency,
            thread_name_prefix="ragcore-embed",
        )

        async def embed_one(chunk: Chunk) -> Chunk | None:
            async with semaphore:
                try:
                    chunk.embedding = await asyncio.wait_for(
                        loop.run_in_executor(executor, self.embedder.embed_query, chunk.text),
                        timeout=timeout,
                    )
                    return chunk
                except asyncio.TimeoutError:
                    logger.warning(f"[{request_id}] Embedding timed out after {timeout}s for chunk {chunk.id}")
                except ProviderError as e:
                    logger.warning(f"[{request_id}] Embedding failed for chunk {chunk.id}: {e}")
                return None

        logger.info(f"[{request_id}] Embedding {len(chunks)} chunks (max concurrency {self.config.max_concurrency})")
        try:
            results = await asyncio.gather(*(embed_one(chunk) for chunk in chunks))
        finally:
            executor.shutdown(wait=False, cancel_futures=True)
        return [chunk for chunk in results if chunk is not None]

    async def add_document(
        self,
        text: str,
        filename: str,
        metadata: dict[str, Any] | None = None,
        chunking: ChunkingConfig | None = None,
    ) -> list[str]:
        """Index one ad-hoc document outside the corpus run.

        Uses the general-purpose chunking defaults (1000/200/100) unless
        ``chunking`` is given. Chunks whose embedding fails are dropped.

        Returns:
            Ids of the indexed chunks
        """
        segmenter = TextSegmenter(chunking or ChunkingConfig())
        document = build_document(filename, text)
        if metadata:
            document = document.model_copy(update={"metadata": {**metadata, **document.metadata}})

        chunks = segmenter.split_document(document)
        embedded = await self._embed_chunks(chunks, request_id="adhoc")
        if not embedded:
            return []
        return await asyncio.to_thread(self.index.add, embedded)
