"""Boundary-aware sliding-window text segmenter.

The window advances greedily over the text. When paragraph preservation is
on, each window end is pulled back to the last paragraph break, or failing
that the last sentence terminator, found in the back half of the window and
beyond ``start + min_chunk_size``. Consecutive windows overlap by at most
``chunk_overlap`` characters.
"""

from typing import Iterator

from loguru import logger

from ragcore.config.models import ChunkingConfig
from ragcore.entities.document import Chunk, SourceDocument, chunk_id_for
from ragcore.errors import ConfigError

PARAGRAPH_BREAK = "\n\n"
SENTENCE_TERMINATORS = (". ", "! ", "? ", ".\n", "!\n", "?\n")


class TextSegmenter:
    """Splits text into bounded, overlapping chunks.

    Attributes:
        chunk_size: Maximum characters per chunk
        chunk_overlap: Maximum characters shared by adjacent chunks
        min_chunk_size: Shorter (trimmed) windows are not emitted
        preserve_paragraphs: Snap window ends to paragraph/sentence boundaries
    """

    def __init__(self, config: ChunkingConfig | None = None, **overrides):
        """Initialize the segmenter.

        Args:
            config: Chunking parameters (defaults to ``ChunkingConfig()``)
            **overrides: Individual fields overriding ``config``

        Raises:
            ConfigError: If the parameters cannot produce valid chunks
        """
        config = (config or ChunkingConfig()).model_copy(update=overrides)

        details = config.model_dump()
        if config.chunk_size <= 0:
            raise ConfigError("chunk_size must be positive", details=details)
        if config.chunk_overlap < 0 or config.chunk_overlap >= config.chunk_size:
            raise ConfigError("chunk_overlap must be in [0, chunk_size)", details=details)
        if config.min_chunk_size < 0 or config.min_chunk_size > config.chunk_size:
            raise ConfigError("min_chunk_size must be in [0, chunk_size]", details=details)

        self.config = config
        self.chunk_size = config.chunk_size
        self.chunk_overlap = config.chunk_overlap
        self.min_chunk_size = config.min_chunk_size
        self.preserve_paragraphs = config.preserve_paragraphs

    def split(self, text: str) -> list[str]:
        """Split text into chunks (left to right)."""
        return list(self.iter_chunks(text))

    def iter_chunks(self, text: str) -> Iterator[str]:
        """Yield chunks lazily; each call starts from the beginning of ``text``."""
        if not text or not text.strip():
            return

        length = len(text)
        if length <= self.chunk_size:
            yield text.strip()
            return

        start = 0
        while start < length:
            end = min(start + self.chunk_size, length)
            if self.preserve_paragraphs and end < length:
                end = self._find_break(text, start, end)

            piece = text[start:end].strip()
            if len(piece) >= self.min_chunk_size:
                yield piece

            if end >= length:
                break

            start = max(start + 1, end - self.chunk_overlap)

            if length - start < self.min_chunk_size:
                break

    def _find_break(self, text: str, start: int, end: int) -> int:
        """Return the snapped window end, or ``end`` when no boundary qualifies."""
        floor = start + self.min_chunk_size
        lower = max(floor + 1, end - self.chunk_size // 2)
        if lower >= end:
            return end

        paragraph = text.rfind(PARAGRAPH_BREAK, lower, end)
        if paragraph > floor:
            return paragraph

        best = -1
        for terminator in SENTENCE_TERMINATORS:
            index = text.rfind(terminator, lower, end)
            if index != -1:
                best = max(best, index + len(terminator))

        if best > floor:
            return best
        return end

    def split_document(self, document: SourceDocument) -> list[Chunk]:
        """Split a document into chunks carrying the standard metadata.

        Embeddings are left empty; the ingestion orchestrator fills them in.
        """
        texts = self.split(document.text)
        chunks = [
            Chunk(
                id=chunk_id_for(document.id, i),
                text=chunk_text,
                metadata={
                    **document.metadata,
                    "filename": document.filename,
                    "chunk_index": i,
                    "total_chunks": len(texts),
                    "parent_document_id": document.id,
                },
            )
            for i, chunk_text in enumerate(texts)
        ]

        if chunks:
            logger.debug(
                f"Split {document.filename} into {len(chunks)} chunks "
                f"(avg size: {sum(len(c.text) for c in chunks) / len(chunks):.0f})"
            )
        return chunks


def segment(
    text: str,
    chunk_size: int = 1000,
    chunk_overlap: int = 200,
    min_chunk_size: int = 100,
    preserve_paragraphs: bool = True,
) -> list[str]:
    """Functional shortcut for ``TextSegmenter(...).split(text)``.

    Raises:
        ConfigError: If ``chunk_overlap >= chunk_size`` (or other invalid sizes)
    """
    segmenter = TextSegmenter(
        ChunkingConfig(
            chunk_size=chunk_size,
            chunk_overlap=chunk_overlap,
            min_chunk_size=min_chunk_size,
            preserve_paragraphs=preserve_paragraphs,
        )
    )
    return segmenter.split(text)
