"""Configuration models for chunking, ingestion and querying.

Chunking parameters are validated by the segmenter itself (raising
``ConfigError``); the models here only carry values and defaults.
"""

from pydantic import BaseModel, Field


class ChunkingConfig(BaseModel):
    """Segmentation parameters.

    The defaults are the ad-hoc single-document values; ingestion uses the
    tighter ``IngestionConfig.chunking`` defaults to save context budget.

    Attributes:
        chunk_size: Maximum characters per chunk
        chunk_overlap: Maximum characters shared by adjacent chunks
        min_chunk_size: Chunks shorter than this (after trimming) are dropped
        preserve_paragraphs: Snap chunk ends to paragraph/sentence boundaries
    """

    chunk_size: int = 1000
    chunk_overlap: int = 200
    min_chunk_size: int = 100
    preserve_paragraphs: bool = True


def _ingestion_chunking() -> ChunkingConfig:
    return ChunkingConfig(chunk_size=800, chunk_overlap=100, min_chunk_size=100, preserve_paragraphs=True)


class IngestionConfig(BaseModel):
    """Ingestion orchestrator settings.

    Attributes:
        chunking: Segmentation parameters used for corpus ingestion
        max_concurrency: Maximum concurrent embedding calls
        embed_timeout: Per-chunk embedding timeout in seconds
        supported_extensions: File extensions picked up from the corpus directory
    """

    chunking: ChunkingConfig = Field(default_factory=_ingestion_chunking)
    max_concurrency: int = Field(default=4, ge=1)
    embed_timeout: float = Field(default=30.0, gt=0)
    supported_extensions: tuple[str, ...] = (".txt", ".md", ".pdf", ".docx", ".html")


class QueryOptions(BaseModel):
    """Per-query retrieval and generation options.

    Attributes:
        max_results: Number of chunks requested from the index (top-K)
        similarity_threshold: Minimum cosine similarity for a chunk to be cited
        temperature: Sampling temperature passed to the generator
        max_tokens: Maximum response length passed to the generator
        include_history: Replay the session history into the prompt
    """

    max_results: int = Field(default=5, ge=1, le=50)
    similarity_threshold: float = Field(default=0.7, ge=-1.0, le=1.0)
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    max_tokens: int = Field(default=1000, ge=1)
    include_history: bool = True
