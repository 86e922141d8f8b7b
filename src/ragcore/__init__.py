"""
ragcore - retrieval-augmented generation core.

Ingests a directory of documents into a vector index and answers
questions grounded in the retrieved chunks, degrading to an in-process
index or a static knowledge base when backends are unavailable.
"""

from .api import ChatReply, handle_chat_request
from .config import ChunkingConfig, IngestionConfig, QueryOptions, Settings, configure_logging, get_settings
from .entities import Chunk, ConversationTurn, QueryResult, RetrievalResult, SourceCitation, SourceDocument
from .errors import RAGCoreError
from .index import ChromaIndex, IndexFactory, InMemoryIndex
from .ingestion import IngestionOrchestrator, IngestionReport, IngestionState, describe_document
from .memory import SessionMemory
from .pipeline import PipelineState, RAGPipeline, build_pipeline, start_pipeline
from .splitter import TextSegmenter, segment
from .utils.similarity import cosine_similarity, rank

__version__ = "0.1.0"

__all__ = [
    "RAGPipeline",
    "PipelineState",
    "build_pipeline",
    "start_pipeline",
    "handle_chat_request",
    "ChatReply",
    "Settings",
    "get_settings",
    "configure_logging",
    "ChunkingConfig",
    "IngestionConfig",
    "QueryOptions",
    "SourceDocument",
    "Chunk",
    "RetrievalResult",
    "ConversationTurn",
    "QueryResult",
    "SourceCitation",
    "RAGCoreError",
    "ChromaIndex",
    "InMemoryIndex",
    "IndexFactory",
    "IngestionOrchestrator",
    "IngestionReport",
    "IngestionState",
    "describe_document",
    "SessionMemory",
    "TextSegmenter",
    "segment",
    "cosine_similarity",
    "rank",
]
