"""Corpus ingestion."""

from .orchestrator import (
    IngestionOrchestrator,
    IngestionReport,
    IngestionState,
    IngestionStatus,
    build_document,
    placeholder_text,
)
from .statistics import CorpusStatistics, DocumentDescription, corpus_statistics, describe_document

__all__ = [
    "IngestionOrchestrator",
    "IngestionReport",
    "IngestionState",
    "IngestionStatus",
    "placeholder_text",
    "build_document",
    "describe_document",
    "corpus_statistics",
    "DocumentDescription",
    "CorpusStatistics",
]
