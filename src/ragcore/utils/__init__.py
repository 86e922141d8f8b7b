"""Utility functions for ragcore."""

from .performance import timer
from .retry import RetryConfig, retry_with_backoff
from .similarity import CorpusEntry, RankedItem, cosine_distance, cosine_similarity, rank

__all__ = [
    "cosine_similarity",
    "cosine_distance",
    "rank",
    "CorpusEntry",
    "RankedItem",
    "RetryConfig",
    "retry_with_backoff",
    "timer",
]
