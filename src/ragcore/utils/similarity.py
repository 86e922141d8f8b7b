"""Vector similarity calculation and ranking."""

import math
from dataclasses import dataclass
from typing import Any, Generic, Iterable, Sequence, TypeVar

T = TypeVar("T")


def cosine_similarity(vec1: Sequence[float], vec2: Sequence[float]) -> float:
    """Calculate cosine similarity between two vectors.

    Args:
        vec1: First vector
        vec2: Second vector

    Returns:
        ``dot(a, b) / (|a| * |b|)`` in [-1, 1], or 0.0 when either norm is zero

    Raises:
        ValueError: If vectors have different dimensions
    """
    if len(vec1) != len(vec2):
        raise ValueError(
            f"Vector dimension mismatch: {len(vec1)} != {len(vec2)}"
        )

    dot_product = 0.0
    norm1 = 0.0
    norm2 = 0.0
    for a, b in zip(vec1, vec2):
        dot_product += a * b
        norm1 += a * a
        norm2 += b * b

    if norm1 == 0.0 or norm2 == 0.0:
        return 0.0

    similarity = dot_product / (math.sqrt(norm1) * math.sqrt(norm2))
    # Clamp to [-1, 1] to handle floating point errors
    return max(-1.0, min(1.0, similarity))


def cosine_distance(vec1: Sequence[float], vec2: Sequence[float]) -> float:
    """Cosine distance in [0, 2] (``1 - cosine_similarity``)."""
    return 1.0 - cosine_similarity(vec1, vec2)


@dataclass(frozen=True)
class CorpusEntry(Generic[T]):
    """One rankable item: an id, its vector and an arbitrary payload."""

    id: str
    vector: Sequence[float]
    payload: T


@dataclass(frozen=True)
class RankedItem(Generic[T]):
    payload: T
    similarity: float


def rank(
    query_vector: Sequence[float],
    corpus: Iterable[CorpusEntry[Any]],
    top_k: int = 5,
    threshold: float = -1.0,
) -> list[RankedItem[Any]]:
    """Rank corpus entries against a query vector.

    Entries below ``threshold`` are dropped, the rest are sorted by
    descending similarity (stable, so ties keep corpus order) and
    truncated to ``top_k``. An empty corpus yields an empty list.

    Args:
        query_vector: Query embedding
        corpus: Entries to score
        top_k: Maximum number of items returned
        threshold: Minimum similarity (inclusive)

    Returns:
        Ranked items, highest similarity first
    """
    if top_k <= 0:
        return []

    scored = []
    for entry in corpus:
        similarity = cosine_similarity(query_vector, entry.vector)
        if similarity >= threshold:
            scored.append(RankedItem(payload=entry.payload, similarity=similarity))

    # list.sort is stable
    scored.sort(key=lambda item: item.similarity, reverse=True)
    return scored[:top_k]
