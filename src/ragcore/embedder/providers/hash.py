"""Deterministic hashing embedder (no external API)."""

import hashlib
import math
import re

from loguru import logger

from ..base import BaseEmbedder

_TOKEN_RE = re.compile(r"\w+")


class HashEmbedder(BaseEmbedder):
    """Bag-of-words embedder using the hashing trick.

    Each lower-cased token is hashed into one of ``dimension`` buckets with a
    hash-derived sign, and the vector is L2-normalised. Texts sharing words
    get a positive cosine similarity, so retrieval behaves sensibly offline.
    The output is stable across processes (md5, not ``hash()``).

    Attributes:
        dimension: Embedding vector dimension
    """

    def __init__(self, dimension: int = 256):
        if dimension <= 0:
            raise ValueError("dimension must be positive")
        self._dimension = dimension
        logger.info(f"Using HashEmbedder (dimension={dimension}); not a semantic model")

    def embed(self, texts: list[str]) -> list[list[float]]:
        logger.debug(f"Generating {len(texts)} hash embeddings")
        return [self._embed_one(text) for text in texts]

    def _embed_one(self, text: str) -> list[float]:
        vec = [0.0] * self._dimension
        for token in _TOKEN_RE.findall(text.lower()):
            digest = hashlib.md5(token.encode("utf-8")).digest()
            bucket = int.from_bytes(digest[:4], "little") % self._dimension
            vec[bucket] += 1.0 if digest[4] & 1 else -1.0

        magnitude = math.sqrt(sum(x * x for x in vec))
        if magnitude > 0:
            vec = [x / magnitude for x in vec]
        return vec

    @property
    def dimension(self) -> int:
        """Return the embedding dimension."""
        return self._dimension
