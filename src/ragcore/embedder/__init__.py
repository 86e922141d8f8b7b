"""Embedding providers."""

from .base import BaseEmbedder
from .factory import EmbedderFactory
from .providers.hash import HashEmbedder
from .providers.openai import OpenAIEmbedder

__all__ = [
    "BaseEmbedder",
    "EmbedderFactory",
    "HashEmbedder",
    "OpenAIEmbedder",
]
