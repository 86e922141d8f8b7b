"""Index factory: the backend is chosen once, at construction time."""

from typing import Any

from loguru import logger

from ragcore.embedder.base import BaseEmbedder
from ragcore.errors import ConfigError
from .base import BaseIndex
from .chroma import ChromaIndex
from .in_memory import InMemoryIndex


class IndexFactory:
    """Factory for creating index instances based on backend name."""

    _registry: dict[str, type[BaseIndex]] = {
        "chroma": ChromaIndex,
        "memory": InMemoryIndex,
    }

    @classmethod
    def create(cls, backend: str, embedder: BaseEmbedder, **params: Any) -> BaseIndex:
        """Create an index.

        Args:
            backend: Backend identifier ("chroma" or "memory")
            embedder: Embedder shared by the index for query vectors
            **params: Backend-specific parameters (host, port, collection_name, ...)

        Raises:
            ConfigError: If the backend is not registered
        """
        if backend not in cls._registry:
            available = ", ".join(cls._registry.keys())
            raise ConfigError(
                f"Unknown index backend: '{backend}'. Available backends: {available}",
                details={"backend": backend},
            )

        index_class = cls._registry[backend]
        logger.debug(f"Creating {index_class.__name__} with params: {params}")
        return index_class(embedder, **params)

    @classmethod
    def register(cls, backend: str, index_class: type[BaseIndex]):
        if not issubclass(index_class, BaseIndex):
            raise TypeError(f"{index_class.__name__} must be a subclass of BaseIndex")
        cls._registry[backend] = index_class
        logger.info(f"Registered index backend '{backend}': {index_class.__name__}")

    @classmethod
    def list_types(cls) -> list[str]:
        return list(cls._registry.keys())
