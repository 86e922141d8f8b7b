"""Extractor factory: picks an extractor by file extension."""

from pathlib import Path
from typing import Any

from loguru import logger

from .base import BaseExtractor
from .providers.docx import DocxExtractor
from .providers.html import HtmlExtractor
from .providers.pdf import PdfExtractor
from .providers.text import TextExtractor


class ExtractorFactory:
    """Extractor factory

    Maps lower-case file extensions to extractor classes.

    Supported formats:
    - .txt / .md: plain text (chardet encoding detection)
    - .pdf: pypdf
    - .docx: python-docx
    - .html / .htm: beautifulsoup4
    """

    _registry: dict[str, type[BaseExtractor]] = {
        ".txt": TextExtractor,
        ".md": TextExtractor,
        ".pdf": PdfExtractor,
        ".docx": DocxExtractor,
        ".html": HtmlExtractor,
        ".htm": HtmlExtractor,
    }

    @classmethod
    def create(cls, extension: str, **params: Any) -> BaseExtractor:
        """Create an extractor for a file extension.

        Args:
            extension: File extension, with or without the leading dot
            **params: Initialization parameters for the extractor

        Returns:
            Extractor instance

        Raises:
            ValueError: If no extractor is registered for the extension
        """
        key = extension.lower()
        if not key.startswith("."):
            key = f".{key}"

        if key not in cls._registry:
            available = ", ".join(cls._registry.keys())
            raise ValueError(
                f"Unsupported file type: '{extension}'. "
                f"Available types: {available}"
            )

        extractor_class = cls._registry[key]
        logger.debug(f"Creating {extractor_class.__name__} with params: {params}")
        return extractor_class(**params)

    @classmethod
    def for_path(cls, path: str | Path, **params: Any) -> BaseExtractor:
        """Create the extractor matching a file's extension."""
        return cls.create(Path(path).suffix, **params)

    @classmethod
    def supports(cls, path: str | Path) -> bool:
        return Path(path).suffix.lower() in cls._registry

    @classmethod
    def register(cls, extension: str, extractor_class: type[BaseExtractor]):
        """Register an extractor for a new extension.

        Raises:
            TypeError: If extractor_class is not a subclass of BaseExtractor
        """
        if not issubclass(extractor_class, BaseExtractor):
            raise TypeError(
                f"{extractor_class.__name__} must be a subclass of BaseExtractor"
            )

        key = extension.lower() if extension.startswith(".") else f".{extension.lower()}"
        cls._registry[key] = extractor_class
        logger.info(f"Registered extractor for '{key}': {extractor_class.__name__}")

    @classmethod
    def list_types(cls) -> list[str]:
        return list(cls._registry.keys())
