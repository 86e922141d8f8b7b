"""Extractor base class definition."""

from abc import ABC, abstractmethod
from pathlib import Path

from ragcore.errors import ExtractionError


class BaseExtractor(ABC):
    """Abstract base class for text extractors.

    An extractor turns one corpus file into raw text. Format fidelity is
    not a goal: layout, images and styling are discarded.
    """

    @abstractmethod
    def extract(self, path: str | Path) -> str:
        """Extract the text of a file.

        Args:
            path: Path to the source file

        Returns:
            The extracted text (may be empty)

        Raises:
            ExtractionError: If the file is missing or cannot be decoded
        """

    def _check_file(self, path: str | Path) -> Path:
        path = Path(path)
        if not path.is_file():
            raise ExtractionError(
                f"File not found: {path}",
                filename=path.name,
                file_type=path.suffix.lower(),
            )
        return path
