"""Plain text and Markdown extractor."""

from pathlib import Path

import chardet
from loguru import logger

from ragcore.errors import ExtractionError
from ..base import BaseExtractor


class TextExtractor(BaseExtractor):
    """Reads .txt / .md files, detecting the encoding with chardet.

    Attributes:
        encoding: Encoding used when detection fails
        auto_detect_encoding: Whether to run chardet on the raw bytes
    """

    def __init__(self, encoding: str = "utf-8", auto_detect_encoding: bool = True):
        self.encoding = encoding
        self.auto_detect_encoding = auto_detect_encoding

    def extract(self, path: str | Path) -> str:
        path = self._check_file(path)

        try:
            raw_data = path.read_bytes()
        except OSError as e:
            raise ExtractionError(
                f"Failed to read {path.name}",
                filename=path.name,
                file_type=path.suffix.lower(),
                original_error=e,
            ) from e

        encoding = self.encoding
        if self.auto_detect_encoding and raw_data:
            detected = chardet.detect(raw_data)
            if detected["encoding"]:
                encoding = detected["encoding"]
                logger.debug(f"Detected encoding: {encoding} (confidence: {detected['confidence']:.2f})")

        try:
            content = raw_data.decode(encoding, errors="ignore")
        except LookupError:
            logger.warning(f"Unknown encoding {encoding} for {path.name}, falling back to {self.encoding}")
            content = raw_data.decode(self.encoding, errors="ignore")

        logger.debug(f"Extracted {len(content)} characters from {path.name}")
        return content
