"""DOCX extractor."""

from pathlib import Path

from loguru import logger

try:
    from docx import Document as DocxDocument

    DOCX_AVAILABLE = True
except ImportError:
    DOCX_AVAILABLE = False
    logger.warning("python-docx not installed. DOCX extraction will not be available.")

from ragcore.errors import ExtractionError
from ..base import BaseExtractor


class DocxExtractor(BaseExtractor):
    """Extracts paragraphs (and optionally tables) with python-docx.

    Attributes:
        include_tables: Append tables as pipe-separated rows
    """

    def __init__(self, include_tables: bool = True):
        if not DOCX_AVAILABLE:
            raise ImportError(
                "python-docx is required for DOCX extraction. Install it with: pip install python-docx"
            )
        self.include_tables = include_tables

    def extract(self, path: str | Path) -> str:
        path = self._check_file(path)

        try:
            doc = DocxDocument(str(path))

            # Paragraphs become paragraph breaks so the segmenter can snap to them
            parts = [p.text.strip() for p in doc.paragraphs if p.text.strip()]
            paragraph_count = len(parts)

            if self.include_tables:
                for table in doc.tables:
                    rows = [" | ".join(cell.text.strip() for cell in row.cells) for row in table.rows]
                    if rows:
                        parts.append("\n".join(rows))
        except Exception as e:
            logger.error(f"Failed to parse DOCX {path}: {e}")
            raise ExtractionError(
                f"Invalid DOCX file: {e}",
                filename=path.name,
                file_type=".docx",
                original_error=e,
            ) from e

        content = "\n\n".join(parts)
        if not content.strip():
            logger.warning(f"No text content extracted from {path}")

        logger.info(f"Parsed DOCX {path.name}: {paragraph_count} paragraphs, {len(content)} characters")
        return content
