"""PDF extractor."""

from pathlib import Path

from loguru import logger

try:
    from pypdf import PdfReader

    PDF_AVAILABLE = True
except ImportError:
    PDF_AVAILABLE = False
    logger.warning("pypdf not installed. PDF extraction will not be available.")

from ragcore.errors import ExtractionError
from ..base import BaseExtractor


class PdfExtractor(BaseExtractor):
    """Extracts the text layer of every page with pypdf.

    Pages that fail individually are skipped; a file that cannot be opened
    at all raises ``ExtractionError``.
    """

    def __init__(self):
        if not PDF_AVAILABLE:
            raise ImportError(
                "pypdf is required for PDF extraction. Install it with: pip install pypdf"
            )

    def extract(self, path: str | Path) -> str:
        path = self._check_file(path)

        try:
            with open(path, "rb") as file:
                reader = PdfReader(file)
                total_pages = len(reader.pages)

                text_content = []
                for page_num in range(total_pages):
                    try:
                        text = reader.pages[page_num].extract_text()
                        if text and text.strip():
                            text_content.append(text)
                    except Exception as e:
                        logger.warning(f"Failed to extract page {page_num} of {path.name}: {e}")
        except Exception as e:
            logger.error(f"Failed to parse PDF {path}: {e}")
            raise ExtractionError(
                f"Invalid PDF file: {e}",
                filename=path.name,
                file_type=".pdf",
                original_error=e,
            ) from e

        content = "\n\n".join(text_content)
        if not content.strip():
            logger.warning(f"No text content extracted from {path}")

        logger.info(f"Parsed PDF {path.name}: {total_pages} pages, {len(content)} characters extracted")
        return content
