"""Text extraction from corpus files.

Each extractor returns the raw text of one file; the ingestion
orchestrator handles cleaning, segmentation and failure placeholders.
"""

from .base import BaseExtractor
from .factory import ExtractorFactory
from .providers.docx import DocxExtractor
from .providers.html import HtmlExtractor
from .providers.pdf import PdfExtractor
from .providers.text import TextExtractor

__all__ = [
    "BaseExtractor",
    "ExtractorFactory",
    "TextExtractor",
    "PdfExtractor",
    "DocxExtractor",
    "HtmlExtractor",
]
