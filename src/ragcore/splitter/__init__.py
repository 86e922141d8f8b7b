"""Text segmentation: whitespace cleaning plus the sliding-window segmenter."""

from .cleaner import clean_text
from .text_segmenter import PARAGRAPH_BREAK, SENTENCE_TERMINATORS, TextSegmenter, segment

__all__ = [
    "TextSegmenter",
    "segment",
    "clean_text",
    "PARAGRAPH_BREAK",
    "SENTENCE_TERMINATORS",
]
