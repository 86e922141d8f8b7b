"""Document and corpus statistics."""

import re
from collections import Counter

from loguru import logger
from pydantic import BaseModel, Field

from ragcore.entities.document import SourceDocument

_PARAGRAPH_SPLIT_RE = re.compile(r"\n\s*\n")
_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")
_PUNCTUATION_RE = re.compile(r"[^\w\s]")

KEYWORD_MIN_LENGTH = 4
TOP_KEYWORDS = 10


class DocumentDescription(BaseModel):
    word_count: int
    char_count: int
    paragraph_count: int
    sentence_count: int
    top_keywords: list[str] = Field(default_factory=list)


class DocumentSummary(BaseModel):
    name: str
    size: int
    word_count: int
    paragraph_count: int
    preview: str


class CorpusStatistics(BaseModel):
    count: int = 0
    total_size: int = 0
    average_size: int = 0
    documents: list[DocumentSummary] = Field(default_factory=list)


def describe_document(text: str) -> DocumentDescription:
    """Compute size counts and the most frequent keywords of a text.

    Keywords are lower-cased words of at least four characters after
    punctuation is stripped; ties keep first-occurrence order.
    """
    words = _PUNCTUATION_RE.sub("", text.lower()).split()
    keywords = Counter(word for word in words if len(word) >= KEYWORD_MIN_LENGTH)

    return DocumentDescription(
        word_count=len(text.split()),
        char_count=len(text),
        paragraph_count=len([p for p in _PARAGRAPH_SPLIT_RE.split(text) if p.strip()]),
        sentence_count=len(_SENTENCE_SPLIT_RE.findall(text)),
        top_keywords=[word for word, _ in keywords.most_common(TOP_KEYWORDS)],
    )


def corpus_statistics(documents: list[SourceDocument]) -> CorpusStatistics:
    stats = CorpusStatistics(count=len(documents))
    for doc in documents:
        size = len(doc.text)
        stats.total_size += size
        stats.documents.append(
            DocumentSummary(
                name=doc.filename,
                size=size,
                word_count=len(doc.text.split()),
                paragraph_count=len([p for p in _PARAGRAPH_SPLIT_RE.split(doc.text) if p.strip()]),
                preview=doc.text[:100] + ("..." if size > 100 else ""),
            )
        )
    if stats.count:
        stats.average_size = round(stats.total_size / stats.count)
    return stats


def log_corpus_statistics(documents: list[SourceDocument]) -> CorpusStatistics:
    stats = corpus_statistics(documents)
    logger.info(
        f"Corpus: {stats.count} documents, {stats.total_size} characters "
        f"(average {stats.average_size})"
    )
    for doc in stats.documents:
        logger.debug(f"  - {doc.name}: {doc.word_count} words, {doc.paragraph_count} paragraphs")
    return stats
