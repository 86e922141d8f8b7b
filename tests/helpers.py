"""Test doubles shared across the unit tests."""

from typing import Any

from docx import Document
from docx.oxml import OxmlElement
from docx.oxml.ns import qn

from ragcore.embedder.base import BaseEmbedder
from ragcore.entities.document import Chunk
from ragcore.entities.search_result import RetrievalResult
from ragcore.errors import IndexUnavailableError
from ragcore.index.base import BaseIndex
from ragcore.llm.base import BaseLLM


class StubLLM(BaseLLM):
    """Records every call and returns a fixed answer (or raises)."""

    def __init__(self, answer: str = "Grounded answer.", error: Exception | None = None):
        self.answer = answer
        self.error = error
        self.calls: list[dict[str, Any]] = []

    def chat(self, messages, temperature=0.7, max_tokens=1000):
        self.calls.append({"messages": messages, "temperature": temperature, "max_tokens": max_tokens})
        if self.error is not None:
            raise self.error
        return self.answer


class FixedVectorEmbedder(BaseEmbedder):
    """Maps known texts to fixed vectors; unknown texts get the default vector."""

    def __init__(self, vectors: dict[str, list[float]] | None = None, default: list[float] | None = None):
        self.vectors = vectors or {}
        self.default = default or [1.0, 0.0, 0.0]
        self.calls: list[str] = []

    def embed(self, texts):
        self.calls.extend(texts)
        return [self.vectors.get(text, self.default) for text in texts]

    @property
    def dimension(self):
        return len(self.default)


class ScriptedIndex(BaseIndex):
    """Index returning pre-set results; ``available=False`` makes init fail."""

    backend = "scripted"

    def __init__(self, embedder, results: list[RetrievalResult] | None = None, available: bool = True):
        super().__init__(embedder)
        self.results = results or []
        self.available = available
        self.search_error: Exception | None = None
        self.added: list[Chunk] = []
        self._ready = False

    def init(self):
        self._ready = self.available
        return self._ready

    @property
    def ready(self):
        return self._ready

    def add(self, chunks):
        if not self._ready:
            raise IndexUnavailableError()
        self.added.extend(chunks)
        return [c.id for c in chunks]

    def search(self, query_text, n=5, where=None):
        if self.search_error is not None:
            raise self.search_error
        return self.results[:n]

    def delete(self, ids):
        pass

    def clear(self):
        self.added.clear()

    def count(self):
        return len(self.added)


def make_result(chunk_id: str, text: str, similarity: float, filename: str = "doc.md", chunk_index: int = 0):
    return RetrievalResult(
        chunk_id=chunk_id,
        text=text,
        metadata={"filename": filename, "chunk_index": chunk_index},
        distance=1.0 - similarity,
    )


def write_docx_with_bad_table(path):
    """Save a DOCX whose table cell carries a non-numeric ``w:gridSpan``.

    The file opens fine; python-docx only fails when the table rows are walked.
    """
    document = Document()
    document.add_paragraph("Brochure")
    table = document.add_table(rows=1, cols=1)
    grid_span = OxmlElement("w:gridSpan")
    grid_span.set(qn("w:val"), "x")
    table.rows[0].cells[0]._tc.get_or_add_tcPr().append(grid_span)
    document.save(str(path))
    return path
