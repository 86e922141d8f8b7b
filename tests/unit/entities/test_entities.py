"""Tests for the core entities."""

import pytest
from pydantic import ValidationError

from ragcore.entities import (
    Chunk,
    ConversationTurn,
    RetrievalResult,
    SourceDocument,
    chunk_id_for,
    document_id_for,
)


class TestSourceDocument:

    def test_from_text_metadata(self):
        doc = SourceDocument.from_text("guide.md", "one two three", ".md")
        assert doc.filename == "guide.md"
        assert doc.metadata["file_type"] == ".md"
        assert doc.metadata["word_count"] == 3
        assert doc.metadata["char_count"] == 13
        assert "processed_at" in doc.metadata

    def test_id_is_stable_per_filename(self):
        assert document_id_for("a.txt") == document_id_for("a.txt")
        assert document_id_for("a.txt") != document_id_for("b.txt")
        assert SourceDocument.from_text("a.txt", "x", ".txt").id == document_id_for("a.txt")

    def test_frozen(self):
        doc = SourceDocument.from_text("a.txt", "x", ".txt")
        with pytest.raises(ValidationError):
            doc.text = "changed"


class TestChunk:

    def test_chunk_id_format(self):
        assert chunk_id_for("doc", 3) == "doc_chunk_3"

    def test_empty_text_rejected(self):
        with pytest.raises(ValidationError):
            Chunk(id="c", text="")

    def test_properties(self):
        chunk = Chunk(id="c", text="hi", metadata={"filename": "f.md", "chunk_index": 2})
        assert chunk.filename == "f.md"
        assert chunk.chunk_index == 2


class TestRetrievalResult:

    def test_similarity_from_distance(self):
        result = RetrievalResult(chunk_id="c", text="t", distance=0.18)
        assert result.similarity == pytest.approx(0.82)

    def test_distance_bounds(self):
        with pytest.raises(ValidationError):
            RetrievalResult(chunk_id="c", text="t", distance=2.5)

    def test_sorts_by_distance(self):
        far = RetrievalResult(chunk_id="far", text="t", distance=0.9)
        near = RetrievalResult(chunk_id="near", text="t", distance=0.1)
        assert [r.chunk_id for r in sorted([far, near])] == ["near", "far"]


class TestConversationTurn:

    def test_to_messages(self):
        turn = ConversationTurn(query="Q", response="A")
        assert turn.to_messages() == [
            {"role": "user", "content": "Q"},
            {"role": "assistant", "content": "A"},
        ]
