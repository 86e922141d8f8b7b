"""Source documents and the chunks derived from them."""

from datetime import datetime, timezone
from typing import Any
from uuid import NAMESPACE_URL, uuid5

from pydantic import BaseModel, Field


def document_id_for(filename: str) -> str:
    """Stable document id for a corpus file name.

    Re-ingesting the same corpus yields the same ids, so chunk upserts
    overwrite instead of duplicating.
    """
    return str(uuid5(NAMESPACE_URL, f"ragcore:{filename}"))


def chunk_id_for(document_id: str, chunk_index: int) -> str:
    return f"{document_id}_chunk_{chunk_index}"


class SourceDocument(BaseModel):
    """
    A document read from the corpus directory.

    Owned by the ingestion orchestrator until it is chunked, then discarded.
    """

    id: str
    filename: str
    text: str
    metadata: dict[str, Any] = Field(default_factory=dict)

    model_config = {
        "frozen": True,
    }

    @classmethod
    def from_text(cls, filename: str, text: str, file_type: str) -> "SourceDocument":
        """Build a document with the standard ingestion metadata."""
        return cls(
            id=document_id_for(filename),
            filename=filename,
            text=text,
            metadata={
                "filename": filename,
                "file_type": file_type,
                "processed_at": datetime.now(timezone.utc).isoformat(),
                "word_count": len(text.split()),
                "char_count": len(text),
            },
        )


class Chunk(BaseModel):
    """Represents a bounded span of a document's text, the unit of retrieval.

    Attributes:
        id: ``{document_id}_chunk_{chunk_index}``
        text: The chunk text
        embedding: Vector embedding (populated during ingestion)
        metadata: filename, chunk_index, total_chunks, parent_document_id and
            the parent document's metadata
    """

    id: str
    text: str = Field(..., min_length=1)
    embedding: list[float] | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    model_config = {
        "frozen": False,
    }

    @property
    def filename(self) -> str:
        return self.metadata.get("filename", "unknown")

    @property
    def chunk_index(self) -> int:
        return int(self.metadata.get("chunk_index", 0))
