"""RetrievalResult entity representing one index hit."""

from typing import Any

from pydantic import BaseModel, Field


class RetrievalResult(BaseModel):
    """Represents a search result with a cosine distance.

    Attributes:
        chunk_id: Id of the retrieved chunk
        text: Chunk text
        metadata: Chunk metadata (filename, chunk_index, ...)
        distance: Cosine distance in [0, 2]; similarity = 1 - distance
    """

    chunk_id: str
    text: str
    metadata: dict[str, Any] = Field(default_factory=dict)
    distance: float = Field(..., ge=0.0, le=2.0)

    model_config = {
        "frozen": True,  # Results are immutable
    }

    @property
    def similarity(self) -> float:
        return 1.0 - self.distance

    @property
    def filename(self) -> str:
        return self.metadata.get("filename", "unknown")

    def __lt__(self, other: "RetrievalResult") -> bool:
        """Enable sorting by distance (ascending)."""
        return self.distance < other.distance
