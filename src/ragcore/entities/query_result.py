"""Result types returned by the query pipeline."""

from typing import Any

from pydantic import BaseModel, Field


class SourceCitation(BaseModel):
    """A cited chunk with its similarity and a short preview."""

    filename: str
    chunk_index: int = 0
    similarity: float
    content: str


class QueryResult(BaseModel):
    """Answer plus citations and pipeline metadata.

    ``metadata`` carries ``query``, ``timestamp``, ``session_id``,
    ``retrieved_docs``, ``rag_enabled``, ``mode``, ``backend`` and
    ``generation`` ("llm" or "rule_based").
    """

    response: str
    sources: list[SourceCitation] = Field(default_factory=list)
    metadata: dict[str, Any] = Field(default_factory=dict)
