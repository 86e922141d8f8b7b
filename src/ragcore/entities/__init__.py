from .conversation import ConversationTurn
from .document import Chunk, SourceDocument, chunk_id_for, document_id_for
from .query_result import QueryResult, SourceCitation
from .search_result import RetrievalResult

__all__ = [
    "Chunk",
    "SourceDocument",
    "chunk_id_for",
    "document_id_for",
    "RetrievalResult",
    "ConversationTurn",
    "QueryResult",
    "SourceCitation",
]
