"""
Request facade for an HTTP layer.

``handle_chat_request`` turns a chat message into a status code and a JSON
body without depending on any web framework:

- 400 ``{"error": "Message is required"}`` for an empty or blank message
- 503 ``{"error": ..., "fallback_response": APOLOGY}`` before initialisation
  when lazy initialisation is off
- 500 ``{"error": ..., "fallback_response": APOLOGY}`` for anything else
- 200 with the ``QueryResult`` fields on success
"""

from typing import Any

from loguru import logger
from pydantic import BaseModel

from ragcore.config.models import QueryOptions
from ragcore.errors import InvalidQueryError, NotInitializedError
from ragcore.pipeline.query import RAGPipeline

APOLOGY = (
    "I'm sorry, but I'm having trouble processing your request right now. "
    "Please try again later."
)


class ChatReply(BaseModel):
    status_code: int
    body: dict[str, Any]


async def handle_chat_request(
    pipeline: RAGPipeline,
    message: str | None,
    session_id: str | None = None,
    options: QueryOptions | None = None,
) -> ChatReply:
    if not message or not message.strip():
        return ChatReply(status_code=400, body={"error": InvalidQueryError().message})

    try:
        result = await pipeline.process_query(message, session_id=session_id, options=options)
    except InvalidQueryError as e:
        return ChatReply(status_code=400, body={"error": e.message})
    except NotInitializedError as e:
        logger.warning(f"Chat request before initialization: {e}")
        return ChatReply(status_code=503, body={"error": e.message, "fallback_response": APOLOGY})
    except Exception as e:
        logger.exception(f"Error in chat request: {e}")
        return ChatReply(
            status_code=500,
            body={"error": "Failed to process message", "fallback_response": APOLOGY},
        )

    return ChatReply(status_code=200, body=result.model_dump())


def handle_clear_history(pipeline: RAGPipeline, session_id: str | None) -> ChatReply:
    if not session_id:
        return ChatReply(status_code=400, body={"error": "Session ID is required"})
    pipeline.clear_session_history(session_id)
    return ChatReply(status_code=200, body={"message": "Conversation history cleared successfully"})


def handle_stats(pipeline: RAGPipeline) -> ChatReply:
    try:
        stats = pipeline.get_stats()
    except Exception as e:
        logger.exception(f"Error getting stats: {e}")
        return ChatReply(status_code=500, body={"error": "Failed to get system statistics"})
    return ChatReply(status_code=200, body={"stats": stats})
