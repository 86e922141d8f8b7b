"""Conversation turns stored in session memory."""

from datetime import datetime, timezone

from pydantic import BaseModel, Field


class ConversationTurn(BaseModel):
    """One (query, response) exchange of a session."""

    query: str
    response: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    model_config = {
        "frozen": True,
    }

    def to_messages(self) -> list[dict[str, str]]:
        """Render as OpenAI-style user/assistant messages."""
        return [
            {"role": "user", "content": self.query},
            {"role": "assistant", "content": self.response},
        ]
