"""Per-session conversation memory."""

import threading
from collections import deque

from loguru import logger

from ragcore.entities.conversation import ConversationTurn

MAX_HISTORY = 10


class SessionMemory:
    """Bounded conversation history per session id.

    Each session is a ring buffer of the last ``max_history`` turns, oldest
    first. Sessions are created on first append and live until cleared or
    the process exits. Access is guarded by a lock so that concurrent
    requests on the same session never interleave a read and a trim.

    Attributes:
        max_history: Turns kept per session
    """

    def __init__(self, max_history: int = MAX_HISTORY):
        if max_history < 1:
            raise ValueError("max_history must be at least 1")
        self.max_history = max_history
        self._sessions: dict[str, deque[ConversationTurn]] = {}
        self._lock = threading.Lock()

    def get_history(self, session_id: str) -> list[ConversationTurn]:
        """Return a copy of the session's turns, oldest first (empty if unknown)."""
        with self._lock:
            history = self._sessions.get(session_id)
            return list(history) if history else []

    def append(self, session_id: str, query: str, response: str) -> ConversationTurn:
        """Record a turn, dropping the oldest one beyond ``max_history``."""
        turn = ConversationTurn(query=query, response=response)
        with self._lock:
            history = self._sessions.get(session_id)
            if history is None:
                history = deque(maxlen=self.max_history)
                self._sessions[session_id] = history
                logger.debug(f"Created session {session_id}")
            history.append(turn)
        return turn

    def clear(self, session_id: str) -> bool:
        """Forget a session. Returns False if it did not exist."""
        with self._lock:
            existed = self._sessions.pop(session_id, None) is not None
        if existed:
            logger.info(f"Cleared conversation history for session {session_id}")
        return existed

    def active_sessions(self) -> int:
        with self._lock:
            return len(self._sessions)

    def total_turns(self) -> int:
        with self._lock:
            return sum(len(history) for history in self._sessions.values())
