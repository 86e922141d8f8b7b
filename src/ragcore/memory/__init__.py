from .session import MAX_HISTORY, SessionMemory

__all__ = ["SessionMemory", "MAX_HISTORY"]
