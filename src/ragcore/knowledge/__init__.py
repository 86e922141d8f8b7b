"""Static knowledge base and the rule-based responder."""

from .defaults import DEFAULT_KNOWLEDGE_BASE
from .responder import RuleBasedResponder
from .static import STATIC_SOURCE_NAME, StaticKnowledgeBase

__all__ = [
    "StaticKnowledgeBase",
    "RuleBasedResponder",
    "DEFAULT_KNOWLEDGE_BASE",
    "STATIC_SOURCE_NAME",
]
