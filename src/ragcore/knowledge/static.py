"""Static knowledge base used when retrieval is unavailable."""

import json
import re
from pathlib import Path

from loguru import logger

from ragcore.errors import ConfigError
from .defaults import DEFAULT_KNOWLEDGE_BASE, SECTION_KEYWORDS

STATIC_SOURCE_NAME = "Static Knowledge Base"

_WORD_RE = re.compile(r"[a-z0-9]+")


def _words(text: str) -> set[str]:
    return set(_WORD_RE.findall(text.lower()))


class StaticKnowledgeBase:
    """A two-level ``{category: {key: text}}`` knowledge base.

    Attributes:
        sections: Category name to ``{key: text}`` mapping
        keywords: Extra trigger words per category
    """

    def __init__(
        self,
        sections: dict[str, dict[str, str]] | None = None,
        keywords: dict[str, tuple[str, ...]] | None = None,
    ):
        self.sections = sections if sections is not None else DEFAULT_KNOWLEDGE_BASE
        self.keywords = keywords if keywords is not None else SECTION_KEYWORDS

    @classmethod
    def from_json(cls, path: str | Path) -> "StaticKnowledgeBase":
        """Load a knowledge base from a JSON object of objects.

        Raises:
            ConfigError: If the file is missing or not a ``{str: {str: str}}`` object
        """
        path = Path(path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise ConfigError(
                f"Cannot load knowledge base from {path}",
                details={"path": str(path)},
                original_error=e,
            ) from e

        if not isinstance(data, dict) or not all(isinstance(v, dict) for v in data.values()):
            raise ConfigError(
                "Knowledge base JSON must map categories to objects",
                details={"path": str(path)},
            )

        sections = {
            str(category): {str(k): str(v) for k, v in entries.items()}
            for category, entries in data.items()
        }
        logger.info(f"Loaded static knowledge base from {path} ({len(sections)} sections)")
        # Custom content gets no default trigger words beyond its own names
        return cls(sections, keywords={})

    def format(self, categories: list[str] | None = None) -> str:
        """Render sections as ``## CATEGORY`` blocks of ``key: value`` lines."""
        names = categories if categories is not None else list(self.sections)
        blocks = []
        for category in names:
            entries = self.sections.get(category)
            if not entries:
                continue
            lines = [f"## {category.upper()}"]
            lines.extend(f"{key}: {value}" for key, value in entries.items())
            blocks.append("\n".join(lines) + "\n")
        return "\n".join(blocks)

    def match(self, query: str, limit: int | None = None) -> list[str]:
        """Return category names ranked by keyword overlap with the query.

        A category scores one point per query word that is its name, one of
        its keys, or one of its trigger words. Categories scoring zero are
        omitted; ties keep definition order.
        """
        query_words = _words(query)
        if not query_words:
            return []

        scored = []
        for category, entries in self.sections.items():
            vocabulary = _words(category) | _words(" ".join(entries)) | set(self.keywords.get(category, ()))
            score = len(query_words & vocabulary)
            if score:
                scored.append((score, category))

        scored.sort(key=lambda item: item[0], reverse=True)
        ranked = [category for _, category in scored]
        return ranked[:limit] if limit is not None else ranked

    def __len__(self) -> int:
        return len(self.sections)
