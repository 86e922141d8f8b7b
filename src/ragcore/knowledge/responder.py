"""Keyword responder used when the generation capability fails."""

from loguru import logger

from .static import StaticKnowledgeBase

GENERIC_ANSWER = (
    "I can help with questions about our programs, admissions, faculty, campus, "
    "placements and fees."
)


class RuleBasedResponder:
    """Answers from the static knowledge base without a language model.

    The best-matching section is returned verbatim; if nothing matches, a
    generic answer pointing at the contact section is given.
    """

    def __init__(self, knowledge_base: StaticKnowledgeBase):
        self.knowledge_base = knowledge_base

    def respond(self, query: str) -> str:
        matches = self.knowledge_base.match(query, limit=1)
        if matches:
            category = matches[0]
            logger.debug(f"Rule-based answer from section '{category}'")
            return " ".join(self.knowledge_base.sections[category].values())

        return self._generic_answer()

    def _generic_answer(self) -> str:
        contact = self.knowledge_base.sections.get("contact")
        if not contact:
            return GENERIC_ANSWER
        details = ", ".join(f"{key}: {value}" for key, value in contact.items())
        return f"{GENERIC_ANSWER} For anything else, please reach out ({details})."
