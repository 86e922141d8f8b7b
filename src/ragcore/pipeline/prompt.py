"""Prompt assembly: grounded system prompt, retrieved context and history."""

from ragcore.entities.conversation import ConversationTurn
from ragcore.entities.search_result import RetrievalResult

NO_CONTEXT_MESSAGE = "No relevant information found in the knowledge base."
CONTEXT_SEPARATOR = "\n\n---\n\n"
DEFAULT_ORGANIZATION = "Masters Union"

SYSTEM_PROMPT_TEMPLATE = """You are a helpful AI assistant for {organization}. You have access to the {organization} knowledge base to answer questions about the institution, programs, policies, and student life.

Instructions:
- Answer questions based ONLY on the provided context from the knowledge base
- If the context doesn't contain enough information to answer the question, say so clearly
- Be helpful, accurate, and concise
- Use markdown formatting when appropriate
- Cite sources when referencing specific information
- If asked about something not related to {organization}, politely redirect to {organization} topics

Context from knowledge base:
{context}"""


def build_context(results: list[RetrievalResult]) -> str:
    """Label each retrieved chunk with its source file, in rank order."""
    if not results:
        return NO_CONTEXT_MESSAGE

    parts = [
        f"[Source {i}: {result.filename}]\n{result.text}"
        for i, result in enumerate(results, start=1)
    ]
    return CONTEXT_SEPARATOR.join(parts)


def build_system_prompt(context: str, organization: str = DEFAULT_ORGANIZATION) -> str:
    return SYSTEM_PROMPT_TEMPLATE.format(organization=organization, context=context)


def build_messages(
    query: str,
    context: str,
    history: list[ConversationTurn] | None = None,
    organization: str = DEFAULT_ORGANIZATION,
) -> list[dict[str, str]]:
    """System prompt, then history oldest-first, then the new query."""
    messages = [{"role": "system", "content": build_system_prompt(context, organization)}]
    for turn in history or []:
        messages.extend(turn.to_messages())
    messages.append({"role": "user", "content": query})
    return messages
