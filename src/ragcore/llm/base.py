"""Base LLM interface."""

from abc import ABC, abstractmethod


class BaseLLM(ABC):
    """Abstract base class for chat-style generation.

    The pipeline builds the full message list (system prompt, history,
    current query); the LLM only turns it into an answer.
    """

    @abstractmethod
    def chat(self, messages: list[dict[str, str]], temperature: float = 0.7, max_tokens: int = 1000) -> str:
        """Generate a reply to a list of chat messages.

        Args:
            messages: OpenAI-style ``{"role", "content"}`` dicts
            temperature: Sampling temperature
            max_tokens: Maximum response length

        Returns:
            The assistant reply text

        Raises:
            ProviderError: If the provider call fails (including auth errors)
            ProviderTimeoutError: If the call exceeds its time budget
        """
        pass
