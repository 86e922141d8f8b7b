"""OpenAI-compatible chat completion client over httpx."""

import httpx
from loguru import logger

from ragcore.errors import ProviderError, ProviderTimeoutError, classify_http_error, wrap_exception
from ragcore.utils.retry import RetryConfig, retry_with_backoff
from ..base import BaseLLM


class OpenAIChatLLM(BaseLLM):
    """
    Chat LLM for any API following the OpenAI ``/chat/completions`` format.

    Attributes:
        base_url: The API base URL (e.g., "https://api.openai.com/v1")
        api_key: API authentication key
        model: Model identifier (e.g., "gpt-3.5-turbo")
        timeout: Per-request timeout in seconds
    """

    def __init__(
        self,
        api_key: str | None,
        base_url: str = "https://api.openai.com/v1",
        model: str = "gpt-3.5-turbo",
        timeout: float = 60.0,
        max_retries: int = 2,
        retry_base_delay: float = 1.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self.client = httpx.Client(timeout=timeout)

        retry_config = RetryConfig(max_attempts=max_retries, base_delay=retry_base_delay)
        self._complete = retry_with_backoff(config=retry_config)(self._chat_once)

    def chat(self, messages: list[dict[str, str]], temperature: float = 0.7, max_tokens: int = 1000) -> str:
        payload = {
            "model": self.model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
        }
        return self._complete(payload)

    def _chat_once(self, payload: dict) -> str:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json"
        }

        try:
            resp = self.client.post(f"{self.base_url}/chat/completions", json=payload, headers=headers)
        except httpx.TimeoutException as e:
            raise ProviderTimeoutError(
                f"Chat completion timed out after {self.timeout}s",
                timeout=self.timeout,
                original_error=e,
            ) from e
        except httpx.HTTPError as e:
            raise wrap_exception(e, context="chat completion") from e

        if resp.status_code >= 400:
            raise classify_http_error(resp.status_code, resp.text, dict(resp.headers))

        try:
            data = resp.json()
            content = data["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            logger.error(f"Malformed chat completion response: {e}")
            raise ProviderError(
                "Malformed chat completion response",
                details={"model": self.model},
                original_error=e,
            ) from e

        usage = data.get("usage") or {}
        if usage:
            logger.debug(f"Chat completion used {usage.get('total_tokens', '?')} tokens")

        return content or ""

    def close(self):
        self.client.close()
