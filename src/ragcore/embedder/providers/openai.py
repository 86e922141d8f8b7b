"""
OpenAI-compatible embedder over httpx.

Works with any API that follows the OpenAI ``/embeddings`` format
(OpenAI, Azure OpenAI, LocalAI, Ollama's compatibility layer).
HTTP failures are classified into the ``ProviderError`` hierarchy, and the
retryable ones (429, 503, 5xx, timeouts, dropped connections) are retried
with exponential backoff before surfacing to the caller.
"""

import httpx
from loguru import logger

from ragcore.errors import ProviderError, ProviderTimeoutError, classify_http_error, wrap_exception
from ragcore.utils.retry import RetryConfig, retry_with_backoff
from ..base import BaseEmbedder


class OpenAIEmbedder(BaseEmbedder):
    """
    OpenAI-compatible Embedder implementation.

    Attributes:
        base_url: The API base URL (e.g., "https://api.openai.com/v1")
        api_key: API authentication key
        model: Model identifier (e.g., "text-embedding-ada-002")
        batch_size: Maximum texts per API call
        timeout: Per-request timeout in seconds
    """

    def __init__(
        self,
        api_key: str | None,
        base_url: str = "https://api.openai.com/v1",
        model: str = "text-embedding-ada-002",
        batch_size: int = 100,
        timeout: float = 30.0,
        max_retries: int = 3,
        retry_base_delay: float = 1.0,
    ):
        """
        Initialize the OpenAI-compatible embedder.

        Args:
            api_key: Authentication key for the API
            base_url: API endpoint base URL (trailing slash will be stripped)
            model: Model name to use for embeddings
            batch_size: Maximum texts per API call (default: 100)
            timeout: Per-request timeout in seconds (default: 30)
            max_retries: Attempts per batch, including the first
            retry_base_delay: Initial backoff delay in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.model = model
        self.batch_size = batch_size
        self.timeout = timeout
        self.client = httpx.Client(timeout=timeout)
        self._dimension = 1536  # ada-002 / text-embedding-3-small, updated on first call

        retry_config = RetryConfig(max_attempts=max_retries, base_delay=retry_base_delay)
        self._embed_batch = retry_with_backoff(config=retry_config)(self._embed_single_batch)

    def embed(self, texts: list[str]) -> list[list[float]]:
        """
        Generate embeddings for a list of texts, batching large inputs.

        Raises:
            ProviderError: If the API call fails after retries
        """
        if not texts:
            return []

        all_embeddings = []
        total_batches = (len(texts) + self.batch_size - 1) // self.batch_size
        if total_batches > 1:
            logger.info(
                f"Processing {len(texts)} texts in {total_batches} batches "
                f"(batch_size={self.batch_size})"
            )

        for i in range(0, len(texts), self.batch_size):
            batch = texts[i:i + self.batch_size]
            all_embeddings.extend(self._embed_batch(batch))

        return all_embeddings

    def _embed_single_batch(self, texts: list[str]) -> list[list[float]]:
        url = f"{self.base_url}/embeddings"
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json"
        }
        payload = {
            "input": texts,
            "model": self.model
        }

        try:
            resp = self.client.post(url, headers=headers, json=payload)
        except httpx.TimeoutException as e:
            raise ProviderTimeoutError(
                f"Embedding request timed out after {self.timeout}s",
                timeout=self.timeout,
                original_error=e,
            ) from e
        except httpx.HTTPError as e:
            raise wrap_exception(e, context="embedding request") from e

        if resp.status_code >= 400:
            raise classify_http_error(resp.status_code, resp.text, dict(resp.headers))

        try:
            data = resp.json()
            # Sort by index to ensure correct order
            results = sorted(data.get("data", []), key=lambda x: x.get("index", 0))
            vector_list = [item["embedding"] for item in results]
        except (ValueError, KeyError, TypeError) as e:
            raise ProviderError(
                "Malformed embedding response",
                details={"model": self.model},
                original_error=e,
            ) from e

        if len(vector_list) != len(texts):
            raise ProviderError(
                f"Expected {len(texts)} embeddings, got {len(vector_list)}",
                details={"model": self.model},
            )

        if vector_list:
            self._dimension = len(vector_list[0])

        return vector_list

    @property
    def dimension(self) -> int:
        """Return the embedding dimension."""
        return self._dimension

    def close(self):
        self.client.close()
