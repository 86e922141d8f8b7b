"""
Retry Utility with Exponential Backoff.

Used by the HTTP provider clients to absorb transient failures
(rate limits, 5xx, dropped connections) before they surface as a
``ProviderError`` and push the pipeline onto its fallback path.

Usage:
------
    from ragcore.utils.retry import retry_with_backoff

    @retry_with_backoff(max_attempts=3, base_delay=1.0)
    def call_provider(payload):
        return client.post(url, json=payload)
"""

import random
import time
from dataclasses import dataclass
from functools import wraps
from typing import Any, Callable, TypeVar

from loguru import logger

from ragcore.errors import RAGCoreError, RateLimitError, is_retryable

T = TypeVar("T")


@dataclass
class RetryConfig:
    """
    Configuration for retry behavior.

    Attributes:
        max_attempts: Maximum number of attempts (including initial)
        base_delay: Initial delay between retries (seconds)
        max_delay: Maximum delay between retries (seconds)
        exponential_base: delay = base_delay * exponential_base^(attempt - 1)
        jitter: Random jitter (0.0 to 1.0, fraction of delay)
        respect_retry_after: Honor Retry-After from RateLimitError
    """

    max_attempts: int = 3
    base_delay: float = 1.0
    max_delay: float = 60.0
    exponential_base: float = 2.0
    jitter: float = 0.1
    respect_retry_after: bool = True

    def __post_init__(self):
        """Validate configuration values."""
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.base_delay < 0:
            raise ValueError("base_delay must be non-negative")
        if self.max_delay < self.base_delay:
            raise ValueError("max_delay must be >= base_delay")
        if not 0 <= self.jitter <= 1:
            raise ValueError("jitter must be between 0 and 1")


def calculate_delay(attempt: int, config: RetryConfig, error: Exception | None = None) -> float:
    """
    Calculate delay before next retry attempt.

    Args:
        attempt: Current attempt number (1-based)
        config: Retry configuration
        error: The exception that triggered the retry

    Returns:
        Delay in seconds before next attempt
    """
    if config.respect_retry_after and isinstance(error, RateLimitError):
        if error.retry_after is not None and error.retry_after > 0:
            logger.debug(f"Using Retry-After header: {error.retry_after}s")
            return min(error.retry_after, config.max_delay)

    delay = config.base_delay * (config.exponential_base ** (attempt - 1))

    if config.jitter > 0:
        jitter_range = delay * config.jitter
        delay += random.uniform(-jitter_range, jitter_range)

    delay = min(delay, config.max_delay)
    return max(delay, 0)


def retry_with_backoff(
    func: Callable[..., T] | None = None,
    *,
    max_attempts: int = 3,
    base_delay: float = 1.0,
    max_delay: float = 60.0,
    config: RetryConfig | None = None,
) -> Callable[..., T] | Callable[[Callable[..., T]], Callable[..., T]]:
    """
    Decorator that retries retryable provider errors with exponential backoff.

    Only errors for which ``is_retryable`` is true are retried; everything
    else propagates on the first failure.

    Can be used with or without arguments:

        @retry_with_backoff
        def my_func():
            pass

        @retry_with_backoff(max_attempts=5)
        def my_func():
            pass
    """
    if config is None:
        config = RetryConfig(max_attempts=max_attempts, base_delay=base_delay, max_delay=max_delay)

    def decorator(fn: Callable[..., T]) -> Callable[..., T]:
        @wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            for attempt in range(1, config.max_attempts + 1):
                try:
                    return fn(*args, **kwargs)
                except Exception as e:
                    if attempt >= config.max_attempts or not is_retryable(e):
                        details = e.details if isinstance(e, RAGCoreError) else {}
                        logger.error(
                            f"[{fn.__name__}] Giving up after {attempt} attempt(s): "
                            f"{type(e).__name__}: {e} {details or ''}"
                        )
                        raise

                    delay = calculate_delay(attempt, config, e)
                    logger.warning(
                        f"[{fn.__name__}] Retrying in {delay:.2f}s "
                        f"(attempt {attempt}/{config.max_attempts}) "
                        f"after {type(e).__name__}: {e}"
                    )
                    time.sleep(delay)

            raise RuntimeError(f"Retry failed for {fn.__name__} with no error captured")

        return wrapper

    # Handle both @retry_with_backoff and @retry_with_backoff()
    if func is not None:
        return decorator(func)
    return decorator
