"""
Tests for Retry Utility with Exponential Backoff.

These tests verify:
- Configuration validation
- Exponential backoff calculation
- Rate limit header handling
- Retryable vs permanent error handling
"""

from unittest.mock import MagicMock, patch

import pytest

from ragcore.errors import (
    AuthenticationError,
    ProviderTimeoutError,
    RateLimitError,
    ServiceUnavailableError,
)
from ragcore.utils.retry import RetryConfig, calculate_delay, retry_with_backoff


class TestRetryConfig:
    """Tests for RetryConfig dataclass."""

    def test_default_config(self):
        """Test default configuration values."""
        config = RetryConfig()
        assert config.max_attempts == 3
        assert config.base_delay == 1.0
        assert config.max_delay == 60.0
        assert config.exponential_base == 2.0
        assert config.jitter == 0.1
        assert config.respect_retry_after is True

    def test_invalid_max_attempts(self):
        with pytest.raises(ValueError, match="max_attempts"):
            RetryConfig(max_attempts=0)

    def test_invalid_base_delay(self):
        with pytest.raises(ValueError, match="base_delay"):
            RetryConfig(base_delay=-1.0)

    def test_invalid_max_delay(self):
        """Test max_delay must be >= base_delay."""
        with pytest.raises(ValueError, match="max_delay"):
            RetryConfig(base_delay=10.0, max_delay=5.0)

    def test_invalid_jitter(self):
        with pytest.raises(ValueError, match="jitter"):
            RetryConfig(jitter=1.5)


class TestCalculateDelay:
    """Tests for backoff delay calculation."""

    def test_exponential_growth(self):
        config = RetryConfig(base_delay=1.0, jitter=0.0)
        assert calculate_delay(1, config) == 1.0
        assert calculate_delay(2, config) == 2.0
        assert calculate_delay(3, config) == 4.0

    def test_capped_at_max_delay(self):
        config = RetryConfig(base_delay=1.0, max_delay=5.0, jitter=0.0)
        assert calculate_delay(10, config) == 5.0

    def test_jitter_stays_in_range(self):
        config = RetryConfig(base_delay=10.0, jitter=0.1)
        for _ in range(20):
            assert 9.0 <= calculate_delay(1, config) <= 11.0

    def test_retry_after_respected(self):
        config = RetryConfig(jitter=0.0)
        error = RateLimitError("slow down", retry_after=7.0)
        assert calculate_delay(1, config, error) == 7.0

    def test_retry_after_capped(self):
        config = RetryConfig(max_delay=10.0, jitter=0.0)
        error = RateLimitError("slow down", retry_after=100.0)
        assert calculate_delay(1, config, error) == 10.0


class TestRetryWithBackoff:
    """Tests for the retry decorator."""

    @patch("ragcore.utils.retry.time.sleep")
    def test_retries_transient_then_succeeds(self, mock_sleep):
        func = MagicMock(side_effect=[ServiceUnavailableError(), ProviderTimeoutError(timeout=1.0), "ok"])
        func.__name__ = "func"

        wrapped = retry_with_backoff(max_attempts=3, base_delay=0.01)(func)

        assert wrapped() == "ok"
        assert func.call_count == 3
        assert mock_sleep.call_count == 2

    @patch("ragcore.utils.retry.time.sleep")
    def test_permanent_error_not_retried(self, mock_sleep):
        func = MagicMock(side_effect=AuthenticationError())
        func.__name__ = "func"

        wrapped = retry_with_backoff(max_attempts=5, base_delay=0.01)(func)

        with pytest.raises(AuthenticationError):
            wrapped()
        assert func.call_count == 1
        mock_sleep.assert_not_called()

    @patch("ragcore.utils.retry.time.sleep")
    def test_non_provider_error_not_retried(self, mock_sleep):
        func = MagicMock(side_effect=KeyError("bug"))
        func.__name__ = "func"

        with pytest.raises(KeyError):
            retry_with_backoff(max_attempts=3)(func)()
        assert func.call_count == 1

    @patch("ragcore.utils.retry.time.sleep")
    def test_gives_up_after_max_attempts(self, mock_sleep):
        func = MagicMock(side_effect=RateLimitError())
        func.__name__ = "func"

        with pytest.raises(RateLimitError):
            retry_with_backoff(max_attempts=3, base_delay=0.01)(func)()
        assert func.call_count == 3

    def test_decorator_without_arguments(self):
        @retry_with_backoff
        def add(a, b):
            return a + b

        assert add(2, 3) == 5
        assert add.__name__ == "add"
