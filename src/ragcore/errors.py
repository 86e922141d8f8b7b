"""
ragcore Error Classification System.

This module provides the exception hierarchy used across ingestion,
retrieval and generation.

Error Categories:
-----------------
1. Configuration Errors: invalid chunking or pipeline parameters.
   Fatal - the caller has to fix its configuration.

2. Extraction Errors: a single file could not be turned into text.
   Recovered locally by the ingestion orchestrator with a placeholder.

3. Provider Errors: the embedding or generation capability failed.
   - Retryable: rate limiting (429), unavailable (503), timeouts, 5xx
   - Permanent: authentication (401/403), bad request (400)
   Recovered by degrading to the fallback path.

4. Index Errors: the vector backend is unreachable.
   Recovered by switching to the in-process / static fallback.

5. Lifecycle Errors: a query arrived before the pipeline was ready.

Usage:
------
    from ragcore.errors import ProviderError, ProviderTimeoutError

    try:
        vector = embedder.embed_query(text)
    except ProviderTimeoutError as e:
        logger.warning(f"Embedding timed out after {e.timeout}s")
    except ProviderError as e:
        logger.error(f"Embedding failed: {e}")
"""

from typing import Any


class RAGCoreError(Exception):
    """
    Base exception for all ragcore errors.

    Attributes:
        message: Human-readable error description
        details: Additional context about the error (optional)
        original_error: The underlying exception that caused this error (optional)
    """

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.original_error = original_error

    def __str__(self) -> str:
        base = self.message
        if self.details:
            base += f" | Details: {self.details}"
        if self.original_error:
            base += f" | Caused by: {type(self.original_error).__name__}: {self.original_error}"
        return base

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        return {
            "error_type": type(self).__name__,
            "message": self.message,
            "details": self.details,
            "original_error": str(self.original_error) if self.original_error else None
        }


# =============================================================================
# Configuration / Input Errors
# =============================================================================

class ConfigError(RAGCoreError):
    """
    Raised when chunking or pipeline parameters are invalid.

    Common causes:
    - chunk_overlap >= chunk_size
    - Non-positive chunk_size
    - Unknown backend or provider type
    """

    def __init__(
        self,
        message: str = "Configuration error",
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        super().__init__(message, details, original_error)


class InvalidQueryError(RAGCoreError):
    """Raised when a query is empty or blank."""

    def __init__(
        self,
        message: str = "Message is required",
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        super().__init__(message, details, original_error)


# =============================================================================
# Ingestion Errors
# =============================================================================

class ExtractionError(RAGCoreError):
    """
    Raised when text cannot be extracted from one source file.

    Attributes:
        filename: Name of the file that failed
        file_type: Lower-case extension of the file (e.g. ".pdf")
    """

    def __init__(
        self,
        message: str,
        filename: str = "",
        file_type: str = "",
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        details = details or {}
        details.setdefault("filename", filename)
        details.setdefault("file_type", file_type)
        super().__init__(message, details, original_error)
        self.filename = filename
        self.file_type = file_type


# =============================================================================
# Provider Errors - embedding and generation capabilities
# =============================================================================

class ProviderError(RAGCoreError):
    """
    Base class for failures of an external embedding or generation provider.

    Attributes:
        retryable: Whether retrying the same call may succeed
        retry_after: Suggested wait time before retry (seconds), if known
    """

    retryable: bool = False

    def __init__(
        self,
        message: str = "Provider call failed",
        retry_after: float | None = None,
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        super().__init__(message, details, original_error)
        self.retry_after = retry_after


class TransientProviderError(ProviderError):
    """Generic retryable provider failure (5xx, dropped connection)."""

    retryable = True


class RateLimitError(ProviderError):
    """
    Raised when the provider rate limit is exceeded (HTTP 429).

    The retry_after attribute carries the Retry-After header, if any.
    """

    retryable = True

    def __init__(
        self,
        message: str = "API rate limit exceeded",
        retry_after: float | None = None,
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        super().__init__(message, retry_after, details, original_error)


class ServiceUnavailableError(ProviderError):
    """Raised when the provider is temporarily unavailable (HTTP 503)."""

    retryable = True

    def __init__(
        self,
        message: str = "Service temporarily unavailable",
        retry_after: float | None = None,
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        super().__init__(message, retry_after, details, original_error)


class ProviderTimeoutError(ProviderError):
    """
    Raised when a provider call exceeds its time budget.

    Attributes:
        timeout: The timeout value that was exceeded (seconds)
    """

    retryable = True

    def __init__(
        self,
        message: str = "Provider call timed out",
        timeout: float | None = None,
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        details = details or {}
        details["timeout"] = timeout
        super().__init__(message, None, details, original_error)
        self.timeout = timeout


class AuthenticationError(ProviderError):
    """
    Raised when the provider rejects the credentials (HTTP 401/403).

    Common causes:
    - Missing or invalid API key
    - Insufficient permissions
    """

    def __init__(
        self,
        message: str = "Authentication failed",
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        super().__init__(message, None, details, original_error)


class InvalidRequestError(ProviderError):
    """Raised when the provider rejects the request parameters (HTTP 400/404)."""

    def __init__(
        self,
        message: str = "Invalid request parameters",
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        super().__init__(message, None, details, original_error)


# =============================================================================
# Index / Lifecycle Errors
# =============================================================================

class IndexUnavailableError(RAGCoreError):
    """Raised when the vector backend cannot be reached or was never initialised."""

    def __init__(
        self,
        message: str = "Vector index unavailable",
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        super().__init__(message, details, original_error)


class NotInitializedError(RAGCoreError):
    """Raised when a query is issued before the pipeline is ready."""

    def __init__(
        self,
        message: str = "RAG pipeline not initialized",
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        super().__init__(message, details, original_error)


# =============================================================================
# Helper Functions
# =============================================================================

def is_retryable(error: Exception) -> bool:
    """
    Check if an error is worth retrying.

    Args:
        error: The exception to check

    Returns:
        True for retryable ProviderError subclasses
    """
    return isinstance(error, ProviderError) and error.retryable


def classify_http_error(status_code: int, message: str = "", headers: dict | None = None) -> ProviderError:
    """
    Classify a provider HTTP error based on status code.

    Args:
        status_code: HTTP status code
        message: Error message from response
        headers: Response headers (used to extract Retry-After)

    Returns:
        Appropriate ProviderError subclass instance

    Example:
        if response.status_code >= 400:
            raise classify_http_error(
                response.status_code,
                response.text,
                dict(response.headers)
            )
    """
    # httpx lower-cases header names
    headers = {key.lower(): value for key, value in (headers or {}).items()}
    retry_after = None

    if "retry-after" in headers:
        try:
            retry_after = float(headers["retry-after"])
        except (ValueError, TypeError):
            pass

    details = {"status_code": status_code}

    if status_code == 429:
        return RateLimitError(
            message=message or "API rate limit exceeded",
            retry_after=retry_after,
            details=details
        )
    elif status_code == 401:
        return AuthenticationError(
            message=message or "Authentication failed - invalid API key",
            details=details
        )
    elif status_code == 403:
        return AuthenticationError(
            message=message or "Access forbidden - insufficient permissions",
            details=details
        )
    elif status_code in (400, 404):
        return InvalidRequestError(
            message=message or f"Invalid request (HTTP {status_code})",
            details=details
        )
    elif status_code == 503:
        return ServiceUnavailableError(
            message=message or "Service temporarily unavailable",
            retry_after=retry_after,
            details=details
        )
    elif status_code >= 500:
        return TransientProviderError(
            message=message or f"Server error (HTTP {status_code})",
            details=details
        )
    else:
        return ProviderError(
            message=message or f"HTTP error {status_code}",
            details=details
        )


def wrap_exception(error: Exception, context: str = "") -> ProviderError:
    """
    Wrap a generic exception raised by a provider client in a ProviderError.

    Args:
        error: The original exception
        context: Additional context about where the error occurred

    Returns:
        ProviderError instance wrapping the original error

    Example:
        try:
            response = client.post(url, json=data)
        except httpx.HTTPError as e:
            raise wrap_exception(e, context="embedding request") from e
    """
    if isinstance(error, ProviderError):
        return error

    error_str = str(error).lower()
    error_type = type(error).__name__
    message = f"{context}: {error}" if context else str(error)

    if "timeout" in error_str or "timed out" in error_str or "Timeout" in error_type:
        return ProviderTimeoutError(message=message, original_error=error)

    if any(x in error_str for x in ["connection", "connect", "network", "dns"]):
        return TransientProviderError(message=message, original_error=error)

    if any(x in error_str for x in ["rate limit", "too many requests", "429"]):
        return RateLimitError(message=message, original_error=error)

    if any(x in error_str for x in ["auth", "api key", "credential", "401", "403"]):
        return AuthenticationError(message=message, original_error=error)

    if error_type in ("ConnectionError", "ConnectError", "RemoteProtocolError"):
        return TransientProviderError(message=message, original_error=error)

    return ProviderError(message=message, original_error=error)
