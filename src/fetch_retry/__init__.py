"""Retry and backoff for async HTTP-fetching operations"""

from fetch_retry.application.retry_service import RetryPolicy, retry
from fetch_retry.domain.config import RetryConfig
from fetch_retry.domain.errors import AbortError, FetchError, FetchRetryError, RetryableError

__all__ = [
    "retry",
    "RetryPolicy",
    "RetryConfig",
    "FetchRetryError",
    "RetryableError",
    "FetchError",
    "AbortError",
]
