"""Classification of attempt outcomes as retryable or terminal."""

from __future__ import annotations

# Error kinds (class names) that trigger a retry
RETRYABLE_ERROR_KINDS = frozenset({"RetryableError", "FetchError", "AbortError"})


def is_retryable_status(status: int) -> bool:
    """Check if an HTTP status should be retried (429 and 5xx)."""
    return status == 429 or 500 <= status <= 599


def is_retryable_failure(err: BaseException) -> bool:
    """Check if a raised error should be retried.

    Matches on the class name of the error or any of its base classes, so
    transport libraries with their own ``FetchError``/``AbortError`` types are
    recognized too. Anything that is not an ``Exception`` (cancellation,
    interpreter exit) is terminal.
    """
    if not isinstance(err, Exception):
        return False
    return any(cls.__name__ in RETRYABLE_ERROR_KINDS for cls in type(err).__mro__)
