"""Retry orchestration for async HTTP-fetching operations.

Retries up to ``max_retries`` times only if the operation:

- returns a response with status 429 or 500-599
- raises a ``FetchError``, ``AbortError`` or ``RetryableError``

Once retries are exhausted the last outcome is passed along unchanged,
whether it is an error or a response with a bad status. Apply retry
behavior before handling bad statuses.
"""

from __future__ import annotations

import asyncio
import functools
import logging
import time
from typing import Any, Awaitable, Callable, Optional

from tenacity import AsyncRetrying, RetryCallState

from fetch_retry.domain.config.retry import RetryConfig
from fetch_retry.domain.models.outcome import AttemptResult, Failure, Response
from fetch_retry.infrastructure.classifier import is_retryable_failure, is_retryable_status
from fetch_retry.infrastructure.rate_limit import get_rate_limit_reset, resolve_wait, status_of
from fetch_retry.infrastructure.scheduler import AttemptScheduler

logger = logging.getLogger(__name__)

Operation = Callable[..., Awaitable[Any]]


def _last_attempt(retry_state: RetryCallState) -> Any:
    """Hand back the final attempt when the attempt bound is reached"""
    return retry_state.outcome.result()


class RetryPolicy:
    """A configured retry policy that can run any number of operations.

    Calls are independent: each ``fetch`` gets its own attempt counter and
    nothing is shared between concurrent calls.

    Example:
        policy = RetryPolicy(3)
        response = await policy.fetch(session.get, "https://api.example.com/users/1")
    """

    def __init__(
        self,
        max_retries: int,
        *,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        clock: Callable[[], float] = time.time,
    ):
        """Initialize retry policy

        Args:
            max_retries: Maximum number of retries after the first attempt (>= 0)
            sleep: Async sleep used for every wait (injectable for tests)
            clock: Epoch-seconds clock used to resolve HTTP-date resets

        Raises:
            pydantic.ValidationError: If max_retries is negative
        """
        self.config = RetryConfig(max_retries=max_retries)
        self._scheduler = AttemptScheduler(self.config.max_retries)
        self._sleep = sleep
        self._clock = clock

    @classmethod
    def from_config(cls, config: RetryConfig, **kwargs: Any) -> "RetryPolicy":
        """Create a policy from a validated RetryConfig"""
        return cls(config.max_retries, **kwargs)

    @property
    def max_retries(self) -> int:
        return self.config.max_retries

    async def fetch(self, operation: Operation, *args: Any, **kwargs: Any) -> Any:
        """Run ``operation(*args, **kwargs)`` with retries.

        Returns:
            The last response, even if its status is bad

        Raises:
            Exception: The original error, unwrapped, if it is not retryable
                or if retries are exhausted
        """
        retrying = AsyncRetrying(
            stop=self._scheduler.stop,
            wait=self._scheduler.wait,
            retry=self._scheduler.should_retry,
            retry_error_callback=_last_attempt,
            before_sleep=self._log_retry,
            sleep=self._sleep,
        )
        attempt: AttemptResult = await retrying(self._attempt, operation, *args, **kwargs)
        return attempt.surface()

    def wrap(self, operation: Operation) -> Operation:
        """Bind an operation to this policy, keeping its call signature"""

        @functools.wraps(operation)
        async def wrapped(*args: Any, **kwargs: Any) -> Any:
            return await self.fetch(operation, *args, **kwargs)

        return wrapped

    async def _attempt(self, operation: Operation, *args: Any, **kwargs: Any) -> AttemptResult:
        """Invoke the operation once and capture the outcome"""
        try:
            response = await operation(*args, **kwargs)
        except Exception as e:
            retryable = is_retryable_failure(e)
            if not retryable:
                logger.debug(f"Non-retryable error {type(e).__name__}: {e}")
            return AttemptResult(Failure(e), retryable=retryable)

        status = status_of(response)
        logger.debug(f"Attempt returned status {status}")
        wait = None
        if status == 429:
            wait = resolve_wait(get_rate_limit_reset(response), status, now=self._clock())
        if wait is not None:
            # Served even on the last attempt, before the retry decision
            if wait > 0:
                logger.info(f"Rate limited, waiting {wait:.2f}s for RateLimit-Reset")
                await self._sleep(wait)
            else:
                logger.debug(f"RateLimit-Reset already elapsed ({wait:.2f}s), not waiting")
        return AttemptResult(
            Response(response, status),
            retryable=is_retryable_status(status),
            rate_limit_wait=wait,
        )

    def _log_retry(self, retry_state: RetryCallState) -> None:
        if retry_state.outcome is None:
            return
        attempt: AttemptResult = retry_state.outcome.result()
        delay = retry_state.next_action.sleep if retry_state.next_action else 0.0
        logger.warning(
            f"Retryable {attempt.describe()} (attempt {retry_state.attempt_number}/"
            f"{self._scheduler.max_attempts}). Retrying in {delay:.2f}s..."
        )


def retry(max_retries: int, operation: Optional[Operation] = None) -> Any:
    """Wrap an async fetch operation with the retry policy.

    Both calling conventions are equivalent:

        get = retry(3, session.get)
        get = retry(3)(session.get)

    Args:
        max_retries: Maximum number of retries after the first attempt
        operation: Async callable returning a response; if omitted a
            decorator-style wrapper is returned

    Returns:
        Async callable forwarding its arguments to ``operation``
    """
    policy = RetryPolicy(max_retries)
    if operation is None:
        return policy.wrap
    return policy.wrap(operation)
