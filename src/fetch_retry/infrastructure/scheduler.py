"""Attempt bounding and exponential fallback delays, backed by tenacity."""

from __future__ import annotations

import logging

from tenacity import RetryCallState, stop_after_attempt, wait_exponential

from fetch_retry.domain.config.retry import GROWTH_FACTOR, MIN_DELAY
from fetch_retry.domain.models.decision import GIVE_UP, Proceed, RetryDecision
from fetch_retry.domain.models.outcome import AttemptResult

logger = logging.getLogger(__name__)


class AttemptScheduler:
    """Decides, after each attempt, whether to run another one and when.

    Delay after attempt n (0-indexed) is MIN_DELAY * GROWTH_FACTOR ** n,
    unless the attempt already waited for a RateLimit-Reset, in which case
    that wait was the inter-attempt delay and no further sleep is added.
    """

    def __init__(self, max_retries: int):
        self.max_retries = max_retries
        self.stop = stop_after_attempt(max_retries + 1)
        # multiplier * exp_base ** (attempt_number - 1)
        self._backoff = wait_exponential(multiplier=MIN_DELAY, exp_base=GROWTH_FACTOR)

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1

    def backoff(self, retry_state: RetryCallState) -> float:
        """Exponential fallback delay for the attempt that just finished"""
        return self._backoff(retry_state)

    def decide(self, retry_state: RetryCallState) -> RetryDecision:
        """Turn the latest attempt into a Proceed/GiveUp decision"""
        outcome = retry_state.outcome
        if outcome is None or outcome.failed:
            # Only non-Exception errors (e.g. cancellation) reach tenacity raw
            return GIVE_UP

        attempt: AttemptResult = outcome.result()
        if not attempt.retryable:
            return GIVE_UP
        if self.stop(retry_state):
            logger.debug(f"Attempt budget exhausted after {retry_state.attempt_number} attempts")
            return GIVE_UP
        if attempt.rate_limited:
            return Proceed(wait=0.0)
        return Proceed(wait=self.backoff(retry_state))

    def should_retry(self, retry_state: RetryCallState) -> bool:
        """tenacity ``retry`` strategy"""
        return isinstance(self.decide(retry_state), Proceed)

    def wait(self, retry_state: RetryCallState) -> float:
        """tenacity ``wait`` strategy"""
        decision = self.decide(retry_state)
        return decision.wait if isinstance(decision, Proceed) else 0.0
