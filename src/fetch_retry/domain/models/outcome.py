"""Outcome of a single attempt - either a response or a failure"""

from dataclasses import dataclass
from typing import Any, Optional, Union


@dataclass(frozen=True)
class Response:
    """The wrapped operation returned a response"""

    response: Any  # Transport response object, returned to the caller untouched
    status: int


@dataclass(frozen=True)
class Failure:
    """The wrapped operation raised"""

    error: Exception

    @property
    def kind(self) -> str:
        return getattr(self.error, "kind", type(self.error).__name__)

    @property
    def message(self) -> str:
        return str(self.error)


Outcome = Union[Response, Failure]


@dataclass(frozen=True)
class AttemptResult:
    """Everything the scheduler needs to know about one finished attempt"""

    outcome: Outcome
    retryable: bool
    rate_limit_wait: Optional[float] = None  # Seconds already waited for RateLimit-Reset

    @property
    def rate_limited(self) -> bool:
        return self.rate_limit_wait is not None

    def describe(self) -> str:
        """Short human-readable summary for log lines"""
        if isinstance(self.outcome, Response):
            return f"status {self.outcome.status}"
        return f"{self.outcome.kind}: {self.outcome.message}"

    def surface(self) -> Any:
        """Return the response, or re-raise the original error unchanged"""
        if isinstance(self.outcome, Failure):
            raise self.outcome.error
        return self.outcome.response
