"""Retry configuration model."""

from pydantic import BaseModel, ConfigDict, Field

# Fixed policy constants, not caller-configurable
MIN_DELAY = 0.01  # seconds
GROWTH_FACTOR = 5


class RetryConfig(BaseModel):
    """Configuration for retry logic.

    Attributes:
        max_retries: Maximum number of retries after the initial call
            (total attempts = max_retries + 1)
    """

    max_retries: int = Field(3, ge=0)

    model_config = ConfigDict(extra="forbid")

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1
