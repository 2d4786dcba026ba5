"""Configuration models with Pydantic validation."""

from fetch_retry.domain.config.app import AppConfig
from fetch_retry.domain.config.log import LoggingConfig
from fetch_retry.domain.config.retry import GROWTH_FACTOR, MIN_DELAY, RetryConfig

__all__ = [
    "AppConfig",
    "LoggingConfig",
    "RetryConfig",
    "MIN_DELAY",
    "GROWTH_FACTOR",
]
