"""Logging configuration model."""

from pydantic import BaseModel, ConfigDict


class LoggingConfig(BaseModel):
    """Logging configuration.

    Attributes:
        verbose: Enable DEBUG logging (per-attempt traces)
    """

    verbose: bool = False

    model_config = ConfigDict(extra="forbid")
