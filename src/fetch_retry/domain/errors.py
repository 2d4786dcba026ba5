"""Error hierarchy recognized by the retry engine."""


class FetchRetryError(Exception):
    """Base class for errors the retry engine knows how to classify."""

    @property
    def kind(self) -> str:
        """Discriminator used by the classifier (the class name)"""
        return type(self).__name__


class RetryableError(FetchRetryError):
    """Raised by a wrapped operation to explicitly request another attempt.

    The engine itself never raises it.
    """

    pass


class FetchError(FetchRetryError):
    """Transport-level failure (connection refused, DNS, reset, ...)"""

    pass


class AbortError(FetchRetryError):
    """Operation was aborted or timed out before a response arrived"""

    pass
