"""RateLimit-Reset handling for 429 responses.

The header follows the IETF RateLimit header fields draft and carries either
delta-seconds (``RateLimit-Reset: 30``) or an IMF-fixdate
(``RateLimit-Reset: Wed, 21 Oct 2015 07:28:00 GMT``).
"""

from __future__ import annotations

import logging
import re
import time
from datetime import timezone
from email.utils import parsedate_to_datetime
from typing import Any, Optional

logger = logging.getLogger(__name__)

RATE_LIMIT_RESET_HEADER = "RateLimit-Reset"

# Leading integer, as parseInt() reads it: "1.5" -> 1, "10abc" -> 10
_DELTA_SECONDS = re.compile(r"\s*([+-]?\d+)")


class InvalidResetHeader(ValueError):
    """RateLimit-Reset is neither delta-seconds nor an HTTP date."""

    pass


def status_of(response: Any) -> int:
    """Read the status code from an aiohttp-, requests- or httpx-style response."""
    status = getattr(response, "status", None)
    if status is None:
        status = getattr(response, "status_code", None)
    if status is None:
        raise TypeError(f"Response object {type(response).__name__} has no status")
    return int(status)


def get_rate_limit_reset(response: Any) -> Optional[str]:
    """Read the RateLimit-Reset header, matching its name case-insensitively."""
    headers = getattr(response, "headers", None)
    if not headers:
        return None
    value = headers.get(RATE_LIMIT_RESET_HEADER)
    if value is None:
        # Plain dicts are case-sensitive
        wanted = RATE_LIMIT_RESET_HEADER.lower()
        for key, candidate in headers.items():
            if isinstance(key, str) and key.lower() == wanted:
                value = candidate
                break
    return value


def parse_delta_seconds(value: str) -> Optional[int]:
    """Parse a leading integer, returning None if there is none."""
    match = _DELTA_SECONDS.match(value)
    if match is None:
        return None
    return int(match.group(1))


def parse_reset(value: str, now: Optional[float] = None) -> float:
    """Convert a RateLimit-Reset value into a wait in seconds.

    Args:
        value: Raw header value
        now: Current time as epoch seconds (defaults to time.time())

    Returns:
        Seconds to wait. May be zero or negative: negative delta-seconds are
        passed through, and dates in the past yield a negative wait.

    Raises:
        InvalidResetHeader: If the value is neither an integer nor a date
    """
    delta = parse_delta_seconds(value)
    if delta is not None:
        return float(delta)

    try:
        reset_at = parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError) as e:
        raise InvalidResetHeader(f"Invalid {RATE_LIMIT_RESET_HEADER} value: {value!r}") from e
    if reset_at is None:
        raise InvalidResetHeader(f"Invalid {RATE_LIMIT_RESET_HEADER} value: {value!r}")
    if reset_at.tzinfo is None:
        # "-0000" offsets come back naive; HTTP dates are always UTC
        reset_at = reset_at.replace(tzinfo=timezone.utc)

    if now is None:
        now = time.time()
    return reset_at.timestamp() - now


def resolve_wait(header_value: Optional[str], status: int, now: Optional[float] = None) -> Optional[float]:
    """Compute the wait forced by a rate-limited response.

    Args:
        header_value: RateLimit-Reset value, or None if absent
        status: HTTP status of the response
        now: Current time as epoch seconds (defaults to time.time())

    Returns:
        Seconds to wait, or None when no wait is forced (not a 429, no header,
        or an unparsable header - the caller falls back to exponential backoff)
    """
    if status != 429 or not header_value:
        return None
    try:
        return parse_reset(header_value, now)
    except InvalidResetHeader as e:
        logger.warning(f"{e}. Falling back to exponential backoff")
        return None
