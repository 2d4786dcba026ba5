"""Shared HTTP client utilities (requests + retry/backoff).

requests is blocking, so calls run in a worker thread. Transport errors are
translated into the error kinds the retry engine recognizes; HTTP statuses
are never raised.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

import requests

from fetch_retry.application.retry_service import RetryPolicy
from fetch_retry.domain.config.retry import RetryConfig
from fetch_retry.domain.errors import AbortError, FetchError

logger = logging.getLogger(__name__)


class RequestsFetcher:
    """Async fetch operation backed by a requests.Session"""

    def __init__(self, session: Optional[requests.Session] = None, timeout: float = 30.0):
        self.session = session or requests.Session()
        self.timeout = timeout

    async def __call__(self, url: str, method: str = "GET", **kwargs: Any) -> requests.Response:
        kwargs.setdefault("timeout", self.timeout)
        logger.debug(f"HTTP {method} {url}")
        try:
            return await asyncio.to_thread(self.session.request, method, url, **kwargs)
        except requests.exceptions.Timeout as e:
            raise AbortError(f"request to {url} timed out, reason: {e}") from e
        except requests.exceptions.RequestException as e:
            raise FetchError(f"request to {url} failed, reason: {e}") from e


async def request_with_retries(
    url: str,
    *,
    retry: RetryConfig,
    method: str = "GET",
    session: Optional[requests.Session] = None,
    timeout: float = 30.0,
    **kwargs: Any,
) -> requests.Response:
    """Send a request with retry on network errors, 429 and 5xx."""
    fetcher = RequestsFetcher(session=session, timeout=timeout)
    return await RetryPolicy.from_config(retry).fetch(fetcher, url, method=method, **kwargs)
