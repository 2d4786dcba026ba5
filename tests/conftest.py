"""Shared fixtures for fetch_retry tests"""

from __future__ import annotations

from typing import List

import pytest


class RecordingSleep:
    """Async sleep that records delays instead of waiting"""

    def __init__(self):
        self.delays: List[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv("FETCH_RETRY_MAX_RETRIES", raising=False)
    monkeypatch.delenv("FETCH_RETRY_VERBOSE", raising=False)
