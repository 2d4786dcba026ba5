"""Tests for RateLimit-Reset parsing and wait resolution"""

from __future__ import annotations

import logging
from email.utils import formatdate

import pytest
import requests

from fetch_retry.infrastructure.rate_limit import (
    InvalidResetHeader,
    get_rate_limit_reset,
    parse_delta_seconds,
    parse_reset,
    resolve_wait,
    status_of,
)

NOW = 1_700_000_000.0


class FakeResponse:
    def __init__(self, status, headers=None):
        self.status = status
        self.headers = headers or {}


class TestParseDeltaSeconds:
    @pytest.mark.parametrize(
        "value,expected",
        [("1", 1), ("30", 30), ("0", 0), ("-5", -5), ("  7", 7), ("1.5", 1), ("10abc", 10), ("+3", 3)],
    )
    def test_leading_integer(self, value, expected):
        assert parse_delta_seconds(value) == expected

    @pytest.mark.parametrize("value", ["", "abc", "Wed, 21 Oct 2015 07:28:00 GMT", ".5", "- 1"])
    def test_not_an_integer(self, value):
        assert parse_delta_seconds(value) is None


class TestParseReset:
    def test_delta_seconds(self):
        assert parse_reset("1", now=NOW) == 1.0

    def test_imf_fixdate_in_future(self):
        header = formatdate(NOW + 1, usegmt=True)
        assert parse_reset(header, now=NOW) == pytest.approx(1.0)

    def test_imf_fixdate_in_past_is_negative(self):
        header = formatdate(NOW - 30, usegmt=True)
        assert parse_reset(header, now=NOW) == pytest.approx(-30.0)

    def test_known_date(self):
        # 2015-10-21T07:28:00Z
        assert parse_reset("Wed, 21 Oct 2015 07:28:00 GMT", now=1445412470.0) == pytest.approx(10.0)

    def test_negative_delta_is_passed_through(self):
        assert parse_reset("-5", now=NOW) == -5.0

    @pytest.mark.parametrize("value", ["soon", "tomorrow at noon", "Wed, 21 Foo"])
    def test_invalid_value(self, value):
        with pytest.raises(InvalidResetHeader):
            parse_reset(value, now=NOW)

    def test_invalid_value_is_value_error(self):
        with pytest.raises(ValueError):
            parse_reset("soon", now=NOW)


class TestResolveWait:
    def test_only_applies_to_429(self):
        assert resolve_wait("5", 503, now=NOW) is None
        assert resolve_wait("5", 200, now=NOW) is None

    def test_missing_header(self):
        assert resolve_wait(None, 429, now=NOW) is None
        assert resolve_wait("", 429, now=NOW) is None

    def test_delta_seconds(self):
        assert resolve_wait("1", 429, now=NOW) == 1.0

    def test_http_date(self):
        assert resolve_wait(formatdate(NOW + 2, usegmt=True), 429, now=NOW) == pytest.approx(2.0)

    def test_invalid_header_falls_back(self, caplog):
        with caplog.at_level(logging.WARNING, logger="fetch_retry.infrastructure.rate_limit"):
            assert resolve_wait("soon", 429, now=NOW) is None
        assert "Falling back to exponential backoff" in caplog.text


class TestResponseAccess:
    def test_exact_header_name(self):
        assert get_rate_limit_reset(FakeResponse(429, {"RateLimit-Reset": "3"})) == "3"

    def test_plain_dict_is_matched_case_insensitively(self):
        assert get_rate_limit_reset(FakeResponse(429, {"ratelimit-reset": "3"})) == "3"

    def test_requests_headers(self):
        response = requests.Response()
        response.status_code = 429
        response.headers["RATELIMIT-RESET"] = "4"
        assert get_rate_limit_reset(response) == "4"

    def test_no_header(self):
        assert get_rate_limit_reset(FakeResponse(429)) is None
        assert get_rate_limit_reset(FakeResponse(429, {"Retry-After": "3"})) is None

    def test_status_attribute(self):
        assert status_of(FakeResponse(503)) == 503

    def test_status_code_attribute(self):
        response = requests.Response()
        response.status_code = 418
        assert status_of(response) == 418

    def test_missing_status(self):
        with pytest.raises(TypeError, match="has no status"):
            status_of(object())
