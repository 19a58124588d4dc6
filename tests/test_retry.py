"""
Tests for the retry policy helpers.
"""

from datetime import datetime, timedelta, timezone
from email.utils import format_datetime

import pytest

from arena_mcp.client.retry import (
    RetryAction,
    compute_retry_delay_ms,
    next_retry_action,
    parse_retry_after_seconds,
)


class TestComputeRetryDelay:
    """Tests for the backoff formula."""

    def test_exponential_with_jitter(self):
        """base=500, attempt=2, r=0.5 gives 2000 + 250."""
        assert compute_retry_delay_ms(2, 500, random=lambda: 0.5) == 2250

    def test_first_attempt_without_jitter(self):
        assert compute_retry_delay_ms(0, 100, random=lambda: 0) == 100

    def test_jitter_stays_below_one_base_unit(self):
        assert compute_retry_delay_ms(1, 100, random=lambda: 0.999) == 299

    def test_retry_after_overrides_backoff(self):
        assert compute_retry_delay_ms(3, 500, retry_after_seconds=1) == 1000

    def test_fractional_retry_after_rounds_up(self):
        assert compute_retry_delay_ms(0, 500, retry_after_seconds=0.0011) == 2

    def test_zero_retry_after(self):
        assert compute_retry_delay_ms(4, 500, retry_after_seconds=0) == 0


class TestNextRetryAction:
    """Tests for the retry loop step function."""

    @pytest.mark.parametrize("status", [429, 500, 503, 599])
    def test_retryable_status(self, status):
        action = next_retry_action(0, 3, 100, status=status, random=lambda: 0)
        assert action == RetryAction(delay_ms=100)

    @pytest.mark.parametrize("status", [400, 401, 403, 404, 409, 422])
    def test_non_retryable_status(self, status):
        assert next_retry_action(0, 3, 100, status=status) is None

    def test_transport_failure_is_retryable(self):
        action = next_retry_action(1, 3, 100, random=lambda: 0)
        assert action.delay_ms == 200

    def test_budget_exhausted(self):
        assert next_retry_action(3, 3, 100, status=503) is None
        assert next_retry_action(0, 0, 100) is None

    def test_uses_retry_after(self):
        action = next_retry_action(0, 3, 100, status=429, retry_after_seconds=2.5)
        assert action.delay_ms == 2500


class TestParseRetryAfter:
    """Tests for Retry-After header parsing."""

    @pytest.mark.parametrize(
        "value,expected",
        [("1", 1.0), ("0", 0.0), ("2.5", 2.5), (" 3 ", 3.0)],
    )
    def test_numeric_seconds(self, value, expected):
        assert parse_retry_after_seconds(value) == expected

    @pytest.mark.parametrize("value", [None, "", "   ", "-1", "soon", "inf", "nan"])
    def test_unusable_values(self, value):
        assert parse_retry_after_seconds(value) is None

    def test_http_date_in_future(self):
        now = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
        header = format_datetime(now + timedelta(seconds=30), usegmt=True)
        assert parse_retry_after_seconds(header, now=now) == 30.0

    def test_http_date_in_past_is_zero(self):
        now = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
        header = format_datetime(now - timedelta(minutes=5), usegmt=True)
        assert parse_retry_after_seconds(header, now=now) == 0.0
