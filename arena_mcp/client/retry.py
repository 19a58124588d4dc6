"""
Client - Retry Policy

Pure helpers deciding whether and how long to wait before retrying.
"""

import math
import random as _random
from dataclasses import dataclass
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Callable, Optional

from arena_mcp.errors import is_retryable_status


@dataclass(frozen=True)
class RetryAction:
    """Sleep this long, then issue the request again."""
    delay_ms: int


def parse_retry_after_seconds(
    header_value: Optional[str],
    now: Optional[datetime] = None,
) -> Optional[float]:
    """
    Parse a ``Retry-After`` header.

    Numeric values are seconds. HTTP dates become the seconds remaining
    until that date, never negative. Anything else is ``None``.
    """
    if not header_value or not header_value.strip():
        return None
    value = header_value.strip()

    try:
        seconds = float(value)
    except ValueError:
        seconds = None
    if seconds is not None:
        if math.isfinite(seconds) and seconds >= 0:
            return seconds
        return None

    try:
        retry_at = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
    if retry_at is None:
        return None
    if retry_at.tzinfo is None:
        retry_at = retry_at.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)
    return max((retry_at - now).total_seconds(), 0.0)


def compute_retry_delay_ms(
    attempt: int,
    base_ms: int,
    retry_after_seconds: Optional[float] = None,
    random: Callable[[], float] = _random.random,
) -> int:
    """
    Delay before retry number ``attempt`` (zero-based).

    An upstream ``Retry-After`` wins outright. Otherwise exponential backoff
    plus up to one base unit of jitter: ``base * 2**attempt + floor(r * base)``.
    """
    if retry_after_seconds is not None:
        return math.ceil(retry_after_seconds * 1000)
    exponential = base_ms * 2 ** attempt
    jitter = math.floor(random() * base_ms)
    return exponential + jitter


def next_retry_action(
    attempt: int,
    max_retries: int,
    base_ms: int,
    status: Optional[int] = None,
    retry_after_seconds: Optional[float] = None,
    random: Callable[[], float] = _random.random,
) -> Optional[RetryAction]:
    """
    Step function of the retry loop.

    ``status`` is the HTTP status of the failed attempt, or ``None`` for a
    transport failure (always retryable). Returns ``None`` when the failure
    should be raised to the caller.
    """
    if status is not None and not is_retryable_status(status):
        return None
    if attempt >= max_retries:
        return None
    return RetryAction(
        delay_ms=compute_retry_delay_ms(
            attempt,
            base_ms,
            retry_after_seconds=retry_after_seconds,
            random=random,
        )
    )
