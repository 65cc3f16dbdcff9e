"""Retry policy with exponential backoff, jitter, and server-dictated delays.

The policy is a thin configuration of ``tenacity.Retrying``: one attempt in
flight at a time, bounded by ``max_attempts``, with a blocking sleep between
attempts that can be swapped out in tests.
"""

from __future__ import annotations

import logging
import random
import time
from collections.abc import Callable
from typing import Any, TypeVar

from tenacity import RetryCallState, Retrying, retry_if_exception, stop_after_attempt
from tenacity.wait import wait_base

from vulngate.constants.api import (
    DEFAULT_BASE_DELAY_MS,
    DEFAULT_MAX_DELAY_MS,
    RETRY_JITTER_MS,
    RETRYABLE_STATUSES,
    RETRYABLE_TRANSPORT_CODES,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def compute_delay(
    attempt: int,
    base_ms: int = DEFAULT_BASE_DELAY_MS,
    max_ms: int = DEFAULT_MAX_DELAY_MS,
    *,
    jitter: Callable[[], float] = random.random,
) -> float:
    """Backoff delay in milliseconds for the given 1-based attempt.

    ``min(base * 2^(attempt-1), max)`` plus up to one second of jitter.
    """
    exponential = min(base_ms * 2 ** (attempt - 1), max_ms)
    return exponential + jitter() * RETRY_JITTER_MS


def _field(source: object, name: str) -> Any:
    if isinstance(source, dict):
        return source.get(name)
    return getattr(source, name, None)


def _as_status(value: Any) -> int | None:
    return value if isinstance(value, int) and not isinstance(value, bool) else None


def _status_of(error: object) -> int | None:
    """Find an HTTP status on an error of unknown shape."""
    for name in ("status_code", "statusCode"):
        status = _as_status(_field(error, name))
        if status is not None:
            return status
    response = _field(error, "response")
    if response is None:
        return None
    for name in ("status_code", "status"):
        status = _as_status(_field(response, name))
        if status is not None:
            return status
    return None


def is_retryable_error(error: object) -> bool:
    """Whether an error is transient and worth another attempt.

    Transport codes ``ECONNRESET``, ``ETIMEDOUT``, ``ENOTFOUND`` and
    ``ECONNABORTED`` and HTTP statuses 429/500/502/503 are retryable; every
    other error, including all remaining 4xx statuses, is terminal.
    """
    if error is None:
        return False
    if _field(error, "code") in RETRYABLE_TRANSPORT_CODES:
        return True
    return _status_of(error) in RETRYABLE_STATUSES


class BackoffWait(wait_base):
    """Tenacity wait strategy honoring ``retry_after`` before exponential backoff."""

    def __init__(
        self,
        base_ms: int = DEFAULT_BASE_DELAY_MS,
        max_ms: int = DEFAULT_MAX_DELAY_MS,
        *,
        jitter: Callable[[], float] = random.random,
    ) -> None:
        self.base_ms = base_ms
        self.max_ms = max_ms
        self.jitter = jitter

    def __call__(self, retry_state: RetryCallState) -> float:
        error = retry_state.outcome.exception() if retry_state.outcome is not None else None
        retry_after = _field(error, "retry_after")
        if isinstance(retry_after, (int, float)) and not isinstance(retry_after, bool) and retry_after >= 0:
            return float(retry_after)
        delay_ms = compute_delay(retry_state.attempt_number, self.base_ms, self.max_ms, jitter=self.jitter)
        return delay_ms / 1000.0


def _log_retry(retry_state: RetryCallState) -> None:
    error = retry_state.outcome.exception() if retry_state.outcome is not None else None
    delay = retry_state.next_action.sleep if retry_state.next_action is not None else 0.0
    logger.warning(
        "Attempt %d failed (%s), retrying in %.1fs",
        retry_state.attempt_number,
        error,
        delay,
    )


def retry_with_backoff(
    fn: Callable[[], T],
    *,
    max_attempts: int,
    base_delay_ms: int = DEFAULT_BASE_DELAY_MS,
    max_delay_ms: int = DEFAULT_MAX_DELAY_MS,
    should_retry: Callable[[BaseException], bool] = is_retryable_error,
    sleep: Callable[[float], None] = time.sleep,
    jitter: Callable[[], float] = random.random,
) -> T:
    """Call ``fn`` until it succeeds, a terminal error occurs, or attempts run out.

    The last error is re-raised unchanged so callers can branch on its type.
    """
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")

    retrying = Retrying(
        stop=stop_after_attempt(max_attempts),
        wait=BackoffWait(base_delay_ms, max_delay_ms, jitter=jitter),
        retry=retry_if_exception(should_retry),
        sleep=sleep,
        before_sleep=_log_retry,
        reraise=True,
    )
    return retrying(fn)
