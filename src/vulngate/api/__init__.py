"""Remote scan API client, retry policy, and response validation."""

from __future__ import annotations

from .client import ScanClient
from .response import validate_response
from .retry import compute_delay, is_retryable_error, retry_with_backoff

__all__ = [
    "ScanClient",
    "compute_delay",
    "is_retryable_error",
    "retry_with_backoff",
    "validate_response",
]
