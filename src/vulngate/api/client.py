"""HTTP client for the remote vulnerability scan API."""

from __future__ import annotations

import errno
import logging
import socket
import time
from collections.abc import Callable
from typing import Any

import httpx

from vulngate import __version__
from vulngate.api.response import validate_response
from vulngate.api.retry import retry_with_backoff
from vulngate.constants.api import (
    AUTH_ERROR,
    DEFAULT_RETRY_ATTEMPTS,
    DEFAULT_TIMEOUT_SECONDS,
    FILE_SIZE_ERROR,
    MAX_CONTENT_BYTES,
    NETWORK_ERROR,
    PARSE_ERROR,
    RATE_LIMIT_ERROR,
    SCAN_ENDPOINT_PATH,
    SERVER_ERROR,
    SERVER_ERROR_STATUSES,
    TIMEOUT_ERROR,
    UNKNOWN_ERROR,
    VALIDATION_ERROR,
)
from vulngate.constants.branding import TOOL_IDENTIFIER
from vulngate.exceptions import ScanApiError
from vulngate.model import ScanResponse

logger = logging.getLogger(__name__)


def parse_retry_after(value: str | None) -> int | None:
    """Parse a ``Retry-After`` header given in whole seconds."""
    if value is None:
        return None
    try:
        seconds = int(value.strip())
    except ValueError:
        return None
    return seconds if seconds >= 0 else None


def _transport_code(exc: httpx.TransportError) -> str | None:
    """Derive a transport error code (``ECONNRESET``, ``ENOTFOUND``, ...) from an httpx error."""
    if isinstance(exc, httpx.TimeoutException):
        return "ECONNABORTED"

    cause: BaseException | None = exc.__cause__ or exc.__context__
    while cause is not None:
        if isinstance(cause, socket.gaierror):
            return "ENOTFOUND"
        if isinstance(cause, TimeoutError):
            return "ETIMEDOUT"
        if isinstance(cause, OSError) and cause.errno in errno.errorcode:
            return errno.errorcode[cause.errno]
        cause = cause.__cause__ or cause.__context__

    if isinstance(exc, (httpx.ReadError, httpx.WriteError, httpx.RemoteProtocolError)):
        return "ECONNRESET"
    return None


def _body_of(response: httpx.Response) -> dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def error_from_transport(exc: httpx.TransportError) -> ScanApiError:
    """Convert an httpx transport failure (no response received) to a typed error."""
    code = _transport_code(exc)
    if isinstance(exc, httpx.TimeoutException):
        return ScanApiError(
            f"Request timed out: {exc}. The scan did not complete within the configured timeout.",
            error_type=TIMEOUT_ERROR,
            code=code,
        )
    return ScanApiError(
        f"Network error: {exc}. Check your internet connection and verify the scan API is accessible.",
        error_type=NETWORK_ERROR,
        code=code,
    )


def error_from_response(response: httpx.Response) -> ScanApiError:
    """Convert a non-success HTTP response to a typed error."""
    status = response.status_code
    body = _body_of(response)
    upstream_message = body.get("error") if isinstance(body.get("error"), str) else None

    if status == 401:
        return ScanApiError(
            "Authentication failed. Verify your API token has 'scan:write' ability. "
            "Create a token at https://geekwala.com/dashboard/tokens",
            error_type=AUTH_ERROR,
            status_code=status,
        )

    if status == 422:
        upstream_type = body.get("type") if isinstance(body.get("type"), str) else None
        return ScanApiError(
            f"Validation error: {upstream_message or 'Validation error'}",
            error_type=upstream_type or VALIDATION_ERROR,
            status_code=status,
        )

    if status == 429:
        retry_after = parse_retry_after(response.headers.get("retry-after"))
        wait_hint = f"Wait {retry_after} seconds" if retry_after is not None else "Wait a few minutes"
        return ScanApiError(
            f"Rate limit exceeded. {wait_hint} and try again.",
            error_type=RATE_LIMIT_ERROR,
            status_code=status,
            retry_after=float(retry_after) if retry_after is not None else None,
        )

    if status in SERVER_ERROR_STATUSES:
        return ScanApiError(
            f"Scan API is temporarily unavailable ({status}). This is usually transient - retrying automatically.",
            error_type=SERVER_ERROR,
            status_code=status,
        )

    return ScanApiError(
        f"API error ({status}): {upstream_message or response.reason_phrase}",
        error_type=UNKNOWN_ERROR,
        status_code=status,
    )


class ScanClient:
    """Submits dependency files to the scan API with retry and validation."""

    def __init__(
        self,
        api_token: str,
        base_url: str,
        *,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        retry_attempts: int = DEFAULT_RETRY_ATTEMPTS,
        transport: httpx.BaseTransport | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._retry_attempts = retry_attempts
        self._sleep = sleep
        self._client = httpx.Client(
            base_url=base_url,
            timeout=timeout_seconds,
            transport=transport,
            headers={
                "Authorization": f"Bearer {api_token}",
                "Content-Type": "application/json",
                "Accept": "application/json",
                "User-Agent": f"{TOOL_IDENTIFIER}/{__version__}",
            },
        )

    def __enter__(self) -> ScanClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def run_scan(self, file_name: str, content: str) -> ScanResponse:
        """Submit one file and return the validated response.

        Oversized content is rejected before any request is made. Transient
        failures are retried; anything else propagates as ``ScanApiError``.
        """
        size_bytes = len(content.encode("utf-8"))
        if size_bytes > MAX_CONTENT_BYTES:
            raise ScanApiError(
                f"File size ({size_bytes / 1024:.2f}KB) exceeds maximum allowed size "
                f"({MAX_CONTENT_BYTES // 1024}KB)",
                error_type=FILE_SIZE_ERROR,
                status_code=400,
            )

        payload = {"file_name": file_name, "content": content}
        raw = retry_with_backoff(
            lambda: self._submit(payload),
            max_attempts=self._retry_attempts,
            sleep=self._sleep,
        )
        return validate_response(raw)

    def _submit(self, payload: dict[str, str]) -> object:
        logger.debug("POST %s (%d bytes)", SCAN_ENDPOINT_PATH, len(payload["content"]))
        try:
            response = self._client.post(SCAN_ENDPOINT_PATH, json=payload)
        except httpx.TransportError as exc:
            raise error_from_transport(exc) from exc

        if not response.is_success:
            raise error_from_response(response)

        try:
            return response.json()
        except ValueError as exc:
            raise ScanApiError(
                "Invalid API response: body is not valid JSON",
                error_type=PARSE_ERROR,
                status_code=response.status_code,
            ) from exc
