"""Typed errors for the remote scan API."""

from __future__ import annotations

from vulngate.exceptions.base import VulngateError


class ScanApiError(VulngateError):
    """Raised when a scan submission fails.

    ``error_type`` is a machine-readable tag from ``vulngate.constants.api``
    (``auth_error``, ``rate_limit_error``, ...). Callers branch on it rather
    than on the message text. ``retry_after`` is the server-mandated delay in
    seconds, when one was supplied.
    """

    def __init__(
        self,
        message: str,
        *,
        error_type: str,
        status_code: int | None = None,
        retry_after: float | None = None,
        code: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.status_code = status_code
        self.retry_after = retry_after
        self.code = code

    def __repr__(self) -> str:
        return (
            f"ScanApiError({self.message!r}, error_type={self.error_type!r}, "
            f"status_code={self.status_code!r})"
        )
