"""Ignore file exceptions."""

from __future__ import annotations

from vulngate.exceptions.base import VulngateError


class IgnoreFileError(VulngateError, ValueError):
    """Raised when an ignore file exists but cannot be read or parsed."""
