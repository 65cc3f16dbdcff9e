"""Dependency file detection exceptions."""

from __future__ import annotations

from vulngate.exceptions.base import VulngateError


class DependencyFileError(VulngateError, FileNotFoundError):
    """Raised when no usable dependency file can be found or read."""
