"""Base exception for Vulngate."""

from __future__ import annotations


class VulngateError(Exception):
    """Base class for all errors raised by Vulngate."""
