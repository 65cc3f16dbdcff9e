"""Configuration-related exceptions."""

from __future__ import annotations

from vulngate.exceptions.base import VulngateError


class ConfigError(VulngateError, ValueError):
    """Raised when scan settings are invalid."""
