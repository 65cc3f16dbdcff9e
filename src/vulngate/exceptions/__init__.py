"""Shared exception hierarchy for Vulngate."""

from __future__ import annotations

from .api import ScanApiError
from .base import VulngateError
from .config import ConfigError
from .detector import DependencyFileError
from .ignore import IgnoreFileError

__all__ = [
    "ConfigError",
    "DependencyFileError",
    "IgnoreFileError",
    "ScanApiError",
    "VulngateError",
]
