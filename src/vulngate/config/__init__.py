"""Scan settings loading and validation.

This package facade re-exports the public names so callers can use
``from vulngate.config import ...``.
"""

from __future__ import annotations

from vulngate.config.loader import load_settings, read_config_file
from vulngate.config.model import ScanSettings

__all__ = ["ScanSettings", "load_settings", "read_config_file"]
