"""Constants for vulnerability suppression."""

from __future__ import annotations

DEFAULT_IGNORE_REASON: str = "Ignored"
MISSING_IGNORE_REASON: str = "No reason provided"
IGNORE_LIST_KEY: str = "ignore"
