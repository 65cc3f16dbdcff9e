"""Dependency file detection."""

from __future__ import annotations

from .files import detect_dependency_file, read_file, validate_file
from .patterns import get_file_priority, is_file_supported, supported_file_names

__all__ = [
    "detect_dependency_file",
    "get_file_priority",
    "is_file_supported",
    "read_file",
    "supported_file_names",
    "validate_file",
]
