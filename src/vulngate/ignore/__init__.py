"""Ignore file loading."""

from __future__ import annotations

from .loader import load_ignore_file, parse_ignore_document

__all__ = ["load_ignore_file", "parse_ignore_document"]
