"""Shared utility helpers."""

from __future__ import annotations

from .format import format_number, pluralize_vulnerabilities

__all__ = ["format_number", "pluralize_vulnerabilities"]
