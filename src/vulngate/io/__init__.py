"""Shared file I/O helpers."""

from .json_io import append_text, write_json_atomic, write_text_atomic

__all__ = ["append_text", "write_json_atomic", "write_text_atomic"]
