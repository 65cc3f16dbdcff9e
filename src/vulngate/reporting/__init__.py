"""Reporting package for scan outputs."""

from __future__ import annotations

from typing import Any

__all__ = [
    "build_ci_outputs",
    "build_json_report",
    "build_sarif_log",
    "render_markdown_summary",
    "render_table",
]


def __getattr__(name: str) -> Any:
    """Lazily expose reporting APIs to avoid import cycles at package import time."""
    if name == "build_ci_outputs":
        from .outputs import build_ci_outputs

        return build_ci_outputs
    if name == "build_json_report":
        from .json_report import build_json_report

        return build_json_report
    if name == "build_sarif_log":
        from .sarif_writer import build_sarif_log

        return build_sarif_log
    if name == "render_markdown_summary":
        from .markdown import render_markdown_summary

        return render_markdown_summary
    if name == "render_table":
        from .table import render_table

        return render_table
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
