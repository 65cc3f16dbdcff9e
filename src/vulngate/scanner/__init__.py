"""Risk gating and scan orchestration package."""

from __future__ import annotations

from typing import Any

__all__ = ["run_scan_pipeline"]


def __getattr__(name: str) -> Any:
    """Lazily expose scanner APIs to avoid import cycles at package import time."""
    if name == "run_scan_pipeline":
        from .orchestrator import run_scan_pipeline

        return run_scan_pipeline
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
