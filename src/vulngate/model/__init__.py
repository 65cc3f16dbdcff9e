"""Core data models for Vulngate."""

from .entities import (
    PackageResult,
    Reference,
    ScanData,
    ScanResponse,
    ScanSummary,
    SeverityCounts,
    SeverityEntry,
    Vulnerability,
)
from .policy import GateConfig, GateResult, IgnoreConfig, IgnoreEntry, IgnoreOutcome

__all__ = [
    "GateConfig",
    "GateResult",
    "IgnoreConfig",
    "IgnoreEntry",
    "IgnoreOutcome",
    "PackageResult",
    "Reference",
    "ScanData",
    "ScanResponse",
    "ScanSummary",
    "SeverityCounts",
    "SeverityEntry",
    "Vulnerability",
]
