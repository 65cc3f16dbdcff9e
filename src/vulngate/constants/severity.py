"""Constants for CVSS banding and severity ranking."""

from __future__ import annotations

CRITICAL_MIN_CVSS: float = 9.0
HIGH_MIN_CVSS: float = 7.0
MEDIUM_MIN_CVSS: float = 4.0

SEVERITY_CRITICAL: str = "CRITICAL"
SEVERITY_HIGH: str = "HIGH"
SEVERITY_MEDIUM: str = "MEDIUM"
SEVERITY_LOW: str = "LOW"
SEVERITY_UNKNOWN: str = "UNKNOWN"

# UNKNOWN never satisfies an enabled threshold.
SEVERITY_RANK: dict[str, int] = {
    SEVERITY_UNKNOWN: 0,
    SEVERITY_LOW: 1,
    SEVERITY_MEDIUM: 2,
    SEVERITY_HIGH: 3,
    SEVERITY_CRITICAL: 4,
}

THRESHOLD_NONE: str = "none"
VALID_SEVERITY_THRESHOLDS: tuple[str, ...] = ("none", "low", "medium", "high", "critical")

CVSS_VECTOR_PREFIX: str = "CVSS:"
