"""CVSS-based severity classification.

Everything here is pure: classification is called repeatedly on the same
vulnerabilities by the summary, gate, and reporting code.
"""

from __future__ import annotations

import math
import re
from collections import Counter
from collections.abc import Iterable

from vulngate.constants.severity import (
    CRITICAL_MIN_CVSS,
    CVSS_VECTOR_PREFIX,
    HIGH_MIN_CVSS,
    MEDIUM_MIN_CVSS,
    SEVERITY_CRITICAL,
    SEVERITY_HIGH,
    SEVERITY_LOW,
    SEVERITY_MEDIUM,
    SEVERITY_RANK,
    SEVERITY_UNKNOWN,
)
from vulngate.model import SeverityCounts, Vulnerability
from vulngate.types import SeverityTier


def severity_from_cvss(score: float) -> SeverityTier:
    """Map a 0.0-10.0 CVSS score to a severity tier using fixed bands."""
    if score >= CRITICAL_MIN_CVSS:
        return "CRITICAL"
    if score >= HIGH_MIN_CVSS:
        return "HIGH"
    if score >= MEDIUM_MIN_CVSS:
        return "MEDIUM"
    if score > 0:
        return "LOW"
    return "UNKNOWN"


# Leading decimal number, so "7.5 (HIGH)" reads as 7.5 and "CVSS:3.1/..." does not match.
_LEADING_NUMBER_RE = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def _parse_score(raw: str) -> float | None:
    match = _LEADING_NUMBER_RE.match(raw)
    if match is None:
        return None
    value = float(match.group(1))
    return value if math.isfinite(value) else None


def classify_severity(vuln: Vulnerability) -> SeverityTier:
    """Return the severity tier for a vulnerability.

    ``cvss_score`` wins when present. Otherwise the first ``severity`` entry
    whose score starts with a finite number is used, regardless of its type.
    Anything else degrades to ``UNKNOWN``.
    """
    if vuln.cvss_score is not None:
        return severity_from_cvss(vuln.cvss_score)

    for entry in vuln.severity:
        score = _parse_score(entry.score)
        if score is not None:
            return severity_from_cvss(score)

    return "UNKNOWN"


def has_vector_only_severity(vuln: Vulnerability) -> bool:
    """Whether severity data exists only as CVSS vector strings with no numeric score."""
    if vuln.cvss_score is not None or not vuln.severity:
        return False
    if any(_parse_score(entry.score) is not None for entry in vuln.severity):
        return False
    return any(entry.score.startswith(CVSS_VECTOR_PREFIX) for entry in vuln.severity)


def severity_rank(tier: str) -> int:
    """Rank a tier or threshold name; unknown names rank 0."""
    return SEVERITY_RANK.get(tier.upper(), 0)


def count_by_severity(vulnerabilities: Iterable[Vulnerability]) -> SeverityCounts:
    """Count vulnerabilities per tier."""
    counts = Counter(classify_severity(vuln) for vuln in vulnerabilities)
    return SeverityCounts(
        critical=counts.get(SEVERITY_CRITICAL, 0),
        high=counts.get(SEVERITY_HIGH, 0),
        medium=counts.get(SEVERITY_MEDIUM, 0),
        low=counts.get(SEVERITY_LOW, 0),
        unknown=counts.get(SEVERITY_UNKNOWN, 0),
    )
