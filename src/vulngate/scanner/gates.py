"""Failure gate evaluation for CI pass/fail decisions."""

from __future__ import annotations

from vulngate.constants.severity import THRESHOLD_NONE
from vulngate.model import GateConfig, GateResult, ScanResponse, Vulnerability
from vulngate.scanner.severity import classify_severity, severity_rank
from vulngate.utils import format_number, pluralize_vulnerabilities

SCAN_FAILED_REASON: str = "Scan failed"


def active_vulnerabilities(response: ScanResponse) -> list[Vulnerability]:
    """Flatten every non-ignored vulnerability across all packages."""
    return [vuln for result in response.results for vuln in result.vulnerabilities if not vuln.ignored]


def gated_vulnerabilities(response: ScanResponse, config: GateConfig) -> list[Vulnerability]:
    """Active vulnerabilities, limited to fixable ones when ``only_fixed`` is set."""
    active = active_vulnerabilities(response)
    if config.only_fixed:
        return [vuln for vuln in active if vuln.fix_version is not None]
    return active


def _severity_reason(vulns: list[Vulnerability], threshold: str) -> str | None:
    if threshold == THRESHOLD_NONE:
        return None
    minimum = severity_rank(threshold)
    count = sum(1 for vuln in vulns if severity_rank(classify_severity(vuln)) >= minimum)
    if count == 0:
        return None
    return f"Found {count} {pluralize_vulnerabilities(count)} at or above {threshold} severity"


def _kev_reason(vulns: list[Vulnerability], enabled: bool) -> str | None:
    if not enabled:
        return None
    count = sum(1 for vuln in vulns if vuln.is_known_exploited is True)
    if count == 0:
        return None
    return f"Found {count} CISA Known Exploited {pluralize_vulnerabilities(count)}"


def _epss_reason(vulns: list[Vulnerability], threshold: float | None) -> str | None:
    if threshold is None:
        return None
    # Inclusive: a score equal to the threshold fails the gate.
    count = sum(1 for vuln in vulns if vuln.epss_score is not None and vuln.epss_score >= threshold)
    if count == 0:
        return None
    return (
        f"Found {count} {pluralize_vulnerabilities(count)} with EPSS score at or above {format_number(threshold)}"
    )


def evaluate_gates(response: ScanResponse, config: GateConfig) -> GateResult:
    """Evaluate every enabled gate and collect all violations.

    Gates run in a fixed order (severity, known-exploited, EPSS) and never
    short-circuit, so identical inputs always yield the same joined reason.
    A response without usable data is an ``ERROR`` and no gate is evaluated.
    """
    if not response.usable:
        return GateResult(should_fail=True, status="ERROR", reasons=(SCAN_FAILED_REASON,))

    vulns = gated_vulnerabilities(response, config)
    candidates = (
        _severity_reason(vulns, config.severity_threshold),
        _kev_reason(vulns, config.fail_on_kev),
        _epss_reason(vulns, config.epss_threshold),
    )
    reasons = tuple(reason for reason in candidates if reason is not None)
    should_fail = bool(reasons)
    return GateResult(
        should_fail=should_fail,
        status="FAIL" if should_fail else "PASS",
        reasons=reasons,
    )
