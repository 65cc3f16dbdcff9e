"""Package totals that account for suppressed vulnerabilities."""

from __future__ import annotations

from collections.abc import Iterable

from vulngate.model import PackageResult, ScanSummary


def recompute_summary(results: Iterable[PackageResult]) -> ScanSummary:
    """Recompute package totals from annotated results.

    A package is vulnerable only when upstream flagged it as affected and it
    still has at least one vulnerability that is not ignored. The upstream
    summary is never reused once ignores may have been applied.
    """
    total = 0
    vulnerable = 0
    for result in results:
        total += 1
        if result.affected and any(not vuln.ignored for vuln in result.vulnerabilities):
            vulnerable += 1

    return ScanSummary(
        total_packages=total,
        vulnerable_packages=vulnerable,
        safe_packages=total - vulnerable,
    )
