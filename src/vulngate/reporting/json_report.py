"""Structured JSON report for downstream tooling."""

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from vulngate import __version__
from vulngate.constants.branding import TOOL_IDENTIFIER
from vulngate.constants.reporting import REPORT_TEMP_PREFIX, REPORT_TEMP_SUFFIX
from vulngate.io import write_json_atomic
from vulngate.model import PackageResult, ScanResponse, ScanSummary, Vulnerability
from vulngate.scanner.severity import classify_severity
from vulngate.scanner.summary import recompute_summary


def _vulnerability_entry(result: PackageResult, vuln: Vulnerability) -> dict[str, Any]:
    entry: dict[str, Any] = {
        "id": vuln.id,
        "package": result.package,
        "version": result.version,
        "ecosystem": result.ecosystem,
        "severity": classify_severity(vuln),
        "summary": vuln.summary,
        "cvss_score": vuln.cvss_score,
        "epss_score": vuln.epss_score,
        "is_known_exploited": vuln.is_known_exploited,
        "fix_version": vuln.fix_version,
        "ignored": vuln.ignored,
    }
    if vuln.ignore_reason is not None:
        entry["ignoreReason"] = vuln.ignore_reason
    return entry


def build_json_report(
    response: ScanResponse,
    file_name: str,
    *,
    scan_duration_ms: int | None = None,
    generated_at: datetime | None = None,
) -> dict[str, Any]:
    """Build the JSON report payload.

    The summary is recomputed from annotated results, so suppressed
    vulnerabilities never count toward vulnerable packages. Ignored
    vulnerabilities are still listed, flagged with ``ignored: true``.
    """
    vulnerabilities: list[dict[str, Any]] = []
    ignored_count = 0

    for result in response.results:
        if not result.affected or not result.vulnerabilities:
            continue
        for vuln in result.vulnerabilities:
            if vuln.ignored:
                ignored_count += 1
            vulnerabilities.append(_vulnerability_entry(result, vuln))

    summary = (
        recompute_summary(response.results)
        if response.data is not None
        else ScanSummary(total_packages=0, vulnerable_packages=0, safe_packages=0)
    )
    timestamp = generated_at if generated_at is not None else datetime.now(UTC)

    report: dict[str, Any] = {
        "version": __version__,
        "generatedAt": timestamp.isoformat().replace("+00:00", "Z"),
    }
    if scan_duration_ms is not None:
        report["scanDurationMs"] = scan_duration_ms
    report.update(
        {
            "tool": TOOL_IDENTIFIER,
            "fileScanned": file_name,
            "summary": summary.to_dict(),
            "vulnerabilities": vulnerabilities,
            "ignoredCount": ignored_count,
        }
    )
    return report


def write_json_report(path: Path, report: dict[str, Any]) -> Path:
    """Write the JSON report atomically and return its path."""
    write_json_atomic(
        path=path,
        payload=report,
        temp_prefix=REPORT_TEMP_PREFIX,
        temp_suffix=REPORT_TEMP_SUFFIX,
    )
    return path
