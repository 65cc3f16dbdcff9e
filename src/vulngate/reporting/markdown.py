"""Markdown job summary for CI step summaries."""

from __future__ import annotations

from vulngate.constants.reporting import SEVERITY_MARKERS, UNKNOWN_SEVERITY_MARKER
from vulngate.model import ScanResponse, ScanSummary, Vulnerability
from vulngate.scanner.severity import classify_severity, count_by_severity
from vulngate.utils import pluralize_vulnerabilities


def _enrichment(vuln: Vulnerability) -> str | None:
    parts: list[str] = []
    if vuln.is_known_exploited is True:
        parts.append("**CISA KEV**")
    if vuln.epss_score is not None:
        parts.append(f"EPSS {vuln.epss_score * 100:.1f}%")
    if vuln.fix_version:
        parts.append(f"fix: `{vuln.fix_version}`")
    return " · ".join(parts) if parts else None


def render_markdown_summary(
    response: ScanResponse,
    summary: ScanSummary,
    *,
    file_name: str,
    ignored_count: int = 0,
) -> str:
    """Render the scan outcome as GitHub-flavoured markdown."""
    active = [vuln for result in response.results for vuln in result.active_vulnerabilities]
    counts = count_by_severity(active)

    lines = [
        "## 🛡️ Dependency Security Scan",
        "",
        f"**File scanned:** `{file_name}`",
        "",
    ]

    if summary.vulnerable_packages == 0:
        lines.append(f"✅ No known vulnerabilities in {summary.total_packages} packages.")
    else:
        lines.append(
            f"⚠️ **{summary.vulnerable_packages} of {summary.total_packages} packages "
            "have known vulnerabilities**"
        )
    lines.append("")

    lines.extend(
        [
            "| Severity | Count |",
            "|----------|-------|",
            f"| {SEVERITY_MARKERS['CRITICAL']} Critical | {counts.critical} |",
            f"| {SEVERITY_MARKERS['HIGH']} High | {counts.high} |",
            f"| {SEVERITY_MARKERS['MEDIUM']} Medium | {counts.medium} |",
            f"| {SEVERITY_MARKERS['LOW']} Low | {counts.low} |",
        ]
    )
    if counts.unknown:
        lines.append(f"| {UNKNOWN_SEVERITY_MARKER} Unknown | {counts.unknown} |")
    lines.append("")

    if ignored_count:
        lines.append(f"_{ignored_count} {pluralize_vulnerabilities(ignored_count)} ignored via ignore file._")
        lines.append("")

    affected = [result for result in response.results if result.affected and result.active_vulnerabilities]
    if affected:
        lines.append("### Vulnerable packages")
        lines.append("")
        for result in affected:
            lines.append(f"#### `{result.package}@{result.version}` ({result.ecosystem})")
            lines.append("")
            for vuln in result.active_vulnerabilities:
                tier = classify_severity(vuln)
                marker = SEVERITY_MARKERS.get(tier, UNKNOWN_SEVERITY_MARKER)
                title = vuln.summary or "No description available"
                lines.append(f"- {marker} **{vuln.id}** ({tier}): {title}")
                enrichment = _enrichment(vuln)
                if enrichment:
                    lines.append(f"  - {enrichment}")
            lines.append("")

    return "\n".join(lines).rstrip() + "\n"
