"""Terminal table of active vulnerabilities."""

from __future__ import annotations

from dataclasses import dataclass

from vulngate.constants.branding import ASCII_LOGO_LINES, SCAN_SUMMARY_TITLE
from vulngate.constants.reporting import ANSI_RESET, SEVERITY_COLORS, TABLE_COLUMN_GAP, TABLE_EMPTY_VALUE
from vulngate.model import PackageResult, ScanResponse, ScanSummary, Vulnerability
from vulngate.scanner.severity import classify_severity, count_by_severity

TABLE_HEADERS: tuple[str, ...] = ("Package", "Version", "Vulnerability", "Severity", "EPSS", "KEV", "Fix")


@dataclass(frozen=True)
class TableRow:
    """One active vulnerability flattened for display."""

    package: str
    version: str
    vuln_id: str
    severity: str
    epss_score: float | None
    is_known_exploited: bool
    cvss_score: float | None
    fix_version: str | None

    def cells(self) -> tuple[str, ...]:
        epss = f"{self.epss_score * 100:.1f}%" if self.epss_score is not None else TABLE_EMPTY_VALUE
        return (
            self.package,
            self.version,
            self.vuln_id,
            self.severity,
            epss,
            "YES" if self.is_known_exploited else TABLE_EMPTY_VALUE,
            self.fix_version or TABLE_EMPTY_VALUE,
        )


def _row(result: PackageResult, vuln: Vulnerability) -> TableRow:
    return TableRow(
        package=result.package,
        version=result.version,
        vuln_id=vuln.id,
        severity=classify_severity(vuln),
        epss_score=vuln.epss_score,
        is_known_exploited=vuln.is_known_exploited is True,
        cvss_score=vuln.cvss_score,
        fix_version=vuln.fix_version,
    )


def _sort_key(row: TableRow) -> tuple[int, float, float]:
    # Known-exploited first, then EPSS descending, then CVSS descending.
    return (
        0 if row.is_known_exploited else 1,
        -(row.epss_score or 0.0),
        -(row.cvss_score or 0.0),
    )


def collect_rows(response: ScanResponse) -> list[TableRow]:
    """Flatten active vulnerabilities of affected packages into sorted rows."""
    rows = [
        _row(result, vuln)
        for result in response.results
        if result.affected
        for vuln in result.active_vulnerabilities
    ]
    return sorted(rows, key=_sort_key)


def _colorize_severity(severity: str, padded: str) -> str:
    color = SEVERITY_COLORS.get(severity, "")
    return f"{color}{padded}{ANSI_RESET}" if color else padded


def render_table(response: ScanResponse, *, color: bool = False) -> str:
    """Render active vulnerabilities as an aligned plain-text table.

    Returns a short notice instead of a table when nothing is active.
    """
    rows = collect_rows(response)
    if not rows:
        return "No active vulnerabilities found."

    cell_rows = [row.cells() for row in rows]
    widths = [len(header) for header in TABLE_HEADERS]
    for cells in cell_rows:
        widths = [max(width, len(cell)) for width, cell in zip(widths, cells, strict=True)]

    def _line(cells: tuple[str, ...], *, severity: str | None = None) -> str:
        padded = [cell.ljust(width) for cell, width in zip(cells, widths, strict=True)]
        if color and severity is not None:
            padded[3] = _colorize_severity(severity, padded[3])
        return TABLE_COLUMN_GAP.join(padded).rstrip()

    lines = [_line(TABLE_HEADERS), TABLE_COLUMN_GAP.join("-" * width for width in widths)]
    for row, cells in zip(rows, cell_rows, strict=True):
        lines.append(_line(cells, severity=row.severity))
    return "\n".join(lines)


def render_console_summary(
    response: ScanResponse,
    summary: ScanSummary,
    *,
    file_name: str,
    ignored_count: int,
) -> str:
    """Render the short human-readable summary printed after a scan."""
    active = [vuln for result in response.results for vuln in result.active_vulnerabilities]
    counts = count_by_severity(active)
    lines = [
        "",
        f"  {ASCII_LOGO_LINES[0]}",
        f"  {SCAN_SUMMARY_TITLE}",
        "  " + "─" * 38,
        "",
        f"  File        {file_name}",
        (
            f"  Packages    {summary.total_packages} scanned / "
            f"{summary.vulnerable_packages} vulnerable / {summary.safe_packages} safe"
        ),
        (
            f"  Severities  {counts.critical} critical · {counts.high} high · "
            f"{counts.medium} medium · {counts.low} low"
        ),
    ]
    if counts.unknown:
        lines.append(f"  Unscored    {counts.unknown}")
    if ignored_count:
        lines.append(f"  Ignored     {ignored_count}")
    lines.append("")
    return "\n".join(lines)
