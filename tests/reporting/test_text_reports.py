"""Tests for the table, markdown summary, and CI output reporters."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from vulngate.model import GateResult, PackageResult, ScanData, ScanResponse, ScanSummary, Vulnerability
from vulngate.reporting.markdown import render_markdown_summary
from vulngate.reporting.outputs import build_ci_outputs, write_ci_outputs
from vulngate.reporting.table import collect_rows, render_console_summary, render_table
from vulngate.scanner.summary import recompute_summary


def _make_vuln(vuln_id: str, **overrides: Any) -> Vulnerability:
    """Build a minimal Vulnerability."""
    return Vulnerability(id=vuln_id, **overrides)


def _make_response(*results: PackageResult) -> ScanResponse:
    """Wrap results in a successful response."""
    summary = ScanSummary(total_packages=len(results), vulnerable_packages=0, safe_packages=len(results))
    return ScanResponse(success=True, data=ScanData(summary=summary, results=results))


def _package(name: str, *vulns: Vulnerability) -> PackageResult:
    return PackageResult(ecosystem="npm", package=name, version="1.0.0", affected=bool(vulns), vulnerabilities=vulns)


def _sample() -> ScanResponse:
    return _make_response(
        _package(
            "alpha",
            _make_vuln("CVE-A", cvss_score=9.9, epss_score=0.10),
            _make_vuln("CVE-IGN", cvss_score=9.9, is_known_exploited=True, ignored=True, ignore_reason="ok"),
        ),
        _package("beta", _make_vuln("CVE-B", cvss_score=5.0, epss_score=0.90, fix_version="2.0.0")),
        _package("gamma", _make_vuln("CVE-C", cvss_score=7.5, is_known_exploited=True)),
        _package("delta", _make_vuln("CVE-D", cvss_score=8.0, epss_score=0.10)),
        _package("clean"),
    )


def test_rows_sort_kev_then_epss_then_cvss() -> None:
    """Known-exploited first, then EPSS descending, then CVSS descending."""
    rows = collect_rows(_sample())
    assert [row.vuln_id for row in rows] == ["CVE-C", "CVE-B", "CVE-A", "CVE-D"]


def test_table_renders_columns_and_skips_ignored() -> None:
    table = render_table(_sample())
    lines = table.splitlines()

    assert lines[0].split() == ["Package", "Version", "Vulnerability", "Severity", "EPSS", "KEV", "Fix"]
    assert "CVE-IGN" not in table
    beta_row = next(line for line in lines if "CVE-B" in line)
    assert "90.0%" in beta_row
    assert "2.0.0" in beta_row
    gamma_row = next(line for line in lines if "CVE-C" in line)
    assert "YES" in gamma_row
    assert "\033[" not in table


def test_table_color() -> None:
    """Colored output wraps the severity cell in ANSI codes."""
    assert "\033[31;1m" in render_table(_sample(), color=True)


def test_table_empty() -> None:
    assert render_table(_make_response(_package("clean"))) == "No active vulnerabilities found."


def test_console_summary() -> None:
    response = _sample()
    text = render_console_summary(
        response,
        recompute_summary(response.results),
        file_name="package-lock.json",
        ignored_count=1,
    )
    assert "package-lock.json" in text
    assert "5 scanned / 4 vulnerable / 1 safe" in text
    assert "1 critical · 2 high · 1 medium · 0 low" in text
    assert "Ignored     1" in text


def test_markdown_summary() -> None:
    """The markdown summary reports recomputed totals and active findings only."""
    response = _sample()
    markdown = render_markdown_summary(
        response,
        recompute_summary(response.results),
        file_name="package-lock.json",
        ignored_count=1,
    )

    assert "**File scanned:** `package-lock.json`" in markdown
    assert "4 of 5 packages have known vulnerabilities" in markdown
    assert "| 🔴 Critical | 1 |" in markdown
    assert "| 🟠 High | 2 |" in markdown
    assert "_1 vulnerability ignored via ignore file._" in markdown
    assert "CVE-IGN" not in markdown
    assert "**CISA KEV**" in markdown
    assert "fix: `2.0.0`" in markdown
    assert markdown.endswith("\n")


def test_markdown_summary_clean() -> None:
    response = _make_response(_package("clean"))
    markdown = render_markdown_summary(response, recompute_summary(response.results), file_name="go.sum")
    assert "No known vulnerabilities in 1 packages." in markdown
    assert "### Vulnerable packages" not in markdown


def test_ci_outputs_count_active_only() -> None:
    response = _sample()
    outputs = build_ci_outputs(
        response,
        recompute_summary(response.results),
        GateResult(should_fail=True, status="FAIL", reasons=("x",)),
        ignored_count=1,
        sarif_file=Path("results.sarif"),
    )

    assert outputs == {
        "total-packages": "5",
        "vulnerable-packages": "4",
        "safe-packages": "1",
        "critical-count": "1",
        "high-count": "2",
        "medium-count": "1",
        "low-count": "0",
        "has-vulnerabilities": "true",
        "ignored-count": "1",
        "scan-status": "FAIL",
        "sarif-file": "results.sarif",
    }


def test_write_ci_outputs_appends(tmp_path: Path) -> None:
    """Outputs are appended as key=value lines, preserving existing content."""
    output_file = tmp_path / "github_output"
    output_file.write_text("earlier=1\n", encoding="utf-8")

    write_ci_outputs({"scan-status": "PASS", "ignored-count": "0"}, output_file)

    assert output_file.read_text(encoding="utf-8") == "earlier=1\nscan-status=PASS\nignored-count=0\n"
