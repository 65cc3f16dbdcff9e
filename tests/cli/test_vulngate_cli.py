"""Tests for the vulngate command-line interface."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from vulngate.cli.main import build_parser, main
from vulngate.exceptions import DependencyFileError, ScanApiError
from vulngate.model import GateResult, PackageResult, ScanData, ScanResponse, ScanSummary, Vulnerability
from vulngate.scanner.orchestrator import PipelineResult


def _make_pipeline_result(gate: GateResult | None = None) -> PipelineResult:
    """Build a minimal PipelineResult with one critical finding."""
    vuln = Vulnerability(id="CVE-2024-9999", cvss_score=9.9, epss_score=0.42)
    result = PackageResult(ecosystem="PyPI", package="requests", version="2.0.0", affected=True, vulnerabilities=(vuln,))
    summary = ScanSummary(total_packages=1, vulnerable_packages=1, safe_packages=0)
    return PipelineResult(
        response=ScanResponse(success=True, data=ScanData(summary=summary, results=(result,))),
        summary=summary,
        gate=gate or GateResult(should_fail=False, status="PASS"),
        ignored_count=0,
        duration_ms=12,
        file_name="requirements.txt",
        json_report={"tool": "vulngate", "ignoredCount": 0},
    )


def _scan_args(tmp_path: Path, *extra: str) -> list[str]:
    return ["scan", "--workspace", str(tmp_path), "--api-token", "tok", *extra]


def test_parser_defaults_leave_settings_unset(tmp_path: Path) -> None:
    """Unset flags parse to None so env and config values can apply."""
    args = build_parser().parse_args(["scan", "--workspace", str(tmp_path)])
    assert args.severity_threshold is None
    assert args.fail_on_kev is None
    assert args.output_format is None


def test_parser_boolean_flags(tmp_path: Path) -> None:
    args = build_parser().parse_args(["scan", "--fail-on-kev", "--no-fail-on-critical"])
    assert args.fail_on_kev is True
    assert args.fail_on_critical is False


def test_parser_rejects_unknown_threshold() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args(["scan", "--severity-threshold", "extreme"])


def test_scan_pass_returns_zero(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    with patch("vulngate.cli.main.run_scan_pipeline", return_value=_make_pipeline_result()) as pipeline:
        exit_code = main(_scan_args(tmp_path))

    assert exit_code == 0
    settings = pipeline.call_args.args[0]
    assert settings.api_token == "tok"
    assert "requirements.txt" in capsys.readouterr().out


def test_scan_gate_failure_returns_one(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    gate = GateResult(
        should_fail=True,
        status="FAIL",
        reasons=("Found 1 vulnerability at or above critical severity",),
    )
    with patch("vulngate.cli.main.run_scan_pipeline", return_value=_make_pipeline_result(gate)):
        exit_code = main(_scan_args(tmp_path))

    assert exit_code == 1
    assert "Security gate failed: Found 1 vulnerability at or above critical severity" in capsys.readouterr().err


def test_table_and_json_output(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Table and JSON renderings go to stdout when requested."""
    with patch("vulngate.cli.main.run_scan_pipeline", return_value=_make_pipeline_result()):
        exit_code = main(_scan_args(tmp_path, "--output-format", "table,json", "--no-color"))

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "CVE-2024-9999" in out
    assert "42.0%" in out
    json_start = out.index("{")
    assert json.loads(out[json_start:]) == {"tool": "vulngate", "ignoredCount": 0}


def test_missing_token_is_config_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(["scan", "--workspace", str(tmp_path)])
    assert exit_code == 2
    assert "Configuration error: api_token is required" in capsys.readouterr().err


def test_invalid_config_value(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(_scan_args(tmp_path, "--retry-attempts", "50"))
    assert exit_code == 2
    assert "retry_attempts must be between 1 and 10" in capsys.readouterr().err


def test_missing_dependency_file_returns_two(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    with patch(
        "vulngate.cli.main.run_scan_pipeline",
        side_effect=DependencyFileError("No supported dependency files found"),
    ):
        exit_code = main(_scan_args(tmp_path))
    assert exit_code == 2
    assert "No supported dependency files found" in capsys.readouterr().err


def test_api_error_prints_tip_and_sets_status(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """API failures exit 1, print a tip, and record an ERROR scan status."""
    output_file = tmp_path / "gh_output"
    monkeypatch.setenv("GITHUB_OUTPUT", str(output_file))
    error = ScanApiError("Authentication failed.", error_type="auth_error", status_code=401)

    with patch("vulngate.cli.main.run_scan_pipeline", side_effect=error):
        exit_code = main(_scan_args(tmp_path))

    err = capsys.readouterr().err
    assert exit_code == 1
    assert "Scan failed (auth_error): Authentication failed." in err
    assert "Tip: Verify your API token" in err
    assert output_file.read_text(encoding="utf-8") == "scan-status=ERROR\n"


def test_report_write_failure_returns_one_and_sets_status(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """An unwritable report path exits 1 and still records an ERROR scan status."""
    output_file = tmp_path / "gh_output"
    monkeypatch.setenv("GITHUB_OUTPUT", str(output_file))
    error = PermissionError(13, "Permission denied", "/readonly/results.sarif")

    with patch("vulngate.cli.main.run_scan_pipeline", side_effect=error):
        exit_code = main(_scan_args(tmp_path))

    assert exit_code == 1
    assert "Output error:" in capsys.readouterr().err
    assert output_file.read_text(encoding="utf-8") == "scan-status=ERROR\n"


def test_workspace_defaults_to_github_workspace(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("GITHUB_WORKSPACE", str(tmp_path))
    with patch("vulngate.cli.main.run_scan_pipeline", return_value=_make_pipeline_result()) as pipeline:
        main(["scan", "--api-token", "tok"])
    assert pipeline.call_args.args[1] == tmp_path.resolve()


def test_validate_config_ok(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (tmp_path / ".vulngate.yml").write_text("api_token: from-file\nseverity_threshold: high\n", encoding="utf-8")
    exit_code = main(["validate-config", "--workspace", str(tmp_path)])
    assert exit_code == 0
    assert "Configuration is valid." in capsys.readouterr().out


def test_validate_config_reports_unknown_key(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (tmp_path / ".vulngate.yml").write_text("api_token: t\nseverity_treshold: high\n", encoding="utf-8")
    exit_code = main(["validate-config", "--workspace", str(tmp_path)])
    assert exit_code == 2
    assert "did you mean `severity_threshold`" in capsys.readouterr().err


def test_main_runs_real_pipeline(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Without patches, a missing lockfile surfaces as an input error."""
    assert main(_scan_args(tmp_path, "--ignore-file", "")) == 2
    assert "Input error" in capsys.readouterr().err
