"""End-to-end scan pipeline: detect, submit, suppress, gate, report."""

from __future__ import annotations

import logging
import os
import time
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from vulngate.api.client import ScanClient
from vulngate.config import ScanSettings
from vulngate.constants.api import UNKNOWN_ERROR
from vulngate.constants.config import ENV_GITHUB_OUTPUT, ENV_GITHUB_STEP_SUMMARY
from vulngate.detector.files import detect_dependency_file, read_file, validate_file
from vulngate.exceptions import ScanApiError
from vulngate.ignore.loader import load_ignore_file
from vulngate.io import append_text
from vulngate.model import GateResult, ScanData, ScanResponse, ScanSummary
from vulngate.reporting.json_report import build_json_report, write_json_report
from vulngate.reporting.markdown import render_markdown_summary
from vulngate.reporting.outputs import build_ci_outputs, write_ci_outputs
from vulngate.reporting.sarif_writer import write_sarif
from vulngate.scanner.gates import evaluate_gates
from vulngate.scanner.ignore import apply_ignores
from vulngate.scanner.severity import has_vector_only_severity
from vulngate.scanner.summary import recompute_summary

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineResult:
    """Everything a caller needs to report on and exit from a scan."""

    response: ScanResponse
    summary: ScanSummary
    gate: GateResult
    ignored_count: int
    duration_ms: int
    file_name: str
    json_report: dict[str, object]


def _display_name(path: Path, workspace: Path) -> str:
    try:
        return path.relative_to(workspace).as_posix()
    except ValueError:
        return path.name


def _resolve_dependency_file(settings: ScanSettings, workspace: Path) -> Path:
    if settings.file_path is not None:
        validate_file(settings.file_path)
        return settings.file_path
    path = detect_dependency_file(workspace)
    logger.info("Detected dependency file: %s", path.name)
    return path


def _warn_vector_only(response: ScanResponse) -> None:
    for result in response.results:
        for vuln in result.vulnerabilities:
            if has_vector_only_severity(vuln):
                logger.warning(
                    "Vulnerability %s in %s has only CVSS vector severity data; classified as UNKNOWN",
                    vuln.id,
                    result.package,
                )


def _env_path(environ: Mapping[str, str], key: str) -> Path | None:
    value = environ.get(key, "").strip()
    return Path(value) if value else None


def run_scan_pipeline(
    settings: ScanSettings,
    workspace: Path,
    *,
    client: ScanClient | None = None,
    now: datetime | None = None,
    environ: Mapping[str, str] | None = None,
) -> PipelineResult:
    """Run one scan and write every configured artifact.

    Raises ``DependencyFileError`` when no file can be scanned,
    ``IgnoreFileError`` for an unreadable ignore file and ``ScanApiError``
    when the API call fails or reports an unsuccessful scan.
    """
    env = os.environ if environ is None else environ
    started = time.monotonic()

    path = _resolve_dependency_file(settings, workspace)
    content = read_file(path)
    file_name = _display_name(path, workspace)
    logger.info("Scanning %s", file_name)

    owns_client = client is None
    if client is None:
        client = ScanClient(
            settings.api_token,
            settings.api_base_url,
            timeout_seconds=settings.timeout_seconds,
            retry_attempts=settings.retry_attempts,
        )
    try:
        response = client.run_scan(file_name, content)
    finally:
        if owns_client:
            client.close()

    if not response.usable:
        raise ScanApiError(
            response.error or "Scan failed without an error message",
            error_type=response.error_type or UNKNOWN_ERROR,
        )
    assert response.data is not None

    ignored_count = 0
    if settings.ignore_file is not None:
        ignore_config = load_ignore_file(settings.ignore_file)
        if ignore_config is None:
            logger.debug("No ignore file at %s", settings.ignore_file)
        else:
            outcome = apply_ignores(response.data.results, ignore_config, now=now)
            ignored_count = outcome.ignored_count
            response = ScanResponse(
                success=response.success,
                data=ScanData(summary=response.data.summary, results=outcome.results),
                error=response.error,
                error_type=response.error_type,
            )
            if ignored_count:
                logger.info("Ignored %d vulnerabilities via %s", ignored_count, settings.ignore_file.name)

    _warn_vector_only(response)

    summary = recompute_summary(response.results)
    gate = evaluate_gates(response, settings.gate_config())
    duration_ms = int((time.monotonic() - started) * 1000)

    if settings.sarif_file is not None:
        write_sarif(settings.sarif_file, response, file_name)
        logger.info("SARIF report written to %s", settings.sarif_file)

    report = build_json_report(response, file_name, scan_duration_ms=duration_ms, generated_at=now)
    if settings.json_file is not None:
        write_json_report(settings.json_file, report)
        logger.info("JSON report written to %s", settings.json_file)

    step_summary = _env_path(env, ENV_GITHUB_STEP_SUMMARY)
    if step_summary is not None and "summary" in settings.output_formats:
        append_text(
            step_summary,
            render_markdown_summary(response, summary, file_name=file_name, ignored_count=ignored_count),
        )

    write_ci_outputs(
        build_ci_outputs(
            response,
            summary,
            gate,
            ignored_count=ignored_count,
            sarif_file=settings.sarif_file,
        ),
        _env_path(env, ENV_GITHUB_OUTPUT),
    )

    return PipelineResult(
        response=response,
        summary=summary,
        gate=gate,
        ignored_count=ignored_count,
        duration_ms=duration_ms,
        file_name=file_name,
        json_report=report,
    )
