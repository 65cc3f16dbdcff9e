"""Key/value outputs consumed by later CI steps."""

from __future__ import annotations

import logging
from pathlib import Path

from vulngate.io import append_text
from vulngate.model import GateResult, ScanResponse, ScanSummary
from vulngate.scanner.severity import count_by_severity

logger = logging.getLogger(__name__)


def build_ci_outputs(
    response: ScanResponse,
    summary: ScanSummary,
    gate: GateResult,
    *,
    ignored_count: int,
    sarif_file: Path | None = None,
) -> dict[str, str]:
    """Build the output map; severity counts cover active vulnerabilities only."""
    active = [vuln for result in response.results for vuln in result.active_vulnerabilities]
    counts = count_by_severity(active)
    return {
        "total-packages": str(summary.total_packages),
        "vulnerable-packages": str(summary.vulnerable_packages),
        "safe-packages": str(summary.safe_packages),
        "critical-count": str(counts.critical),
        "high-count": str(counts.high),
        "medium-count": str(counts.medium),
        "low-count": str(counts.low),
        "has-vulnerabilities": "true" if summary.vulnerable_packages > 0 else "false",
        "ignored-count": str(ignored_count),
        "scan-status": gate.status,
        "sarif-file": str(sarif_file) if sarif_file is not None else "",
    }


def write_ci_outputs(outputs: dict[str, str], output_path: Path | None) -> None:
    """Append ``key=value`` lines to the CI output file, or log them when none is configured."""
    if output_path is None:
        for key, value in outputs.items():
            logger.info("%s=%s", key, value)
        return
    append_text(output_path, "".join(f"{key}={value}\n" for key, value in outputs.items()))
