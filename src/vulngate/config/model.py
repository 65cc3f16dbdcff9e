"""Settings data model for a scan run."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from vulngate.constants.api import DEFAULT_API_BASE_URL, DEFAULT_RETRY_ATTEMPTS, DEFAULT_TIMEOUT_SECONDS
from vulngate.constants.reporting import DEFAULT_OUTPUT_FORMAT
from vulngate.model import GateConfig
from vulngate.types import SeverityThreshold


@dataclass(frozen=True)
class ScanSettings:
    """Resolved, validated inputs for one scan run."""

    api_token: str = field(repr=False)
    workspace: Path = Path(".")
    file_path: Path | None = None
    severity_threshold: SeverityThreshold = "critical"
    fail_on_kev: bool = False
    epss_threshold: float | None = None
    only_fixed: bool = False
    sarif_file: Path | None = None
    ignore_file: Path | None = None
    output_formats: tuple[str, ...] = (DEFAULT_OUTPUT_FORMAT,)
    json_file: Path | None = None
    api_base_url: str = DEFAULT_API_BASE_URL
    retry_attempts: int = DEFAULT_RETRY_ATTEMPTS
    timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS

    def gate_config(self) -> GateConfig:
        """Project the gate-related settings into a ``GateConfig``."""
        return GateConfig(
            severity_threshold=self.severity_threshold,
            fail_on_kev=self.fail_on_kev,
            epss_threshold=self.epss_threshold,
            only_fixed=self.only_fixed,
        )
