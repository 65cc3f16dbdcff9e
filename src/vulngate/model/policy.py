"""Suppression rules and gate policy models."""

from __future__ import annotations

from dataclasses import dataclass

from vulngate.constants.ignore import MISSING_IGNORE_REASON
from vulngate.model.entities import PackageResult
from vulngate.types import ScanStatus, SeverityThreshold


@dataclass(frozen=True)
class IgnoreEntry:
    """A single suppression rule from the ignore file."""

    id: str
    reason: str = MISSING_IGNORE_REASON
    expires: str | None = None


@dataclass(frozen=True)
class IgnoreConfig:
    """Parsed ignore file."""

    ignore: tuple[IgnoreEntry, ...] = ()


@dataclass(frozen=True)
class IgnoreOutcome:
    """Annotated results plus the number of suppressed vulnerabilities."""

    results: tuple[PackageResult, ...]
    ignored_count: int


@dataclass(frozen=True)
class GateConfig:
    """Failure gate policy."""

    severity_threshold: SeverityThreshold = "none"
    fail_on_kev: bool = False
    epss_threshold: float | None = None
    only_fixed: bool = False


@dataclass(frozen=True)
class GateResult:
    """Pass/fail decision with every violated gate listed in evaluation order."""

    should_fail: bool
    status: ScanStatus
    reasons: tuple[str, ...] = ()

    @property
    def reason(self) -> str | None:
        """All reasons joined with ``"; "``, or ``None`` when nothing failed."""
        return "; ".join(self.reasons) if self.reasons else None
