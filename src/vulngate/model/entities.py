"""Frozen dataclasses describing a scan response."""

from __future__ import annotations

from dataclasses import dataclass

from vulngate.types import JsonObject


@dataclass(frozen=True)
class SeverityEntry:
    """One ``{type, score}`` severity record as reported upstream."""

    type: str
    score: str


@dataclass(frozen=True)
class Reference:
    """Advisory or web reference attached to a vulnerability."""

    type: str
    url: str


@dataclass(frozen=True)
class Vulnerability:
    """A single reported weakness affecting a package.

    ``ignored`` and ``ignore_reason`` are only ever set on the copies produced
    by ``vulngate.scanner.ignore.apply_ignores``.
    """

    id: str
    aliases: tuple[str, ...] = ()
    summary: str | None = None
    details: str | None = None
    cvss_score: float | None = None
    severity: tuple[SeverityEntry, ...] = ()
    epss_score: float | None = None
    epss_percentile: float | None = None
    is_known_exploited: bool | None = None
    fix_version: str | None = None
    references: tuple[Reference, ...] = ()
    cwe_ids: tuple[str, ...] = ()
    ignored: bool = False
    ignore_reason: str | None = None

    @property
    def identifiers(self) -> tuple[str, ...]:
        """The primary id followed by every alias."""
        return (self.id, *self.aliases)


@dataclass(frozen=True)
class PackageResult:
    """Scan outcome for one dependency."""

    ecosystem: str
    package: str
    version: str
    affected: bool
    vulnerabilities: tuple[Vulnerability, ...] = ()
    severity: str | None = None

    @property
    def active_vulnerabilities(self) -> tuple[Vulnerability, ...]:
        return tuple(vuln for vuln in self.vulnerabilities if not vuln.ignored)


@dataclass(frozen=True)
class ScanSummary:
    """Package-level totals."""

    total_packages: int
    vulnerable_packages: int
    safe_packages: int

    def to_dict(self) -> JsonObject:
        return {
            "total_packages": self.total_packages,
            "vulnerable_packages": self.vulnerable_packages,
            "safe_packages": self.safe_packages,
        }


@dataclass(frozen=True)
class ScanData:
    """The ``data`` block of a successful scan response."""

    summary: ScanSummary
    results: tuple[PackageResult, ...]


@dataclass(frozen=True)
class ScanResponse:
    """Validated scan API response."""

    success: bool
    data: ScanData | None = None
    error: str | None = None
    error_type: str | None = None

    @property
    def usable(self) -> bool:
        """Whether the response carries scan data the gates can evaluate."""
        return self.success and self.data is not None

    @property
    def results(self) -> tuple[PackageResult, ...]:
        return self.data.results if self.data is not None else ()


@dataclass(frozen=True)
class SeverityCounts:
    """Vulnerability counts per severity tier."""

    critical: int = 0
    high: int = 0
    medium: int = 0
    low: int = 0
    unknown: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "critical": self.critical,
            "high": self.high,
            "medium": self.medium,
            "low": self.low,
            "unknown": self.unknown,
        }
