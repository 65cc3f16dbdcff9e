"""Shape validation for untrusted scan API payloads.

``validate_response`` is the boundary between raw JSON and the typed model;
nothing downstream inspects the raw payload.
"""

from __future__ import annotations

from typing import Any

from vulngate.constants.api import PARSE_ERROR
from vulngate.exceptions import ScanApiError
from vulngate.model import (
    PackageResult,
    Reference,
    ScanData,
    ScanResponse,
    ScanSummary,
    SeverityEntry,
    Vulnerability,
)


def _parse_error(message: str) -> ScanApiError:
    return ScanApiError(f"Invalid API response: {message}", error_type=PARSE_ERROR)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _optional_float(value: Any) -> float | None:
    return float(value) if _is_number(value) else None


def _optional_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _string_tuple(value: Any) -> tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(item for item in value if isinstance(item, str))


def _count(value: Any) -> int:
    return int(value) if _is_number(value) else 0


def _parse_severity(value: Any) -> tuple[SeverityEntry, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(
        SeverityEntry(type=str(item.get("type", "")), score=str(item.get("score", "")))
        for item in value
        if isinstance(item, dict)
    )


def _parse_references(value: Any) -> tuple[Reference, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(
        Reference(type=str(item.get("type", "")), url=str(item["url"]))
        for item in value
        if isinstance(item, dict) and isinstance(item.get("url"), str)
    )


def _parse_vulnerability(raw: Any, index: int) -> Vulnerability:
    if not isinstance(raw, dict) or not isinstance(raw.get("id"), str):
        raise _parse_error(f"vulnerability #{index} must be an object with a string id")

    known_exploited = raw.get("is_known_exploited", raw.get("is_kev"))
    return Vulnerability(
        id=raw["id"],
        aliases=_string_tuple(raw.get("aliases")),
        summary=_optional_str(raw.get("summary")),
        details=_optional_str(raw.get("details")),
        cvss_score=_optional_float(raw.get("cvss_score")),
        severity=_parse_severity(raw.get("severity")),
        epss_score=_optional_float(raw.get("epss_score")),
        epss_percentile=_optional_float(raw.get("epss_percentile")),
        is_known_exploited=known_exploited if isinstance(known_exploited, bool) else None,
        fix_version=_optional_str(raw.get("fix_version")),
        references=_parse_references(raw.get("references")),
        cwe_ids=_string_tuple(raw.get("cwe_ids")),
    )


def _parse_result(raw: Any, index: int) -> PackageResult:
    if not isinstance(raw, dict):
        raise _parse_error(f"result #{index} must be an object")

    vulnerabilities_raw = raw.get("vulnerabilities") or []
    if not isinstance(vulnerabilities_raw, list):
        raise _parse_error(f"result #{index} vulnerabilities must be a list")

    return PackageResult(
        ecosystem=str(raw.get("ecosystem", "")),
        package=str(raw.get("package", "")),
        version=str(raw.get("version", "")),
        affected=bool(raw.get("affected", False)),
        vulnerabilities=tuple(_parse_vulnerability(item, pos) for pos, item in enumerate(vulnerabilities_raw)),
        severity=_optional_str(raw.get("severity")),
    )


def validate_response(raw: object) -> ScanResponse:
    """Validate and convert a decoded JSON payload into a ``ScanResponse``.

    Raises ``ScanApiError`` tagged ``parse_error`` when the payload is not an
    object, or when a successful payload lacks a numeric
    ``data.summary.total_packages`` or a ``data.results`` list.
    """
    if not isinstance(raw, dict):
        raise _parse_error("expected a JSON object")

    success = bool(raw.get("success"))
    data = raw.get("data")

    # Any present data payload is validated, even an empty one.
    if not success or data is None:
        return ScanResponse(
            success=success,
            error=_optional_str(raw.get("error")),
            error_type=_optional_str(raw.get("type")),
        )

    if not isinstance(data, dict):
        raise _parse_error("data must be an object")

    summary_raw = data.get("summary")
    if not isinstance(summary_raw, dict) or not _is_number(summary_raw.get("total_packages")):
        raise _parse_error("data.summary.total_packages must be a number")

    results_raw = data.get("results")
    if not isinstance(results_raw, list):
        raise _parse_error("data.results must be a list")

    summary = ScanSummary(
        total_packages=_count(summary_raw.get("total_packages")),
        vulnerable_packages=_count(summary_raw.get("vulnerable_packages")),
        safe_packages=_count(summary_raw.get("safe_packages")),
    )
    results = tuple(_parse_result(item, index) for index, item in enumerate(results_raw))
    return ScanResponse(success=True, data=ScanData(summary=summary, results=results))
