"""Tests for ignore expiry filtering and suppression matching."""

from __future__ import annotations

import logging
from datetime import UTC, datetime

import pytest

from vulngate.model import (
    GateConfig,
    IgnoreConfig,
    IgnoreEntry,
    PackageResult,
    ScanData,
    ScanResponse,
    ScanSummary,
    Vulnerability,
)
from vulngate.scanner.gates import evaluate_gates
from vulngate.scanner.ignore import apply_ignores, filter_expired, parse_expiry

NOW: datetime = datetime(2025, 6, 1, 12, 0, tzinfo=UTC)


def _make_vuln(vuln_id: str = "CVE-2024-1111", **overrides: object) -> Vulnerability:
    """Build a vulnerability that trips every gate."""
    defaults: dict[str, object] = {
        "id": vuln_id,
        "cvss_score": 9.8,
        "is_known_exploited": True,
        "epss_score": 0.8,
    }
    defaults.update(overrides)
    return Vulnerability(**defaults)  # type: ignore[arg-type]


def _make_result(*vulns: Vulnerability) -> PackageResult:
    """Build an affected package."""
    return PackageResult(ecosystem="npm", package="lodash", version="4.17.20", affected=True, vulnerabilities=vulns)


def _response(results: tuple[PackageResult, ...]) -> ScanResponse:
    """Wrap results in a successful response."""
    summary = ScanSummary(total_packages=len(results), vulnerable_packages=len(results), safe_packages=0)
    return ScanResponse(success=True, data=ScanData(summary=summary, results=results))


ALL_GATES = GateConfig(severity_threshold="critical", fail_on_kev=True, epss_threshold=0.5)


def test_ignore_without_expiry_suppresses_all_gates() -> None:
    """A matching entry with no expiry suppresses the vulnerability entirely."""
    outcome = apply_ignores(
        (_make_result(_make_vuln()),),
        IgnoreConfig(ignore=(IgnoreEntry(id="CVE-2024-1111", reason="accepted risk"),)),
        now=NOW,
    )

    assert outcome.ignored_count == 1
    vuln = outcome.results[0].vulnerabilities[0]
    assert vuln.ignored is True
    assert vuln.ignore_reason == "accepted risk"

    gate = evaluate_gates(_response(outcome.results), ALL_GATES)
    assert gate.should_fail is False
    assert gate.reasons == ()
    assert gate.status == "PASS"


def test_expired_entry_is_not_applied() -> None:
    """An entry whose expiry is in the past leaves the vulnerability active."""
    outcome = apply_ignores(
        (_make_result(_make_vuln()),),
        IgnoreConfig(ignore=(IgnoreEntry(id="CVE-2024-1111", reason="temporary", expires="2020-01-01"),)),
        now=NOW,
    )

    assert outcome.ignored_count == 0
    assert outcome.results[0].vulnerabilities[0].ignored is False
    assert evaluate_gates(_response(outcome.results), ALL_GATES).should_fail is True


def test_unparseable_expiry_is_treated_as_expired(caplog: pytest.LogCaptureFixture) -> None:
    """An invalid expiry excludes the entry and logs a warning."""
    with caplog.at_level(logging.WARNING, logger="vulngate.scanner.ignore"):
        outcome = apply_ignores(
            (_make_result(_make_vuln()),),
            IgnoreConfig(ignore=(IgnoreEntry(id="CVE-2024-1111", expires="not-a-date"),)),
            now=NOW,
        )

    assert outcome.ignored_count == 0
    assert outcome.results[0].vulnerabilities[0].ignored is False
    assert "not-a-date" in caplog.text
    assert "treating as expired" in caplog.text


def test_future_expiry_is_applied() -> None:
    """An entry expiring after ``now`` is still active."""
    config = IgnoreConfig(ignore=(IgnoreEntry(id="CVE-2024-1111", expires="2030-01-01"),))
    assert filter_expired(config, now=NOW) == config


def test_expiry_equal_to_now_is_expired() -> None:
    """An entry expiring exactly at ``now`` no longer applies."""
    config = IgnoreConfig(ignore=(IgnoreEntry(id="CVE-1", expires="2025-06-01T12:00:00+00:00"),))
    assert filter_expired(config, now=NOW).ignore == ()


def test_filter_expired_is_idempotent() -> None:
    """Filtering twice yields the same config as filtering once."""
    config = IgnoreConfig(
        ignore=(
            IgnoreEntry(id="CVE-1"),
            IgnoreEntry(id="CVE-2", expires="2020-01-01"),
            IgnoreEntry(id="CVE-3", expires="garbage"),
            IgnoreEntry(id="CVE-4", expires="2031-03-04"),
        )
    )
    once = filter_expired(config, now=NOW)
    assert filter_expired(once, now=NOW) == once
    assert [entry.id for entry in once.ignore] == ["CVE-1", "CVE-4"]


def test_match_is_case_insensitive_on_aliases() -> None:
    """Entries match the id or any alias regardless of case."""
    vuln = _make_vuln("GHSA-xxxx-yyyy-zzzz", aliases=("CVE-2021-23337",))
    outcome = apply_ignores(
        (_make_result(vuln),),
        IgnoreConfig(ignore=(IgnoreEntry(id="cve-2021-23337", reason="alias"),)),
        now=NOW,
    )
    assert outcome.results[0].vulnerabilities[0].ignore_reason == "alias"


def test_first_matching_entry_wins() -> None:
    """When several entries match, the earliest in the file supplies the reason."""
    vuln = _make_vuln("GHSA-aaaa", aliases=("CVE-2022-0001",))
    outcome = apply_ignores(
        (_make_result(vuln),),
        IgnoreConfig(
            ignore=(
                IgnoreEntry(id="CVE-2022-0001", reason="first"),
                IgnoreEntry(id="GHSA-aaaa", reason="second"),
            )
        ),
        now=NOW,
    )
    assert outcome.ignored_count == 1
    assert outcome.results[0].vulnerabilities[0].ignore_reason == "first"


def test_empty_reason_falls_back_to_default() -> None:
    """An empty configured reason becomes ``Ignored``."""
    outcome = apply_ignores(
        (_make_result(_make_vuln()),),
        IgnoreConfig(ignore=(IgnoreEntry(id="CVE-2024-1111", reason=""),)),
        now=NOW,
    )
    assert outcome.results[0].vulnerabilities[0].ignore_reason == "Ignored"


def test_inputs_are_not_mutated() -> None:
    """Annotated records are new objects; the originals keep ``ignored=False``."""
    original = _make_result(_make_vuln())
    outcome = apply_ignores((original,), IgnoreConfig(ignore=(IgnoreEntry(id="CVE-2024-1111"),)), now=NOW)

    assert original.vulnerabilities[0].ignored is False
    assert outcome.results[0] is not original


def test_empty_config_matches_nothing() -> None:
    """An empty ignore list returns the inputs unchanged."""
    original = _make_result(_make_vuln())
    outcome = apply_ignores((original,), IgnoreConfig(), now=NOW)
    assert outcome.ignored_count == 0
    assert outcome.results == (original,)


def test_parse_expiry_accepts_dates_and_datetimes() -> None:
    """Bare dates are midnight UTC; offsets are preserved."""
    assert parse_expiry("2025-12-31") == datetime(2025, 12, 31, tzinfo=UTC)
    assert parse_expiry("2025-12-31T10:00:00+02:00") == datetime(2025, 12, 31, 8, 0, tzinfo=UTC)
    assert parse_expiry("31/12/2025") is None
