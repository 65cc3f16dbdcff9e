"""Vulnerability suppression: expiry filtering and ignore-rule matching."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import replace
from datetime import UTC, datetime

from vulngate.constants.ignore import DEFAULT_IGNORE_REASON
from vulngate.model import IgnoreConfig, IgnoreEntry, IgnoreOutcome, PackageResult, Vulnerability

logger = logging.getLogger(__name__)


def parse_expiry(value: str) -> datetime | None:
    """Parse an ISO-8601 date or datetime; naive values are taken as UTC.

    Returns ``None`` when the value is not a recognizable date.
    """
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _is_active(entry: IgnoreEntry, now: datetime) -> bool:
    if entry.expires is None:
        return True
    expiry = parse_expiry(entry.expires)
    if expiry is None:
        logger.warning(
            'Invalid expiry date "%s" for ignore entry %s, treating as expired (fail-safe)',
            entry.expires,
            entry.id,
        )
        return False
    return expiry > now


def filter_expired(config: IgnoreConfig, *, now: datetime | None = None) -> IgnoreConfig:
    """Drop entries whose expiry has passed or cannot be parsed.

    ``now`` defaults to the current UTC time; pass it explicitly for
    deterministic results.
    """
    current = now if now is not None else datetime.now(UTC)
    if current.tzinfo is None:
        current = current.replace(tzinfo=UTC)
    return IgnoreConfig(ignore=tuple(entry for entry in config.ignore if _is_active(entry, current)))


def _match_entry(vuln: Vulnerability, entries: tuple[IgnoreEntry, ...]) -> IgnoreEntry | None:
    """Return the first entry, in file order, matching the id or any alias."""
    identifiers = {identifier.upper() for identifier in vuln.identifiers}
    for entry in entries:
        if entry.id.upper() in identifiers:
            return entry
    return None


def apply_ignores(
    results: Iterable[PackageResult],
    config: IgnoreConfig,
    *,
    now: datetime | None = None,
) -> IgnoreOutcome:
    """Annotate vulnerabilities matched by unexpired ignore entries.

    Matching is case-insensitive on the vulnerability id and its aliases.
    Inputs are never mutated; matched vulnerabilities and their packages are
    returned as new records.
    """
    active = filter_expired(config, now=now).ignore
    annotated: list[PackageResult] = []
    ignored_count = 0

    for result in results:
        if not active:
            annotated.append(result)
            continue

        vulnerabilities: list[Vulnerability] = []
        for vuln in result.vulnerabilities:
            entry = _match_entry(vuln, active)
            if entry is None:
                vulnerabilities.append(vuln)
                continue
            ignored_count += 1
            vulnerabilities.append(
                replace(
                    vuln,
                    ignored=True,
                    ignore_reason=entry.reason or DEFAULT_IGNORE_REASON,
                )
            )
        annotated.append(replace(result, vulnerabilities=tuple(vulnerabilities)))

    if ignored_count:
        logger.debug("Matched %d vulnerabilities against %d ignore entries", ignored_count, len(active))

    return IgnoreOutcome(results=tuple(annotated), ignored_count=ignored_count)
