"""YAML ignore file loader.

Example::

    ignore:
      - id: CVE-2021-23337
        reason: Not reachable from our code paths
        expires: 2026-12-31
"""

from __future__ import annotations

import datetime as dt
from pathlib import Path
from typing import Any

import yaml

from vulngate.constants.ignore import IGNORE_LIST_KEY, MISSING_IGNORE_REASON
from vulngate.exceptions import IgnoreFileError
from vulngate.model import IgnoreConfig, IgnoreEntry


def _expires_text(value: Any) -> str | None:
    if value is None or value == "":
        return None
    # YAML turns bare dates into date objects.
    if isinstance(value, (dt.date, dt.datetime)):
        return value.isoformat()
    return str(value)


def parse_ignore_document(raw: Any) -> IgnoreConfig:
    """Build an ``IgnoreConfig`` from a decoded YAML document.

    Entries without a string ``id`` are skipped. A document that is not a
    mapping with an ``ignore`` list yields an empty config.
    """
    if not isinstance(raw, dict) or not isinstance(raw.get(IGNORE_LIST_KEY), list):
        return IgnoreConfig()

    entries: list[IgnoreEntry] = []
    for item in raw[IGNORE_LIST_KEY]:
        if not isinstance(item, dict) or not isinstance(item.get("id"), str):
            continue
        reason = item.get("reason")
        entries.append(
            IgnoreEntry(
                id=item["id"],
                reason=str(reason) if reason else MISSING_IGNORE_REASON,
                expires=_expires_text(item.get("expires")),
            )
        )
    return IgnoreConfig(ignore=tuple(entries))


def load_ignore_file(path: Path) -> IgnoreConfig | None:
    """Load an ignore file, returning ``None`` when it does not exist."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except OSError as exc:
        raise IgnoreFileError(f"Failed to read ignore file {path}: {exc}") from exc

    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise IgnoreFileError(f"Invalid YAML in ignore file {path}: {exc}") from exc

    return parse_ignore_document(raw)
