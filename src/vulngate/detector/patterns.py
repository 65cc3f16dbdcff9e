"""Supported dependency file names and their detection priority."""

from __future__ import annotations

from vulngate.constants.detector import (
    CSPROJ_PATTERN,
    CSPROJ_PRIORITY,
    CSPROJ_SUFFIX,
    SUPPORTED_FILES,
    UNKNOWN_FILE_PRIORITY,
)

_PRIORITY_BY_NAME: dict[str, int] = {name: priority for name, priority, _, _ in SUPPORTED_FILES}


def is_file_supported(file_name: str) -> bool:
    return file_name in _PRIORITY_BY_NAME or file_name.endswith(CSPROJ_SUFFIX)


def get_file_priority(file_name: str) -> int:
    """Detection priority for a file name; lower wins, lockfiles before manifests."""
    if file_name in _PRIORITY_BY_NAME:
        return _PRIORITY_BY_NAME[file_name]
    if file_name.endswith(CSPROJ_SUFFIX):
        return CSPROJ_PRIORITY
    return UNKNOWN_FILE_PRIORITY


def supported_file_names() -> list[str]:
    """Supported names in priority order, followed by the ``*.csproj`` pattern."""
    ordered = sorted(SUPPORTED_FILES, key=lambda spec: spec[1])
    return [name for name, _, _, _ in ordered] + [CSPROJ_PATTERN]
