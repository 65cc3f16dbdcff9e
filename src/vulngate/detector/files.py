"""Locate, validate, and read the dependency file to scan."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from vulngate.constants.detector import CSPROJ_SUFFIX, SUPPORTED_FILES
from vulngate.detector.patterns import get_file_priority, is_file_supported, supported_file_names
from vulngate.exceptions import DependencyFileError

logger = logging.getLogger(__name__)


def _supported_list() -> str:
    return ", ".join(supported_file_names())


def _is_readable(path: Path) -> bool:
    return path.is_file() and os.access(path, os.R_OK)


def detect_dependency_file(workspace: Path) -> Path:
    """Return the highest-priority readable dependency file in ``workspace``."""
    candidates: list[tuple[int, str, Path]] = []

    for name, priority, _, _ in SUPPORTED_FILES:
        path = workspace / name
        if _is_readable(path):
            candidates.append((priority, name, path))

    try:
        entries = sorted(workspace.iterdir())
    except OSError as exc:
        logger.debug("Could not list %s: %s", workspace, exc)
        entries = []
    for entry in entries:
        if entry.name.endswith(CSPROJ_SUFFIX) and _is_readable(entry):
            candidates.append((get_file_priority(entry.name), entry.name, entry))

    if not candidates:
        raise DependencyFileError(
            f"No supported dependency files found in {workspace}. Supported files: {_supported_list()}"
        )

    candidates.sort(key=lambda candidate: (candidate[0], candidate[1]))
    return candidates[0][2]


def validate_file(path: Path) -> None:
    """Raise ``DependencyFileError`` unless ``path`` is a supported, readable file."""
    if not is_file_supported(path.name):
        raise DependencyFileError(f"Unsupported file: {path.name}. Supported files: {_supported_list()}")
    if not _is_readable(path):
        raise DependencyFileError(f"File not found or not readable: {path}")


def read_file(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise DependencyFileError(f"Failed to read file {path}: {exc}") from exc
