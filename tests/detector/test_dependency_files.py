"""Tests for dependency file detection and validation."""

from __future__ import annotations

from pathlib import Path

import pytest

from vulngate.detector.files import detect_dependency_file, read_file, validate_file
from vulngate.detector.patterns import get_file_priority, is_file_supported, supported_file_names
from vulngate.exceptions import DependencyFileError


def _touch(root: Path, *names: str) -> None:
    """Create empty files under ``root``."""
    for name in names:
        (root / name).write_text("{}", encoding="utf-8")


def test_lockfile_beats_manifest(tmp_path: Path) -> None:
    """package-lock.json outranks package.json."""
    _touch(tmp_path, "package.json", "package-lock.json", "requirements.txt")
    assert detect_dependency_file(tmp_path).name == "package-lock.json"


def test_priority_across_ecosystems(tmp_path: Path) -> None:
    """Lower priority numbers win regardless of ecosystem."""
    _touch(tmp_path, "go.mod", "Cargo.lock", "composer.json")
    assert detect_dependency_file(tmp_path).name == "Cargo.lock"


def test_csproj_is_detected_last(tmp_path: Path) -> None:
    """A .csproj file is used only when nothing else is present."""
    _touch(tmp_path, "App.csproj")
    assert detect_dependency_file(tmp_path).name == "App.csproj"

    _touch(tmp_path, "packages.lock.json")
    assert detect_dependency_file(tmp_path).name == "packages.lock.json"


def test_no_supported_files(tmp_path: Path) -> None:
    """An empty workspace lists the supported names."""
    _touch(tmp_path, "README.md")
    with pytest.raises(DependencyFileError, match="No supported dependency files found") as excinfo:
        detect_dependency_file(tmp_path)
    assert "package-lock.json" in str(excinfo.value)
    assert "*.csproj" in str(excinfo.value)


def test_dependency_file_error_is_file_not_found() -> None:
    assert issubclass(DependencyFileError, FileNotFoundError)


def test_validate_file(tmp_path: Path) -> None:
    """Unsupported names and missing files are rejected."""
    with pytest.raises(DependencyFileError, match="Unsupported file: setup.py"):
        validate_file(tmp_path / "setup.py")
    with pytest.raises(DependencyFileError, match="not found"):
        validate_file(tmp_path / "yarn.lock")

    _touch(tmp_path, "yarn.lock")
    validate_file(tmp_path / "yarn.lock")


def test_read_file(tmp_path: Path) -> None:
    path = tmp_path / "requirements.txt"
    path.write_text("requests==2.31.0\n", encoding="utf-8")
    assert read_file(path) == "requests==2.31.0\n"


def test_read_file_missing(tmp_path: Path) -> None:
    with pytest.raises(DependencyFileError, match="Failed to read file"):
        read_file(tmp_path / "requirements.txt")


def test_patterns() -> None:
    assert is_file_supported("Gemfile.lock")
    assert is_file_supported("Web.Api.csproj")
    assert not is_file_supported("setup.py")
    assert get_file_priority("package-lock.json") == 1
    assert get_file_priority("Web.csproj") == 16
    assert get_file_priority("setup.py") == 999
    names = supported_file_names()
    assert names[0] == "package-lock.json"
    assert names[-1] == "*.csproj"
