"""Supported dependency files and detection priorities."""

from __future__ import annotations

# (file name, priority, is lockfile, ecosystem); lower priority wins.
SUPPORTED_FILES: tuple[tuple[str, int, bool, str], ...] = (
    ("package-lock.json", 1, True, "npm"),
    ("yarn.lock", 2, True, "npm"),
    ("pnpm-lock.yaml", 3, True, "npm"),
    ("package.json", 10, False, "npm"),
    ("poetry.lock", 4, True, "PyPI"),
    ("Pipfile.lock", 5, True, "PyPI"),
    ("requirements.txt", 11, False, "PyPI"),
    ("composer.lock", 6, True, "Packagist"),
    ("composer.json", 12, False, "Packagist"),
    ("go.sum", 7, True, "Go"),
    ("go.mod", 13, False, "Go"),
    ("Cargo.lock", 8, True, "crates.io"),
    ("Cargo.toml", 14, False, "crates.io"),
    ("Gemfile.lock", 9, True, "RubyGems"),
    ("packages.lock.json", 15, True, "NuGet"),
)

CSPROJ_SUFFIX: str = ".csproj"
CSPROJ_PRIORITY: int = 16
CSPROJ_PATTERN: str = "*.csproj"
UNKNOWN_FILE_PRIORITY: int = 999
