"""Constants for report formats, SARIF export, and stdout formatting."""

from __future__ import annotations

VALID_OUTPUT_FORMATS: frozenset[str] = frozenset({"summary", "json", "table"})
DEFAULT_OUTPUT_FORMAT: str = "summary"

REPORT_TEMP_PREFIX: str = ".tmp-"
REPORT_TEMP_SUFFIX: str = ".json"

SARIF_VERSION: str = "2.1.0"
SARIF_SCHEMA_URI: str = "https://raw.githubusercontent.com/oasis-tcs/sarif-spec/main/sarif-2.1/schema/sarif-schema-2.1.0.json"
SARIF_TOOL_NAME: str = "GeekWala Security Scan"
SARIF_INFORMATION_URI: str = "https://geekwala.com"
SARIF_FINGERPRINT_LENGTH: int = 32
SARIF_HELP_REFERENCE_TYPES: frozenset[str] = frozenset({"WEB", "ADVISORY"})
SARIF_RULE_TAGS: tuple[str, ...] = ("security", "vulnerability")

SARIF_LEVEL_MAP: dict[str, str] = {
    "CRITICAL": "error",
    "HIGH": "error",
    "MEDIUM": "warning",
}

# security-severity fallback when a vulnerability has no numeric CVSS score.
SARIF_TIER_SCORES: dict[str, str] = {
    "CRITICAL": "9.0",
    "HIGH": "7.0",
    "MEDIUM": "4.0",
    "LOW": "1.0",
}

SARIF_PROPERTY_EPSS: str = "geekwala/epss-score"
SARIF_PROPERTY_KEV: str = "geekwala/is-kev"
SARIF_PROPERTY_FIX: str = "geekwala/fix-version"

TABLE_EMPTY_VALUE: str = "-"
TABLE_COLUMN_GAP: str = "  "

SEVERITY_MARKERS: dict[str, str] = {
    "CRITICAL": "🔴",
    "HIGH": "🟠",
    "MEDIUM": "🟡",
    "LOW": "🟢",
}
UNKNOWN_SEVERITY_MARKER: str = "⚪"

# ANSI escape codes for terminal colouring.
ANSI_RESET: str = "\033[0m"
ANSI_RED: str = "\033[31;1m"
ANSI_YELLOW: str = "\033[33;1m"
ANSI_GREEN: str = "\033[32;1m"

SEVERITY_COLORS: dict[str, str] = {
    "CRITICAL": ANSI_RED,
    "HIGH": ANSI_RED,
    "MEDIUM": ANSI_YELLOW,
    "LOW": ANSI_GREEN,
}
