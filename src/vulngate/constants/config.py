"""Configuration defaults, filenames, and environment variable names."""

from __future__ import annotations

CONFIG_FILENAME: str = ".vulngate.yml"
DEFAULT_IGNORE_FILENAME: str = ".geekwala-ignore.yml"

ENV_PREFIX: str = "VULNGATE_"
ENV_WORKSPACE: str = "GITHUB_WORKSPACE"
ENV_GITHUB_OUTPUT: str = "GITHUB_OUTPUT"
ENV_GITHUB_STEP_SUMMARY: str = "GITHUB_STEP_SUMMARY"

TRUE_VALUES: frozenset[str] = frozenset({"true", "1", "yes"})
FALSE_VALUES: frozenset[str] = frozenset({"false", "0", "no"})

ALLOWED_CONFIG_KEYS: frozenset[str] = frozenset(
    {
        "api_token",
        "file_path",
        "fail_on_critical",
        "fail_on_high",
        "severity_threshold",
        "fail_on_kev",
        "epss_threshold",
        "only_fixed",
        "sarif_file",
        "ignore_file",
        "output_format",
        "json_file",
        "api_base_url",
        "retry_attempts",
        "timeout_seconds",
    }
)
