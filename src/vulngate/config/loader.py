"""Settings resolution from CLI values, environment variables, and ``.vulngate.yml``.

Precedence per key: explicit CLI value, ``VULNGATE_<KEY>`` environment
variable, config file, built-in default.
"""

from __future__ import annotations

import difflib
import math
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import yaml

from vulngate.config.model import ScanSettings
from vulngate.constants.api import (
    DEFAULT_API_BASE_URL,
    DEFAULT_RETRY_ATTEMPTS,
    DEFAULT_TIMEOUT_SECONDS,
    MAX_RETRY_ATTEMPTS,
    MAX_TIMEOUT_SECONDS,
    MIN_RETRY_ATTEMPTS,
    MIN_TIMEOUT_SECONDS,
)
from vulngate.constants.config import (
    ALLOWED_CONFIG_KEYS,
    CONFIG_FILENAME,
    DEFAULT_IGNORE_FILENAME,
    ENV_PREFIX,
    FALSE_VALUES,
    TRUE_VALUES,
)
from vulngate.constants.reporting import DEFAULT_OUTPUT_FORMAT, VALID_OUTPUT_FORMATS
from vulngate.constants.severity import VALID_SEVERITY_THRESHOLDS
from vulngate.exceptions import ConfigError
from vulngate.types import SeverityThreshold


def _suggest_key(unknown: str, allowed: frozenset[str]) -> str:
    """Return a 'did you mean ...' hint for a close key match, or empty string."""
    matches = difflib.get_close_matches(unknown, sorted(allowed), n=1, cutoff=0.6)
    if matches:
        return f" (did you mean `{matches[0]}`?)"
    return ""


def read_config_file(workspace: Path, config_path: Path | None = None) -> dict[str, Any]:
    """Load ``.vulngate.yml`` (or an explicit file) as a validated mapping."""
    path = config_path.resolve() if config_path else (workspace / CONFIG_FILENAME)
    if not path.exists():
        if config_path is not None:
            raise ConfigError(f"Config file not found: {path}")
        return {}

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML config file at {path}: {exc}") from exc

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file at {path} must be a YAML mapping")

    for key in raw:
        if key not in ALLOWED_CONFIG_KEYS:
            raise ConfigError(f"Unknown config key `{key}` in {path}{_suggest_key(str(key), ALLOWED_CONFIG_KEYS)}")
    return raw


def _parse_bool(value: Any, name: str) -> bool:
    if isinstance(value, bool):
        return value
    normalized = str(value).strip().lower()
    if normalized in TRUE_VALUES:
        return True
    if normalized in FALSE_VALUES:
        return False
    raise ConfigError(f"Invalid boolean value for {name}: {value}. Use true/false.")


def _parse_bounded_int(value: Any, name: str, minimum: int, maximum: int) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"Invalid positive integer for {name}: {value}")
    try:
        parsed = int(str(value).strip())
    except ValueError as exc:
        raise ConfigError(f"Invalid positive integer for {name}: {value}") from exc
    if parsed < 1:
        raise ConfigError(f"Invalid positive integer for {name}: {value}")
    if not minimum <= parsed <= maximum:
        raise ConfigError(f"{name} must be between {minimum} and {maximum}")
    return parsed


def _parse_epss_threshold(value: Any) -> float:
    try:
        parsed = float(str(value).strip())
    except ValueError as exc:
        raise ConfigError(f"Invalid epss_threshold: {value}. Must be a number between 0.0 and 1.0") from exc
    if not math.isfinite(parsed) or not 0.0 <= parsed <= 1.0:
        raise ConfigError(f"Invalid epss_threshold: {value}. Must be a number between 0.0 and 1.0")
    return parsed


def _parse_severity_threshold(value: Any, *, fail_on_critical: bool, fail_on_high: bool) -> SeverityThreshold:
    """Parse the threshold, deriving it from the legacy boolean flags when unset."""
    if value is not None and str(value).strip():
        normalized = str(value).strip().lower()
        if normalized not in VALID_SEVERITY_THRESHOLDS:
            raise ConfigError(
                f"Invalid severity_threshold: {value}. Valid values: {', '.join(VALID_SEVERITY_THRESHOLDS)}"
            )
        return normalized  # type: ignore[return-value]

    if fail_on_high:
        return "high"
    if fail_on_critical:
        return "critical"
    return "none"


def _parse_output_formats(value: Any) -> tuple[str, ...]:
    if isinstance(value, (list, tuple)):
        tokens = [str(item).strip() for item in value]
    else:
        tokens = [token.strip() for token in str(value).split(",")]
    formats = tuple(token for token in tokens if token)
    if not formats:
        return (DEFAULT_OUTPUT_FORMAT,)
    for fmt in formats:
        if fmt not in VALID_OUTPUT_FORMATS:
            raise ConfigError(
                f"Invalid output_format: {fmt}. Valid values: {', '.join(sorted(VALID_OUTPUT_FORMATS))}"
            )
    return formats


def _validate_url(value: Any) -> str:
    url = str(value).strip()
    parsed = urlparse(url)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise ConfigError(f"Invalid api_base_url: {url}")
    return url.rstrip("/")


def resolve_workspace_path(value: Any, name: str, workspace: Path) -> Path:
    """Resolve a path against the workspace, rejecting anything outside it."""
    root = workspace.resolve()
    resolved = (root / str(value)).resolve()
    if resolved != root and not resolved.is_relative_to(root):
        raise ConfigError(f"{name} must be within the workspace directory. Got: {value}")
    return resolved


def _lookup(
    key: str,
    overrides: Mapping[str, Any],
    environ: Mapping[str, str],
    file_values: Mapping[str, Any],
) -> Any:
    value = overrides.get(key)
    if value is not None:
        return value
    env_value = environ.get(f"{ENV_PREFIX}{key.upper()}")
    if env_value:
        return env_value
    return file_values.get(key)


def load_settings(
    overrides: Mapping[str, Any],
    *,
    workspace: Path,
    environ: Mapping[str, str] | None = None,
    config_path: Path | None = None,
) -> ScanSettings:
    """Resolve and validate every scan setting.

    ``overrides`` holds explicit CLI values keyed by setting name; ``None``
    means "not given". Raises ``ConfigError`` on the first invalid value.
    """
    env = os.environ if environ is None else environ
    workspace = workspace.resolve()
    file_values = read_config_file(workspace, config_path)

    def get(key: str, default: Any = None) -> Any:
        value = _lookup(key, overrides, env, file_values)
        return default if value is None else value

    api_token = get("api_token")
    if not isinstance(api_token, str) or not api_token.strip():
        raise ConfigError("api_token is required")

    file_path_raw = get("file_path")
    file_path = resolve_workspace_path(file_path_raw, "file_path", workspace) if file_path_raw else None

    fail_on_critical = _parse_bool(get("fail_on_critical", True), "fail_on_critical")
    fail_on_high = _parse_bool(get("fail_on_high", False), "fail_on_high")
    severity_threshold = _parse_severity_threshold(
        get("severity_threshold"),
        fail_on_critical=fail_on_critical,
        fail_on_high=fail_on_high,
    )

    epss_raw = get("epss_threshold")
    epss_threshold = _parse_epss_threshold(epss_raw) if epss_raw not in (None, "") else None

    sarif_raw = get("sarif_file")
    json_raw = get("json_file")

    # An explicit empty value disables ignore handling.
    ignore_raw = get("ignore_file", DEFAULT_IGNORE_FILENAME)
    ignore_file = resolve_workspace_path(ignore_raw, "ignore_file", workspace) if ignore_raw else None

    return ScanSettings(
        api_token=api_token.strip(),
        workspace=workspace,
        file_path=file_path,
        severity_threshold=severity_threshold,
        fail_on_kev=_parse_bool(get("fail_on_kev", False), "fail_on_kev"),
        epss_threshold=epss_threshold,
        only_fixed=_parse_bool(get("only_fixed", False), "only_fixed"),
        sarif_file=resolve_workspace_path(sarif_raw, "sarif_file", workspace) if sarif_raw else None,
        ignore_file=ignore_file,
        output_formats=_parse_output_formats(get("output_format", DEFAULT_OUTPUT_FORMAT)),
        json_file=resolve_workspace_path(json_raw, "json_file", workspace) if json_raw else None,
        api_base_url=_validate_url(get("api_base_url", DEFAULT_API_BASE_URL)),
        retry_attempts=_parse_bounded_int(
            get("retry_attempts", DEFAULT_RETRY_ATTEMPTS),
            "retry_attempts",
            MIN_RETRY_ATTEMPTS,
            MAX_RETRY_ATTEMPTS,
        ),
        timeout_seconds=_parse_bounded_int(
            get("timeout_seconds", DEFAULT_TIMEOUT_SECONDS),
            "timeout_seconds",
            MIN_TIMEOUT_SECONDS,
            MAX_TIMEOUT_SECONDS,
        ),
    )
