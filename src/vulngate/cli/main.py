"""CLI entrypoint for the Vulngate dependency scanner."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any

from vulngate import __version__
from vulngate.config import ScanSettings, load_settings
from vulngate.constants.api import ERROR_TIPS
from vulngate.constants.branding import CLI_DESCRIPTION
from vulngate.constants.config import ENV_GITHUB_OUTPUT, ENV_WORKSPACE
from vulngate.constants.severity import VALID_SEVERITY_THRESHOLDS
from vulngate.exceptions import ConfigError, DependencyFileError, IgnoreFileError, ScanApiError
from vulngate.reporting.outputs import write_ci_outputs
from vulngate.reporting.table import render_console_summary, render_table
from vulngate.scanner.orchestrator import PipelineResult, run_scan_pipeline

logger = logging.getLogger(__name__)

# CLI dest name -> settings key understood by ``load_settings``.
_SETTING_ARGS: tuple[str, ...] = (
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
)


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-w",
        "--workspace",
        type=Path,
        default=None,
        help=f"Workspace root (default: ${ENV_WORKSPACE} or the current directory)",
    )
    parser.add_argument("-c", "--config", type=Path, help="Explicit config file (default: .vulngate.yml)")
    parser.add_argument("--api-token", help="Scan API token (or VULNGATE_API_TOKEN)")
    parser.add_argument("-f", "--file-path", help="Dependency file to scan, relative to the workspace")
    parser.add_argument(
        "--severity-threshold",
        type=str.lower,
        choices=VALID_SEVERITY_THRESHOLDS,
        default=None,
        help="Fail when a vulnerability at or above this severity is found",
    )
    parser.add_argument(
        "--fail-on-critical",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Legacy: fail on critical vulnerabilities when no threshold is set (default: on)",
    )
    parser.add_argument(
        "--fail-on-high",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Legacy: fail on high vulnerabilities when no threshold is set",
    )
    parser.add_argument(
        "--fail-on-kev",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Fail when a CISA Known Exploited Vulnerability is found",
    )
    parser.add_argument("--epss-threshold", help="Fail when an EPSS score is at or above this value (0.0-1.0)")
    parser.add_argument(
        "--only-fixed",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Only gate on vulnerabilities that have a fix available",
    )
    parser.add_argument("--sarif-file", help="Write a SARIF 2.1.0 report to this path")
    parser.add_argument("--json-file", help="Write a JSON report to this path")
    parser.add_argument("--ignore-file", help="Ignore file path (empty string disables ignores)")
    parser.add_argument(
        "--output-format",
        help="Comma-separated stdout formats: summary, json, table (default: summary)",
    )
    parser.add_argument("--api-base-url", help="Scan API base URL")
    parser.add_argument("--retry-attempts", help="Maximum attempts per scan request (1-10)")
    parser.add_argument("--timeout-seconds", help="Request timeout in seconds (10-600)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")


def build_parser() -> argparse.ArgumentParser:
    """Build top-level CLI parser."""
    parser = argparse.ArgumentParser(
        prog="vulngate",
        description=CLI_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    scan = subparsers.add_parser("scan", help="Scan a dependency file and apply failure gates")
    _add_common_arguments(scan)
    scan.add_argument("--no-color", action="store_true", help="Disable colored output")

    validate = subparsers.add_parser("validate-config", help="Validate settings without scanning")
    _add_common_arguments(validate)

    return parser


def _resolve_workspace(args: argparse.Namespace) -> Path:
    if args.workspace is not None:
        return args.workspace
    return Path(os.environ.get(ENV_WORKSPACE) or ".")


def _settings_from_args(args: argparse.Namespace) -> ScanSettings:
    overrides: dict[str, Any] = {key: getattr(args, key) for key in _SETTING_ARGS}
    return load_settings(overrides, workspace=_resolve_workspace(args), config_path=args.config)


def _print_reports(result: PipelineResult, settings: ScanSettings, *, color: bool) -> None:
    for fmt in settings.output_formats:
        if fmt == "summary":
            print(
                render_console_summary(
                    result.response,
                    result.summary,
                    file_name=result.file_name,
                    ignored_count=result.ignored_count,
                )
            )
        elif fmt == "table":
            print(render_table(result.response, color=color))
        elif fmt == "json" and settings.json_file is None:
            print(json.dumps(result.json_report, indent=2))


def _report_error_status() -> None:
    output_path = os.environ.get(ENV_GITHUB_OUTPUT, "").strip()
    if output_path:
        write_ci_outputs({"scan-status": "ERROR"}, Path(output_path))


def _handle_scan(args: argparse.Namespace) -> int:
    try:
        settings = _settings_from_args(args)
        result = run_scan_pipeline(settings, settings.workspace)
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2
    except (DependencyFileError, IgnoreFileError) as exc:
        print(f"Input error: {exc}", file=sys.stderr)
        return 2
    except ScanApiError as exc:
        print(f"Scan failed ({exc.error_type}): {exc.message}", file=sys.stderr)
        tip = ERROR_TIPS.get(exc.error_type)
        if tip:
            print(f"Tip: {tip}", file=sys.stderr)
        _report_error_status()
        return 1
    except OSError as exc:
        print(f"Output error: {exc}", file=sys.stderr)
        _report_error_status()
        return 1

    use_color = not args.no_color and sys.stdout.isatty()
    _print_reports(result, settings, color=use_color)

    if result.gate.should_fail:
        print(f"Security gate failed: {result.gate.reason}", file=sys.stderr)
        return 1
    logger.info("Security gate passed")
    return 0


def _handle_validate_config(args: argparse.Namespace) -> int:
    try:
        _settings_from_args(args)
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2
    print("Configuration is valid.")
    return 0


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(message)s",
    )

    if args.command == "validate-config":
        return _handle_validate_config(args)
    if args.command != "scan":
        parser.error(f"Unsupported command: {args.command}")
    return _handle_scan(args)


if __name__ == "__main__":
    raise SystemExit(main())
