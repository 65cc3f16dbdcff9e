"""Branding constants for docs and terminal output."""

from __future__ import annotations

BRAND_NAME: str = "VULNGATE"
ASCII_LOGO_LINES: tuple[str, ...] = (
    ">_ VULNGATE",
    "     // dependency risk gate for CI",
)
SCAN_SUMMARY_TITLE: str = "Security scan results"
CLI_DESCRIPTION: str = "\n".join((*ASCII_LOGO_LINES, "", f"{BRAND_NAME} dependency scanner"))
TOOL_IDENTIFIER: str = "vulngate"
