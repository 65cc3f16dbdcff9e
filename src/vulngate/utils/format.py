"""Message formatting helpers."""

from __future__ import annotations


def pluralize_vulnerabilities(count: int) -> str:
    """Return ``vulnerability`` or ``vulnerabilities`` for ``count``."""
    return "vulnerability" if count == 1 else "vulnerabilities"


def format_number(value: float) -> str:
    """Render a threshold without a trailing ``.0`` on whole numbers."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))
