"""Shared type aliases for Vulngate."""

from .common import JsonObject, JsonScalar, JsonValue, ScanStatus, SeverityThreshold, SeverityTier

__all__ = [
    "JsonObject",
    "JsonScalar",
    "JsonValue",
    "ScanStatus",
    "SeverityThreshold",
    "SeverityTier",
]
