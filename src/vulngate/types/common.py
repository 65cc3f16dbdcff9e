"""Cross-module type aliases."""

from __future__ import annotations

from typing import Literal, TypeAlias

SeverityTier: TypeAlias = Literal["CRITICAL", "HIGH", "MEDIUM", "LOW", "UNKNOWN"]
SeverityThreshold: TypeAlias = Literal["none", "low", "medium", "high", "critical"]
ScanStatus: TypeAlias = Literal["PASS", "FAIL", "ERROR"]

JsonScalar: TypeAlias = str | int | float | bool | None
JsonValue: TypeAlias = JsonScalar | list["JsonValue"] | dict[str, "JsonValue"]
JsonObject: TypeAlias = dict[str, JsonValue]
