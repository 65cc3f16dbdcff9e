"""SARIF 2.1.0 export for code scanning integrations."""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Any

from vulngate import __version__
from vulngate.constants.reporting import (
    SARIF_FINGERPRINT_LENGTH,
    SARIF_HELP_REFERENCE_TYPES,
    SARIF_INFORMATION_URI,
    SARIF_LEVEL_MAP,
    SARIF_PROPERTY_EPSS,
    SARIF_PROPERTY_FIX,
    SARIF_PROPERTY_KEV,
    SARIF_RULE_TAGS,
    SARIF_SCHEMA_URI,
    SARIF_TIER_SCORES,
    SARIF_TOOL_NAME,
    SARIF_VERSION,
)
from vulngate.io import write_text_atomic
from vulngate.model import PackageResult, ScanResponse, Vulnerability
from vulngate.scanner.severity import classify_severity


def _security_severity(vuln: Vulnerability) -> str:
    """CVSS-like score string used by code scanning to rank alerts."""
    if vuln.cvss_score is not None:
        return f"{vuln.cvss_score:.1f}"
    return SARIF_TIER_SCORES.get(classify_severity(vuln), "0.0")


def fingerprint(package: str, version: str, vuln_id: str) -> str:
    """Stable fingerprint so alerts deduplicate across runs."""
    digest = hashlib.sha256(f"{package}:{version}:{vuln_id}".encode()).hexdigest()
    return digest[:SARIF_FINGERPRINT_LENGTH]


def _build_rule(vuln: Vulnerability) -> dict[str, Any]:
    rule: dict[str, Any] = {
        "id": vuln.id,
        "shortDescription": {"text": vuln.summary or f"Vulnerability {vuln.id}"},
        "properties": {
            "security-severity": _security_severity(vuln),
            "tags": list(SARIF_RULE_TAGS),
        },
    }
    if vuln.details:
        rule["fullDescription"] = {"text": vuln.details}
    help_ref = next((ref for ref in vuln.references if ref.type in SARIF_HELP_REFERENCE_TYPES), None)
    if help_ref is not None:
        rule["helpUri"] = help_ref.url
    return rule


def _build_result(result: PackageResult, vuln: Vulnerability, file_name: str) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "ruleId": vuln.id,
        "level": SARIF_LEVEL_MAP.get(classify_severity(vuln), "note"),
        "message": {
            "text": (
                f"{result.package}@{result.version} is affected by {vuln.id}: "
                f"{vuln.summary or 'No description available'}"
            ),
        },
        "locations": [
            {
                "physicalLocation": {
                    "artifactLocation": {"uri": file_name},
                    "region": {"startLine": 1},
                },
            },
        ],
        "partialFingerprints": {
            "primaryLocationLineHash": fingerprint(result.package, result.version, vuln.id),
        },
    }

    properties: dict[str, Any] = {}
    if vuln.epss_score is not None:
        properties[SARIF_PROPERTY_EPSS] = vuln.epss_score
    if vuln.is_known_exploited is not None:
        properties[SARIF_PROPERTY_KEV] = vuln.is_known_exploited
    if vuln.fix_version is not None:
        properties[SARIF_PROPERTY_FIX] = vuln.fix_version
    if properties:
        payload["properties"] = properties
    return payload


def build_sarif_log(response: ScanResponse, file_name: str) -> dict[str, Any]:
    """Build a SARIF log with one rule per vulnerability id and one result per active finding."""
    rules: list[dict[str, Any]] = []
    results: list[dict[str, Any]] = []
    seen_rules: set[str] = set()

    for result in response.results:
        if not result.affected or not result.vulnerabilities:
            continue
        for vuln in result.active_vulnerabilities:
            if vuln.id not in seen_rules:
                seen_rules.add(vuln.id)
                rules.append(_build_rule(vuln))
            results.append(_build_result(result, vuln, file_name))

    return {
        "$schema": SARIF_SCHEMA_URI,
        "version": SARIF_VERSION,
        "runs": [
            {
                "tool": {
                    "driver": {
                        "name": SARIF_TOOL_NAME,
                        "version": __version__,
                        "informationUri": SARIF_INFORMATION_URI,
                        "rules": rules,
                    },
                },
                "results": results,
            },
        ],
    }


def write_sarif(path: Path, response: ScanResponse, file_name: str) -> Path:
    """Write the SARIF log atomically and return its path."""
    write_text_atomic(
        path=path,
        content=json.dumps(build_sarif_log(response, file_name), indent=2) + "\n",
        temp_prefix=".sarif_tmp_",
        temp_suffix=".sarif",
    )
    return path
