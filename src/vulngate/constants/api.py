"""Constants for the remote scan API, error taxonomy, and retry policy."""

from __future__ import annotations

SCAN_ENDPOINT_PATH: str = "/api/v1/vulnerability-scan/run"
DEFAULT_API_BASE_URL: str = "https://geekwala.com"

MAX_CONTENT_BYTES: int = 500 * 1024

FILE_SIZE_ERROR: str = "file_size_error"
NETWORK_ERROR: str = "network_error"
TIMEOUT_ERROR: str = "timeout_error"
AUTH_ERROR: str = "auth_error"
VALIDATION_ERROR: str = "validation_error"
RATE_LIMIT_ERROR: str = "rate_limit_error"
SERVER_ERROR: str = "server_error"
UNKNOWN_ERROR: str = "unknown_error"
PARSE_ERROR: str = "parse_error"

SERVER_ERROR_STATUSES: frozenset[int] = frozenset({500, 502, 503})
RETRYABLE_STATUSES: frozenset[int] = frozenset({429}) | SERVER_ERROR_STATUSES
RETRYABLE_TRANSPORT_CODES: frozenset[str] = frozenset({"ECONNRESET", "ETIMEDOUT", "ENOTFOUND", "ECONNABORTED"})

DEFAULT_RETRY_ATTEMPTS: int = 3
MIN_RETRY_ATTEMPTS: int = 1
MAX_RETRY_ATTEMPTS: int = 10
DEFAULT_BASE_DELAY_MS: int = 1000
DEFAULT_MAX_DELAY_MS: int = 30000
RETRY_JITTER_MS: int = 1000

DEFAULT_TIMEOUT_SECONDS: int = 300
MIN_TIMEOUT_SECONDS: int = 10
MAX_TIMEOUT_SECONDS: int = 600

ERROR_TIPS: dict[str, str] = {
    FILE_SIZE_ERROR: "The file size limit is 500KB. For large lockfiles, consider scanning the manifest instead.",
    AUTH_ERROR: "Verify your API token at https://geekwala.com/developers/api-tokens",
    RATE_LIMIT_ERROR: "Consider spacing out your scans or upgrading your plan",
    VALIDATION_ERROR: "Check that your dependency file has exact package versions",
    TIMEOUT_ERROR: "Try increasing --timeout-seconds or reducing the dependency file size",
}
