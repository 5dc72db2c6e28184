"""Earnings date error types."""

from __future__ import annotations

from enum import Enum


class EarningsDateErrorCode(Enum):
    """Error classification codes."""

    REQUEST_FAILED = "request_failed"
    HTTP_STATUS = "http_status"
    EXTRACT_FAILED = "extract_failed"
    SELECTOR_NOT_FOUND = "selector_not_found"
    AUTH_FAILED = "auth_failed"
    INVALID_ROW = "invalid_row"
    MISSING_COLUMNS = "missing_columns"


class EarningsDateError(Exception):
    """Earnings date exception with error code and request context.

    Attributes:
        message: Human-readable error description.
        code: Structured error code for programmatic handling.
        source: Name of the data source that failed, if any.
        url: Request URL involved in the failure, if any.
    """

    def __init__(
        self,
        message: str,
        code: EarningsDateErrorCode = EarningsDateErrorCode.EXTRACT_FAILED,
        source: str | None = None,
        url: str | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.source = source
        self.url = url
