"""Payout calendar error types."""

from __future__ import annotations

from enum import Enum


class PayoutErrorCode(Enum):
    """Error classification codes."""

    INVALID_HOLDING = "invalid_holding"
    NOT_FOUND = "not_found"
    UNSUPPORTED_DATE = "unsupported_date"
    STORE_ERROR = "store_error"
    FETCH_FAILED = "fetch_failed"
    PROVIDER_ERROR = "provider_error"
    NO_DATA = "no_data"


class PayoutError(Exception):
    """Payout calendar exception with error code and retryable flag.

    Attributes:
        message: Human-readable error description.
        code: Structured error code for programmatic handling.
        retryable: Whether the caller may retry the same operation.
    """

    def __init__(
        self,
        message: str,
        code: PayoutErrorCode = PayoutErrorCode.PROVIDER_ERROR,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.retryable = retryable
