"""Error classification layer for the SOAP API client."""

from .exceptions import ApiError, ApiErrorCode, classify

__all__ = ["ApiError", "ApiErrorCode", "classify"]
