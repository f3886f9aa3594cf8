# src/soap_client/exceptions/reporting.py
"""
Log a classified `ApiError` the same way everywhere.

Callers (retry loops, business code) decide what to do with the error; this only records it:
  - recoverable errors -> WARNING (a retry may still succeed)
  - terminal errors    -> ERROR (someone has to look at it)

The structured fields come from `ApiError.to_payload()`. Raw request/response envelopes are
added only when API_LOG_PAYLOADS is enabled, truncated to API_PAYLOAD_MAX_CHARS.
"""

import logging

from soap_client.config.settings import Settings, get_settings

from .base import ApiError

_logger = logging.getLogger(__name__)


def log_api_error(exc: ApiError, logger: logging.Logger | None = None,
                  settings: Settings | None = None) -> None:
    if settings is None:
        settings = get_settings()
    if logger is None:
        logger = _logger

    payload = exc.to_payload(
        include_bodies=settings.API_LOG_PAYLOADS,
        max_body_chars=settings.API_PAYLOAD_MAX_CHARS,
    )
    level = logging.WARNING if exc.is_recoverable() else logging.ERROR
    logger.log(
        level,
        "API error in %s.%s: %s",
        exc.call_site_component,
        exc.call_site_operation,
        exc.message,
        extra=payload,
    )
