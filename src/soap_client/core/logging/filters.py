# src/soap_client/core/logging/filters.py
"""
Logging filters.

RequestIdFilter
---------------
Stamps every LogRecord with a `request_id` so all log lines produced while one API call is
in flight (transport attempts, retries, the final ApiError report) can be correlated.

The id lives in a `contextvars.ContextVar`, so it follows the logical flow across threads
started with `contextvars.copy_context()` and across asyncio tasks. Callers set it around an
API call:

    token = set_request_id("addContacts-7f3a")
    try:
        ...
    finally:
        reset_request_id(token)

Records logged outside any call get the sentinel "-", so `%(request_id)s` in a format string
never raises KeyError.

RedactFilter
------------
Masks record attributes whose names look sensitive (API tokens, session ids, passwords).
Attributes land on the record through `extra={...}`; the SOAP envelope itself is never
inspected, which is why envelopes stay out of logs unless API_LOG_PAYLOADS is enabled.
"""

import logging
from logging import LogRecord
import contextvars

_request_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)


def set_request_id(request_id: str | None):
    """Set the request id for the current context; returns a token for reset_request_id()."""
    return _request_id_ctx.set(request_id)


def reset_request_id(token):
    _request_id_ctx.reset(token)


def get_request_id() -> str | None:
    return _request_id_ctx.get()


class RequestIdFilter(logging.Filter):
    """
    Guarantee `record.request_id`:
      - keep a value passed explicitly via extra={"request_id": ...}
      - else use the context var
      - else "-"
    Never drops a record.
    """

    def filter(self, record: LogRecord) -> bool:
        record.request_id = (
            getattr(record, "request_id", None) or get_request_id() or "-"
        )
        return True


class RedactFilter(logging.Filter):
    SENSITIVE = {
        "password",
        "secret",
        "token",
        "api_token",
        "access_token",
        "session_id",
        "session_token",
        "authorization",
    }
    MASK = "***REDACTED***"

    def filter(self, record: LogRecord) -> bool:
        for key in list(record.__dict__.keys()):
            if key.lower() in self.SENSITIVE:
                record.__dict__[key] = self.MASK
        return True
