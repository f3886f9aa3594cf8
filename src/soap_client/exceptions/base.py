"""
The API client's canonical exception type.

`ApiError` is raised for every failure the client surfaces: faults returned by the API
("103 : Your session is invalid"), transport faults from the SOAP/HTTP layer, and
client-side conditions (empty results, missing token). Whatever the input, it ends up with:

    - code: stable numeric code (see codes.ApiErrorCode); 0 means unclassified
    - message: human-readable text, prefixed with the code for API-coded faults
    - cause: the lower-level exception, if any (standard `__cause__` chaining)
    - tries: how many attempts had been made when the error was raised
    - request / response: raw wire bodies, attached by the transport for post-mortems
    - call site: component/operation that created the error, resolved lazily

Callers decide whether to retry with `is_recoverable()`; this module never retries.
"""

from .classifier import normalize
from .codes import ApiErrorCode, ErrorCategory, category_for, code_name, is_recoverable_code
from .trace import CallSite, capture_call_sites, oldest_call_site


class ApiError(Exception):
    """
    Classified API client error.

    - message: normalized message (see classifier.normalize)
    - code: read-only; fixed at construction, never re-derived from a later message change
    - tries: optional attempt counter, informational only
    - previous: the original failure; stored as `__cause__`
    """

    def __init__(self, message: str = "", code: int = 0, tries: int | None = None,
                 previous: BaseException | None = None):
        normalized = normalize(message, code, tries)
        super().__init__(normalized.message)
        self.message = normalized.message
        self._code = normalized.code
        self.code_source = normalized.source
        self.tries = tries
        self.__cause__ = previous
        self._request: str | None = None
        self._response: str | None = None
        self._call_sites = capture_call_sites(self)
        self._trace: list[CallSite] | None = None

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self._code}, message={self.message!r})"

    def __reduce__(self):
        # The default rebuilds via cls(*args), which would normalize the stored message again.
        return _rebuild_error, (type(self), self.args), self.__dict__

    # ------------------------
    # Code / recoverability
    # ------------------------
    @property
    def code(self) -> int:
        return self._code

    @property
    def code_name(self) -> str | None:
        return code_name(self._code)

    @property
    def category(self) -> ErrorCategory:
        return category_for(self._code)

    def is_recoverable(self) -> bool:
        """True if a caller-driven retry may succeed. Unclassified (0) errors never are."""
        return is_recoverable_code(self._code)

    # ------------------------
    # Message
    # ------------------------
    def set_message(self, message: str) -> None:
        self.message = message
        self.args = (message,)

    def append_to_message(self, text: str) -> None:
        self.set_message(f"{self.message} {text}")

    # ------------------------
    # Request / response bodies
    # ------------------------
    def attach_request(self, body: str | None) -> "ApiError":
        self._request = body
        return self

    def attach_response(self, body: str | None) -> "ApiError":
        self._response = body
        return self

    @property
    def request(self) -> str | None:
        return self._request

    @property
    def response(self) -> str | None:
        return self._response

    def get_request(self) -> str | None:
        return self._request

    def get_response(self) -> str | None:
        return self._response

    # ------------------------
    # Cause
    # ------------------------
    @property
    def cause(self) -> BaseException | None:
        return self.__cause__

    def get_cause(self) -> BaseException | None:
        return self.__cause__

    # ------------------------
    # Call site
    # ------------------------
    def get_trace_safe(self) -> list[CallSite]:
        """
        Return the call chain captured at construction (innermost first).

        Computed once. If nothing was captured, fall back to the oldest frame of the
        current stack so the call-site accessors always have something to report.
        """
        if self._trace is None:
            self._trace = list(self._call_sites) or [oldest_call_site()]
        return self._trace

    @property
    def call_site(self) -> CallSite:
        return self.get_trace_safe()[0]

    @property
    def call_site_component(self) -> str:
        return self.call_site.component

    @property
    def call_site_operation(self) -> str:
        return self.call_site.operation

    def get_call_site_component(self) -> str:
        return self.call_site_component

    def get_call_site_operation(self) -> str:
        return self.call_site_operation

    # ------------------------
    # Structured payload for logs
    # ------------------------
    def to_payload(self, include_bodies: bool = False, max_body_chars: int | None = None) -> dict:
        """
        Return a JSON-serializable dict describing this error, suitable for `extra=` in logs.

        Shape:
            {
                "error_code": 103,
                "code_name": "INVALID_SESSION_TOKEN",
                "category": "authentication",
                "error_message": "103 : Your session is invalid [Tried: 2]",
                "recoverable": True,
                "tries": 2,
                "component": "ContactService",
                "operation": "add_contacts",
                "cause": "SoapFault('...')",            # only when a cause exists
                "request": "<soap:Envelope ...",        # only with include_bodies=True
                "response": "<soap:Envelope ...",
            }

        Keys avoid LogRecord attribute names ("message" would clash with logging internals).
        """
        payload = {
            "error_code": self._code,
            "code_name": self.code_name,
            "category": self.category.value,
            "error_message": self.message,
            "recoverable": self.is_recoverable(),
            "tries": self.tries,
            "component": self.call_site_component,
            "operation": self.call_site_operation,
        }
        if self.__cause__ is not None:
            payload["cause"] = repr(self.__cause__)
        if include_bodies:
            payload["request"] = _truncate(self._request, max_body_chars)
            payload["response"] = _truncate(self._response, max_body_chars)
        return payload


def _rebuild_error(cls: type, args: tuple) -> ApiError:
    error = cls.__new__(cls)
    error.args = args
    return error


def _truncate(body: str | None, limit: int | None) -> str | None:
    if body is None or not limit or len(body) <= limit:
        return body
    return body[:limit] + "...[truncated]"


def classify(message: str = "", code: int = 0, retry_attempt: int | None = None,
             cause: BaseException | None = None) -> ApiError:
    """Build an `ApiError` from heterogeneous failure input. See classifier.normalize."""
    return ApiError(message, code, retry_attempt, cause)


# Client-side conditions keep the same type; these only preset the code.

class EmptyResultError(ApiError):
    def __init__(self, message: str = "The API returned no results", tries: int | None = None,
                 previous: BaseException | None = None):
        super().__init__(message, ApiErrorCode.EMPTY_RESULT, tries, previous)


class MissingTokenError(ApiError):
    def __init__(self, message: str = "No API token has been configured", tries: int | None = None,
                 previous: BaseException | None = None):
        super().__init__(message, ApiErrorCode.NO_TOKEN, tries, previous)


__all__ = [
    "ApiError",
    "EmptyResultError",
    "MissingTokenError",
    "classify",
]
