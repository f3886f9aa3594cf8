# soap_client/
# │
# ├── exceptions/
# │   ├── __init__.py
# │   ├── codes.py          # Numeric API/transport codes, recoverable set, categories
# │   ├── classifier.py     # Message/code normalization
# │   ├── trace.py          # Call-site capture
# │   ├── base.py           # ApiError (+ client-side subclasses), classify()
# │   ├── mapper.py         # Wrap transport exceptions into ApiError
# │   └── reporting.py      # Structured logging of an ApiError
from .base import ApiError, EmptyResultError, MissingTokenError, classify
from .codes import ApiErrorCode, ErrorCategory, RECOVERABLE_CODES
from .mapper import transport_error_handler, wrap_transport_error
from .reporting import log_api_error

__all__ = [
    "ApiError",
    "ApiErrorCode",
    "EmptyResultError",
    "ErrorCategory",
    "MissingTokenError",
    "RECOVERABLE_CODES",
    "classify",
    "log_api_error",
    "transport_error_handler",
    "wrap_transport_error",
]
