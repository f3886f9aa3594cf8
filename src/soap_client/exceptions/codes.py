"""
Numeric error codes for the SOAP API client and the tables that classify them.

Three ranges exist:
  - 101-113: codes returned by the API itself inside a fault string ("107 : ...")
  - 98001-98007: "misc" transport faults, inferred from the SOAP/HTTP layer's message
  - 99001-99002: client-side conditions raised by our own code

The values are part of the log/wire contract with existing consumers; never renumber them.
"""

from enum import Enum, IntEnum


class ApiErrorCode(IntEnum):
    UNKNOWN_ERROR = 101          # There was an unknown API error. Please try your request again shortly.
    INVALID_TOKEN = 102          # Authentication failed for token
    INVALID_SESSION_TOKEN = 103  # Your session is invalid. Please log in again.
    INVALID_ACCESS = 104         # You do not have valid access for this method.
    INVALID_INPUT_ARRAY = 105    # You must specify at least one item in the input array.
    INVALID_PARAMETER = 106      # Unable to verify parameter
    INVALID_REQUEST = 107        # There was an error in your soap request.
    SHARD_OFFLINE = 108          # The API is currently undergoing maintenance.
    SITE_INACTIVE = 109          # This site is currently marked as 'inactive'
    REQUIRED_FIELDS = 110        # Required fields are missing
    UNAUTHORIZED_IP = 111        # Your IP address does not have access for token.
    INVALID_FILTER = 112         # Invalid filter type (must be AND or OR).
    READ_ERROR = 113             # There was an error reading your query results.

    # Misc (transport level)
    HTTP_HEADER_ERROR = 98001
    NO_XML_DOCUMENT = 98002
    INVALID_URL = 98003
    CONNECT_ERROR = 98004
    WSDL_PARSE_ERROR = 98005
    REQUEST_ERROR = 98006
    CONNECTION_RESET = 98007     # SSL: Connection reset by peer

    # Custom (client side)
    EMPTY_RESULT = 99001
    NO_TOKEN = 99002


class ErrorCategory(str, Enum):
    AUTHENTICATION = "authentication"
    VALIDATION = "validation"
    AVAILABILITY = "availability"
    PROTOCOL = "protocol"
    EMPTY_RESULT = "empty_result"
    UNKNOWN = "unknown"


# Codes we can (maybe) recover from by retrying the call.
RECOVERABLE_CODES: frozenset[int] = frozenset({
    ApiErrorCode.UNKNOWN_ERROR,
    ApiErrorCode.INVALID_SESSION_TOKEN,
    ApiErrorCode.INVALID_REQUEST,
    ApiErrorCode.SHARD_OFFLINE,
    ApiErrorCode.READ_ERROR,
    ApiErrorCode.HTTP_HEADER_ERROR,
    ApiErrorCode.NO_XML_DOCUMENT,
    ApiErrorCode.CONNECT_ERROR,
    ApiErrorCode.WSDL_PARSE_ERROR,
    ApiErrorCode.CONNECTION_RESET,
})


ERROR_CODE_TO_CATEGORY: dict[int, ErrorCategory] = {
    ApiErrorCode.UNKNOWN_ERROR: ErrorCategory.UNKNOWN,
    ApiErrorCode.INVALID_TOKEN: ErrorCategory.AUTHENTICATION,
    ApiErrorCode.INVALID_SESSION_TOKEN: ErrorCategory.AUTHENTICATION,
    ApiErrorCode.INVALID_ACCESS: ErrorCategory.AUTHENTICATION,
    ApiErrorCode.UNAUTHORIZED_IP: ErrorCategory.AUTHENTICATION,
    ApiErrorCode.NO_TOKEN: ErrorCategory.AUTHENTICATION,
    ApiErrorCode.INVALID_INPUT_ARRAY: ErrorCategory.VALIDATION,
    ApiErrorCode.INVALID_PARAMETER: ErrorCategory.VALIDATION,
    ApiErrorCode.REQUIRED_FIELDS: ErrorCategory.VALIDATION,
    ApiErrorCode.INVALID_FILTER: ErrorCategory.VALIDATION,
    ApiErrorCode.SHARD_OFFLINE: ErrorCategory.AVAILABILITY,
    ApiErrorCode.SITE_INACTIVE: ErrorCategory.AVAILABILITY,
    ApiErrorCode.READ_ERROR: ErrorCategory.AVAILABILITY,
    ApiErrorCode.HTTP_HEADER_ERROR: ErrorCategory.AVAILABILITY,
    ApiErrorCode.CONNECT_ERROR: ErrorCategory.AVAILABILITY,
    ApiErrorCode.CONNECTION_RESET: ErrorCategory.AVAILABILITY,
    ApiErrorCode.INVALID_REQUEST: ErrorCategory.PROTOCOL,
    ApiErrorCode.NO_XML_DOCUMENT: ErrorCategory.PROTOCOL,
    ApiErrorCode.INVALID_URL: ErrorCategory.PROTOCOL,
    ApiErrorCode.WSDL_PARSE_ERROR: ErrorCategory.PROTOCOL,
    ApiErrorCode.REQUEST_ERROR: ErrorCategory.PROTOCOL,
    ApiErrorCode.EMPTY_RESULT: ErrorCategory.EMPTY_RESULT,
}


# Fragments of SoapFault / transport messages and the code each one maps to.
# Checked in order, case-insensitively; the first match wins.
TRANSPORT_FAULT_FRAGMENTS: tuple[tuple[str, ApiErrorCode], ...] = (
    ("Error Fetching http headers", ApiErrorCode.HTTP_HEADER_ERROR),
    ("looks like we got no XML document", ApiErrorCode.NO_XML_DOCUMENT),
    ("Could not connect to host", ApiErrorCode.CONNECT_ERROR),
    ("Parsing WSDL", ApiErrorCode.WSDL_PARSE_ERROR),
    ("There was an error in your soap request", ApiErrorCode.REQUEST_ERROR),
    ("Connection reset by peer", ApiErrorCode.CONNECTION_RESET),
    ("Unable to parse URL", ApiErrorCode.INVALID_URL),
)


def is_recoverable_code(code: int | None) -> bool:
    """Return True when `code` is in the recoverable set. 0/None never is."""
    if not code:
        return False
    return code in RECOVERABLE_CODES


def category_for(code: int | None) -> ErrorCategory:
    if not code:
        return ErrorCategory.UNKNOWN
    return ERROR_CODE_TO_CATEGORY.get(code, ErrorCategory.UNKNOWN)


def code_name(code: int | None) -> str | None:
    """Symbolic name for a known code (e.g. 107 -> 'INVALID_REQUEST'), else None."""
    if not code:
        return None
    try:
        return ApiErrorCode(code).name
    except ValueError:
        return None
