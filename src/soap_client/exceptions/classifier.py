r"""
# =================================================================================================================
# Code / message normalization
# =================================================================================================================

Every failure that reaches `ApiError` arrives in one of three shapes:

    1. message + explicit code           ApiError("Unable to verify parameter", code=106)
    2. API fault string with the code    "107 : There was an error in your soap request."
    3. transport fault text, no code     "SOAP-ERROR: Parsing WSDL: Couldn't load from ..."

`normalize()` folds all three into one `(code, message)` pair:

| Step | Input shape                       | Resulting code      | Message                      |
| ---- | --------------------------------- | ------------------- | ---------------------------- |
| 1    | explicit non-zero code            | as given            | "{code} : {message}"         |
| 2    | "<number> : <text>"               | int(<number>)       | "{code} : {text}"            |
| 3    | text contains a transport fragment| misc 980xx code     | unchanged                    |
| -    | nothing matched                   | 0 (unclassified)    | unchanged                    |

Then, for every shape, a retry counter > 1 appends " [Tried: n]".

Transport-level codes are metadata only; their text is never prefixed.
"""

import logging
import re
from dataclasses import dataclass
from typing import Literal

from .codes import TRANSPORT_FAULT_FRAGMENTS

logger = logging.getLogger(__name__)

CodeSource = Literal["explicit", "parsed", "transport", "unclassified"]

# Integer, decimal or exponent notation with an optional sign ("107", "-1", "1.0", "1e2").
# ASCII digits only: int() would also accept "١٠٧".
_NUMERIC_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$", re.ASCII)


@dataclass(frozen=True)
class NormalizedError:
    code: int
    message: str
    source: CodeSource


def _parse_numeric(value: str) -> int | None:
    if not _NUMERIC_RE.match(value):
        return None
    try:
        return int(value)
    except ValueError:
        pass
    try:
        return int(float(value))
    except OverflowError:
        return None


def split_coded_message(message: str) -> tuple[int, str] | None:
    """
    Split an API fault string of the form "<number> : <text>".

    Returns (code, text) or None when there is no colon or the left part is not numeric.
    Only the first colon splits, so "107 : a: b" -> (107, "a: b").
    """
    if ":" not in message:
        return None
    left, right = (part.strip() for part in message.split(":", 1))
    code = _parse_numeric(left)
    if code is None:
        return None
    return code, right


def match_transport_fault(message: str) -> int:
    """Return the misc code for the first known transport fragment in `message`, else 0."""
    haystack = (message or "").lower()
    for fragment, code in TRANSPORT_FAULT_FRAGMENTS:
        if fragment.lower() in haystack:
            return int(code)
    return 0


def normalize(message: str = "", code: int = 0, tries: int | None = None) -> NormalizedError:
    """
    Produce the canonical (code, message) pair for an API failure.

    Args:
        message: raw failure text (API fault string, transport message, or free text).
        code: explicit code supplied by the caller; 0 means "work it out from the message".
        tries: number of attempts made so far; only > 1 is reported in the message.
    """
    message = "" if message is None else str(message)
    code = int(code or 0)
    source: CodeSource = "unclassified"

    if code:
        source = "explicit"
    else:
        parsed = split_coded_message(message)
        if parsed is not None:
            code, message = parsed
            if code:
                source = "parsed"

    if not code:
        code = match_transport_fault(message)
        if code:
            source = "transport"
            logger.debug("Transport fault recognized", extra={"error_code": code})

    if code and source in ("explicit", "parsed"):
        message = f"{code} : {message}"

    if not code:
        # Keep the text at DEBUG only; fault strings can echo request data.
        logger.debug("Unclassified API failure", extra={"message_snippet": message[:200]})

    if tries and tries > 1:
        message += f" [Tried: {tries}]"

    return NormalizedError(code=code, message=message, source=source)
