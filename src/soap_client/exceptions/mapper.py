import logging
from contextlib import contextmanager

from .base import ApiError

logger = logging.getLogger(__name__)


def wrap_transport_error(exc: BaseException, *, tries: int | None = None,
                         request: str | None = None, response: str | None = None) -> ApiError:
    """
    Turn any exception raised by the SOAP/HTTP layer into an `ApiError`.

    - An `ApiError` is returned as-is; request/response are attached only if not already set.
    - Anything else is classified from `str(exc)` and keeps `exc` as its cause.
    """
    if isinstance(exc, ApiError):
        if request is not None and exc.request is None:
            exc.attach_request(request)
        if response is not None and exc.response is None:
            exc.attach_response(response)
        return exc

    error = ApiError(str(exc), tries=tries, previous=exc)
    error.attach_request(request).attach_response(response)

    if error.code:
        # Known transport faults are expected operational noise (timeouts, resets, maintenance).
        logger.info(
            "mapper.transport_fault",
            extra={
                "error_code": error.code,
                "exc_type": type(exc).__name__,
                "recoverable": error.is_recoverable(),
            },
        )
    else:
        logger.warning("mapper.unclassified_transport_error", extra={"exc_type": type(exc).__name__})
        logger.debug("mapper.unclassified_transport_raw", extra={"raw": str(exc)[:500]})

    return error


@contextmanager
def transport_error_handler(*, tries: int | None = None, request: str | None = None,
                            response: str | None = None):
    """
    Usage:
        with transport_error_handler(tries=attempt, request=envelope):
            result = soap_client.service.addContacts(contacts)

    Anything raised inside the block is re-raised as an `ApiError` chained to the original.
    """
    try:
        yield
    except ApiError as exc:
        wrap_transport_error(exc, request=request, response=response)
        raise
    except Exception as exc:
        raise wrap_transport_error(exc, tries=tries, request=request, response=response) from exc
