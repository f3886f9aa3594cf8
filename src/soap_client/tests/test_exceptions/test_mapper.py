# src/soap_client/tests/test_exceptions/test_mapper.py
import logging

import pytest

from soap_client.exceptions import (
    ApiError,
    ApiErrorCode,
    transport_error_handler,
    wrap_transport_error,
)


class SoapFault(Exception):
    """Stand-in for the fault type a SOAP library raises."""


def test_wrap_classifies_transport_fault_and_keeps_cause():
    fault = SoapFault("SOAP-ERROR: Parsing WSDL: Couldn't load from 'https://api.example.com/?q=wsdl'")
    err = wrap_transport_error(fault, tries=2, request="<req/>", response=None)

    assert isinstance(err, ApiError)
    assert err.code == ApiErrorCode.WSDL_PARSE_ERROR
    assert err.message.endswith(" [Tried: 2]")
    assert err.get_cause() is fault
    assert err.request == "<req/>"
    assert err.response is None
    assert err.is_recoverable() is True


def test_wrap_parses_api_fault_string():
    err = wrap_transport_error(SoapFault("102 : Authentication failed for token"))
    assert err.code == ApiErrorCode.INVALID_TOKEN
    assert err.message == "102 : Authentication failed for token"
    assert err.is_recoverable() is False


def test_wrap_passes_api_error_through_without_overwriting_bodies():
    original = ApiError("113 : read error").attach_request("<original/>")
    err = wrap_transport_error(original, request="<other/>", response="<resp/>")

    assert err is original
    assert err.request == "<original/>"
    assert err.response == "<resp/>"


def test_wrap_logs_known_fault_at_info(caplog):
    with caplog.at_level(logging.INFO, logger="soap_client.exceptions.mapper"):
        wrap_transport_error(SoapFault("Connection reset by peer"))
    record = next(r for r in caplog.records if r.getMessage() == "mapper.transport_fault")
    assert record.levelno == logging.INFO
    assert record.error_code == ApiErrorCode.CONNECTION_RESET
    assert record.exc_type == "SoapFault"


def test_wrap_warns_on_unclassified_fault(caplog):
    with caplog.at_level(logging.INFO, logger="soap_client.exceptions.mapper"):
        err = wrap_transport_error(RuntimeError("kaboom"))
    assert err.code == 0
    assert any(
        r.getMessage() == "mapper.unclassified_transport_error" and r.levelno == logging.WARNING
        for r in caplog.records
    )


def test_handler_reraises_as_api_error_from_original():
    with pytest.raises(ApiError) as info:
        with transport_error_handler(tries=3, request="<req/>"):
            raise OSError("Could not connect to host")

    err = info.value
    assert err.code == ApiErrorCode.CONNECT_ERROR
    assert err.message == "Could not connect to host [Tried: 3]"
    assert isinstance(err.__cause__, OSError)
    assert err.request == "<req/>"


def test_handler_reraises_api_error_unchanged():
    raised = ApiError("104 : You do not have valid access for this method.")
    with pytest.raises(ApiError) as info:
        with transport_error_handler(response="<resp/>"):
            raise raised
    assert info.value is raised
    assert info.value.response == "<resp/>"
    assert info.value.get_cause() is None


def test_handler_call_site_is_the_callers_code():
    class Client:
        def call(self):
            with transport_error_handler():
                raise SoapFault("Error Fetching http headers")

    with pytest.raises(ApiError) as info:
        Client().call()
    assert info.value.call_site_component == "Client"
    assert info.value.call_site_operation == "call"


def test_handler_passes_through_on_success():
    with transport_error_handler(tries=1):
        value = 42
    assert value == 42
