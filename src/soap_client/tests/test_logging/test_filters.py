# src/soap_client/tests/test_logging/test_filters.py
import logging

from soap_client.core.logging.filters import (
    RedactFilter,
    RequestIdFilter,
    get_request_id,
    reset_request_id,
    set_request_id,
)


def make_record():
    return logging.LogRecord("test", logging.INFO, __file__, 1, "hello %s", ("world",), None)


def test_request_id_filter_defaults_to_dash():
    rec = make_record()
    token = set_request_id(None)
    try:
        assert RequestIdFilter().filter(rec) is True
        assert rec.request_id == "-"
    finally:
        reset_request_id(token)


def test_request_id_filter_uses_contextvar():
    rec = make_record()
    token = set_request_id("addContacts-1")
    try:
        RequestIdFilter().filter(rec)
        assert rec.request_id == "addContacts-1"
    finally:
        reset_request_id(token)


def test_request_id_filter_respects_record_extra():
    rec = make_record()
    rec.request_id = "explicit"
    token = set_request_id("context-id")
    try:
        RequestIdFilter().filter(rec)
        assert rec.request_id == "explicit"
    finally:
        reset_request_id(token)


def test_reset_restores_previous_value():
    outer = set_request_id("outer")
    inner = set_request_id("inner")
    reset_request_id(inner)
    assert get_request_id() == "outer"
    reset_request_id(outer)


def test_redact_filter_masks_sensitive_extras():
    rec = make_record()
    rec.api_token = "abc123"
    rec.session_id = "s-1"
    rec.error_code = 102
    assert RedactFilter().filter(rec) is True
    assert rec.api_token == RedactFilter.MASK
    assert rec.session_id == RedactFilter.MASK
    assert rec.error_code == 102
