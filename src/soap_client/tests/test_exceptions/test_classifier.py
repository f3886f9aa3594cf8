# src/soap_client/tests/test_exceptions/test_classifier.py
import logging

import pytest

from soap_client.exceptions.classifier import (
    match_transport_fault,
    normalize,
    split_coded_message,
)


def test_explicit_code_is_used_as_is_and_prefixed():
    result = normalize("Unable to verify parameter", code=106)
    assert result.code == 106
    assert result.message == "106 : Unable to verify parameter"
    assert result.source == "explicit"


def test_explicit_code_skips_message_parsing():
    result = normalize("107 : bad soap body", code=103)
    assert result.code == 103
    assert result.message == "103 : 107 : bad soap body"


def test_coded_message_is_parsed_and_reprefixed():
    result = normalize("107 : bad soap body")
    assert result.code == 107
    assert result.message == "107 : bad soap body"
    assert result.source == "parsed"


def test_coded_message_without_spaces():
    result = normalize("103:Your session is invalid")
    assert result.code == 103
    assert result.message == "103 : Your session is invalid"


def test_only_first_colon_splits():
    assert split_coded_message("106 : Unable to verify parameter: email") == (
        106,
        "Unable to verify parameter: email",
    )


@pytest.mark.parametrize("message", ["107 bad soap body", "something failed", ""])
def test_no_colon_no_split(message):
    assert split_coded_message(message) is None


@pytest.mark.parametrize("message", ["abc : def", "107a : x", "1 2 : x", " : x", "nan : x"])
def test_non_numeric_left_part_no_split(message):
    assert split_coded_message(message) is None
    result = normalize(message)
    assert result.code == 0
    assert result.message == message


def test_decimal_and_exponent_left_parts_are_numeric():
    assert split_coded_message("107.0 : x") == (107, "x")
    assert split_coded_message("1e2 : x") == (100, "x")


def test_unmatched_message_is_unclassified():
    result = normalize("something failed")
    assert result.code == 0
    assert result.message == "something failed"
    assert result.source == "unclassified"


def test_connection_reset_is_matched_and_not_prefixed():
    raw = "SSL: Connection reset by peer"
    result = normalize(raw)
    assert result.code == 98007
    assert result.message == raw
    assert result.source == "transport"


def test_transport_match_is_case_insensitive():
    assert match_transport_fault("SOAP-ERROR: parsing wsdl: Couldn't load") == 98005
    assert match_transport_fault("error fetching HTTP HEADERS") == 98001


@pytest.mark.parametrize(
    "raw, code",
    [
        ("Error Fetching http headers", 98001),
        ("looks like we got no XML document", 98002),
        ("Could not connect to host", 98004),
        ("SOAP-ERROR: Parsing WSDL: Couldn't load from 'x'", 98005),
        ("There was an error in your soap request", 98006),
        ("Connection reset by peer", 98007),
        ("Unable to parse URL", 98003),
    ],
)
def test_transport_fragment_table(raw, code):
    assert match_transport_fault(raw) == code


def test_first_matching_fragment_wins():
    raw = "Could not connect to host; Error Fetching http headers"
    assert match_transport_fault(raw) == 98001


def test_parsed_zero_code_falls_through_to_transport_match():
    result = normalize("0 : Connection reset by peer")
    assert result.code == 98007
    assert result.message == "Connection reset by peer"


def test_parsed_zero_code_without_match_is_unclassified():
    result = normalize("0 : nothing to see")
    assert result.code == 0
    assert result.message == "nothing to see"


def test_tries_suffix_appended_once_after_prefix():
    result = normalize("103 : session expired", tries=2)
    assert result.message == "103 : session expired [Tried: 2]"


def test_tries_suffix_on_transport_fault():
    result = normalize("Could not connect to host", tries=3)
    assert result.message == "Could not connect to host [Tried: 3]"
    assert result.message.count("[Tried:") == 1


@pytest.mark.parametrize("tries", [None, 0, 1])
def test_tries_of_one_or_less_add_nothing(tries):
    assert normalize("something failed", tries=tries).message == "something failed"


def test_none_message_is_treated_as_empty():
    result = normalize(None)
    assert result.code == 0
    assert result.message == ""


def test_unclassified_failures_logged_at_debug(caplog):
    with caplog.at_level(logging.DEBUG, logger="soap_client.exceptions.classifier"):
        normalize("totally novel failure")
    assert any(r.getMessage() == "Unclassified API failure" for r in caplog.records)


def test_non_ascii_digits_are_not_a_code():
    result = normalize("١٠٧ : x")
    assert result.code == 0
    assert result.message == "١٠٧ : x"
    assert split_coded_message("١٠٧ : x") is None
