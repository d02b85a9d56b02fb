"""
Tests for payload validation and client hashing
"""

import pytest

from climate_survey.errors import PayloadValidationError
from climate_survey.ingest.identity import client_hash, hash_address
from climate_survey.ingest.validation import scalar_text, validate_payload

# ============================================================================
# TEST: Payload shape
# ============================================================================

def test_valid_payload_passes():
    payload = {"safety_child_safe": 4, "community_free": "Great year", "consent": True, "x": 2.5}
    assert validate_payload(payload) is payload


def test_empty_object_is_valid():
    assert validate_payload({}) == {}


@pytest.mark.parametrize("payload", [None, [], ["a"], "text", 5])
def test_non_object_rejected(payload):
    with pytest.raises(PayloadValidationError) as exc:
        validate_payload(payload)
    assert exc.value.message == "Payload must be an object with key/value pairs."


def test_too_many_fields():
    payload = {f"q{i}": 1 for i in range(1001)}
    with pytest.raises(PayloadValidationError, match="Too many fields"):
        validate_payload(payload)


def test_field_limit_is_inclusive():
    validate_payload({f"q{i}": 1 for i in range(1000)})


def test_long_key_rejected():
    with pytest.raises(PayloadValidationError, match="Invalid field name length"):
        validate_payload({"k" * 201: 1})
    validate_payload({"k" * 200: 1})


@pytest.mark.parametrize("value", [None, [1, 2], {"nested": 1}])
def test_non_scalar_values_rejected(value):
    with pytest.raises(PayloadValidationError, match="strings, numbers, or booleans"):
        validate_payload({"q": value})


def test_long_value_rejected():
    with pytest.raises(PayloadValidationError, match="Field value too long"):
        validate_payload({"community_free": "x" * 2001})
    validate_payload({"community_free": "x" * 2000})


def test_scalar_text_matches_form_rendering():
    assert scalar_text(True) == "true"
    assert scalar_text(False) == "false"
    assert scalar_text(4.0) == "4"
    assert scalar_text(4.5) == "4.5"
    assert scalar_text(" hi ") == " hi "

# ============================================================================
# TEST: Client hashing
# ============================================================================

def test_hash_is_deterministic_and_salted():
    assert client_hash("198.51.100.7", "salt") == client_hash("198.51.100.7", "salt")
    assert client_hash("198.51.100.7", "salt") != client_hash("198.51.100.7", "other")
    assert client_hash("198.51.100.7", "salt") != client_hash("198.51.100.8", "salt")
    assert len(hash_address("198.51.100.7", "salt")) == 64


def test_whitelisted_address_gets_unique_hash():
    first = client_hash("10.0.0.99", "salt", ["10.0.0.99"])
    second = client_hash("10.0.0.99", "salt", ["10.0.0.99"])
    assert first != second
    assert first != hash_address("10.0.0.99", "salt")


@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
def test_non_finite_numbers_rejected(value):
    with pytest.raises(PayloadValidationError, match="strings, numbers, or booleans"):
        validate_payload({"safety_child_safe": value})
