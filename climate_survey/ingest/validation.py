# climate_survey/ingest/validation.py
import math

from ..errors import PayloadValidationError

MAX_FIELDS = 1000
MAX_KEY_LENGTH = 200
MAX_VALUE_LENGTH = 2000


def scalar_text(value) -> str:
    """Render a payload scalar the way the browser form serialises it"""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    return str(value)


def _is_scalar(value) -> bool:
    # NaN, Infinity and 1e400 parse as non-finite floats; JSONB cannot hold them
    if isinstance(value, float):
        return math.isfinite(value)
    return isinstance(value, (str, int))  # bool is an int subclass


def validate_payload(payload) -> dict:
    """
    Check the flat key/value shape of a submission and return it unchanged.
    Raises PayloadValidationError on the first problem found.
    """
    if not isinstance(payload, dict):
        raise PayloadValidationError("Payload must be an object with key/value pairs.")
    if len(payload) > MAX_FIELDS:
        raise PayloadValidationError("Too many fields in payload.")
    for key, value in payload.items():
        if not isinstance(key, str) or len(key) > MAX_KEY_LENGTH:
            raise PayloadValidationError("Invalid field name length.")
        if not _is_scalar(value):
            raise PayloadValidationError("All values must be strings, numbers, or booleans.")
        if len(scalar_text(value)) > MAX_VALUE_LENGTH:
            raise PayloadValidationError("Field value too long.")
    return payload
