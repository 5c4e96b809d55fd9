"""
Validation Utilities
====================

Input validation for values crossing the public API.
"""

from __future__ import annotations

from typing import Any


class ValidationError(ValueError):
    """Raised when validation fails."""
    pass


def ensure_text(value: Any, field_name: str = "value") -> str:
    """
    Validate that a value is a str.

    Empty strings are accepted; password strength is the caller's concern.

    Args:
        value: The value to validate
        field_name: Name of the field for error messages

    Returns:
        The value, unchanged

    Raises:
        ValidationError: If value is not a string, or cannot be encoded
            as UTF-8 (lone surrogates)
    """
    if not isinstance(value, str):
        raise ValidationError(
            f"{field_name} must be a string, not {type(value).__name__}"
        )
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as e:
        raise ValidationError(f"{field_name} is not valid Unicode text") from e
    return value


def ensure_bytes(value: Any, field_name: str = "value") -> bytes:
    """
    Validate that a value is bytes-like and return it as bytes.

    Raises:
        ValidationError: If value is not bytes, bytearray or memoryview
    """
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise ValidationError(
            f"{field_name} must be bytes, not {type(value).__name__}"
        )
    return bytes(value)
