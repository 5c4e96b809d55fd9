"""
Binary-to-text codec for CipherData fields (standard padded base64).
"""

from __future__ import annotations

import binascii
from base64 import b64decode, b64encode

from passcrypt.core.crypto.exceptions import FormatError
from passcrypt.utils.validators import ensure_bytes


def encode(data: bytes) -> str:
    """Encode bytes as standard base64 text."""
    return b64encode(ensure_bytes(data, field_name="data")).decode("ascii")


def decode(text: str, field_name: str = "value") -> bytes:
    """
    Decode standard base64 text.

    Args:
        text: Base64 text with padding
        field_name: Field name used in error messages

    Returns:
        Decoded bytes

    Raises:
        FormatError: If text is not a str, contains characters outside the
            base64 alphabet, or is incorrectly padded
    """
    if not isinstance(text, str):
        raise FormatError(f"{field_name} must be base64 text, not {type(text).__name__}")

    try:
        return b64decode(text.encode("ascii"), validate=True)
    except (UnicodeEncodeError, binascii.Error) as e:
        raise FormatError(f"{field_name} is not valid base64") from e
