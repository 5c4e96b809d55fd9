"""
Branded string types for the encryption API.

These are static-only distinctions: at run time each is a plain str,
but a type checker will refuse a Plaintext where a Password is expected.
"""

from __future__ import annotations

from typing import NewType

from passcrypt.utils.validators import ensure_text

Password = NewType("Password", str)
Plaintext = NewType("Plaintext", str)
Ciphertext = NewType("Ciphertext", str)
Verifier = NewType("Verifier", str)


def as_password(value: str) -> Password:
    """Brand a caller-supplied string as a Password."""
    return Password(ensure_text(value, field_name="password"))


def as_plaintext(value: str) -> Plaintext:
    """Brand a caller-supplied string as a Plaintext."""
    return Plaintext(ensure_text(value, field_name="plaintext"))
