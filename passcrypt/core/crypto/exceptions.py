"""
Cryptographic Error Taxonomy
============================

Every failure raised by the crypto core derives from CryptoError so
callers can catch the whole family, while still telling apart a wrong
password from a corrupted record.

Error messages never include passwords, keys or plaintext.
"""

from __future__ import annotations


class CryptoError(Exception):
    """Base class for all PassCrypt cryptographic errors."""
    pass


class EntropyUnavailableError(CryptoError):
    """
    Raised when the OS CSPRNG cannot produce random bytes.

    This is fatal for the current operation and must not be retried
    or replaced with a weaker generator.
    """
    pass


class PasswordMismatchError(CryptoError):
    """
    Raised when the password verifier does not match the record.

    No decryption is attempted when this is raised.
    """
    pass


class DecryptionError(CryptoError):
    """
    Raised when authenticated decryption fails.

    The verifier matched, so the ciphertext, IV or salt has been
    corrupted or tampered with.
    """
    pass


class FormatError(CryptoError, ValueError):
    """Raised when a CipherData field is not valid encoded text."""
    pass
