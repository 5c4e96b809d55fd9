"""
PassCrypt - Password-Based Authenticated Encryption
===================================================

Encrypts text under a password into a self-contained, storable record.

    >>> from passcrypt import encrypt, decrypt
    >>> record = encrypt("correct-horse", "attack at dawn")
    >>> decrypt("correct-horse", record)
    'attack at dawn'

Security Notice:
- Passwords are never stored or logged
- Wrong passwords fail fast, before any decryption
- Tampered records fail authentication
"""

from passcrypt.core.config import SecureConfig
from passcrypt.core.crypto import (
    CipherData,
    CryptoError,
    DecryptionError,
    Encryption,
    EntropyUnavailableError,
    FormatError,
    PasswordMismatchError,
    as_password,
    as_plaintext,
    decrypt,
    decrypt_async,
    encrypt,
    encrypt_async,
)
from passcrypt.core.logging import get_secure_logger
from passcrypt.utils.validators import ValidationError

__version__ = "0.1.0"

__all__ = [
    "CipherData",
    "CryptoError",
    "DecryptionError",
    "Encryption",
    "EntropyUnavailableError",
    "FormatError",
    "PasswordMismatchError",
    "SecureConfig",
    "ValidationError",
    "as_password",
    "as_plaintext",
    "decrypt",
    "decrypt_async",
    "encrypt",
    "encrypt_async",
    "get_secure_logger",
    "__version__",
]
