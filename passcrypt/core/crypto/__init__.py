"""
PassCrypt Cryptographic Core
============================

Password-based authenticated encryption.

Architecture:
    1. RandomSource: OS CSPRNG salts and nonces
    2. PBKDF2-HMAC-SHA512: password -> AES key + verifier
    3. AES-256-GCM: authenticated encryption
    4. base64 codec: text-safe CipherData fields

Security Properties:
    - All encryption is authenticated (AEAD)
    - Fresh salt and nonce for every record
    - Constant-time verifier comparison
    - Derived keys are wiped after use

WARNING: This module handles sensitive cryptographic material.
         Incorrect usage can compromise security.
"""

from passcrypt.core.crypto.aes_gcm import AesGcmCipher
from passcrypt.core.crypto.encryption import (
    CipherData,
    Encryption,
    decrypt,
    decrypt_async,
    encrypt,
    encrypt_async,
)
from passcrypt.core.crypto.exceptions import (
    CryptoError,
    DecryptionError,
    EntropyUnavailableError,
    FormatError,
    PasswordMismatchError,
)
from passcrypt.core.crypto.random_source import RandomSource, generate_random_bits
from passcrypt.core.crypto.types import (
    Ciphertext,
    Password,
    Plaintext,
    Verifier,
    as_password,
    as_plaintext,
)

__all__ = [
    "AesGcmCipher",
    "CipherData",
    "Ciphertext",
    "CryptoError",
    "DecryptionError",
    "Encryption",
    "EntropyUnavailableError",
    "FormatError",
    "Password",
    "PasswordMismatchError",
    "Plaintext",
    "RandomSource",
    "Verifier",
    "as_password",
    "as_plaintext",
    "decrypt",
    "decrypt_async",
    "encrypt",
    "encrypt_async",
    "generate_random_bits",
]
