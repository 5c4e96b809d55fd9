"""
Key Derivation
==============

Stretches a password and salt into an AES-256 key plus a password verifier.

Algorithm:
    material = PBKDF2-HMAC-SHA512(password, salt, iterations, 64 bytes)
    key      = material[0:32]                  (never leaves the process)
    verifier = base64(material[32:64])         (stored in CipherData)

The two halves are disjoint, so publishing the verifier reveals nothing
about the key beyond what brute-forcing the password would.

The iteration count is not part of CipherData; records must be decrypted
with the same count they were encrypted with.
"""

from __future__ import annotations

from typing import Final, Tuple

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from passcrypt.core.config import DEFAULT_KDF_ITERATIONS
from passcrypt.core.crypto.codec import encode
from passcrypt.core.crypto.types import Password, Verifier
from passcrypt.core.logging import get_secure_logger
from passcrypt.core.memory.zeroization import ZeroizeContext
from passcrypt.utils.validators import ensure_text

logger = get_secure_logger(__name__)

SALT_SIZE: Final[int] = 16  # 128 bits
DERIVED_SIZE: Final[int] = 64  # 512 bits
KEY_SIZE: Final[int] = DERIVED_SIZE // 2
VERIFIER_SIZE: Final[int] = DERIVED_SIZE - KEY_SIZE


def derive_material(
    password: Password,
    salt: bytes,
    iterations: int = DEFAULT_KDF_ITERATIONS,
) -> bytearray:
    """
    Run PBKDF2-HMAC-SHA512 and return the raw 64-byte material.

    The result is a bytearray so the caller can wipe it.

    Raises:
        ValidationError: If password is not valid text
        ValueError: If salt is shorter than 16 bytes or iterations < 1
    """
    ensure_text(password, field_name="password")
    if len(salt) < SALT_SIZE:
        raise ValueError(f"Salt must be at least {SALT_SIZE} bytes")
    if isinstance(iterations, bool) or not isinstance(iterations, int) or iterations < 1:
        raise ValueError("iterations must be a positive integer")

    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA512(),
        length=DERIVED_SIZE,
        salt=bytes(salt),
        iterations=iterations,
    )
    return bytearray(kdf.derive(password.encode("utf-8")))


def derive(
    password: Password,
    salt: bytes,
    iterations: int = DEFAULT_KDF_ITERATIONS,
) -> Tuple[bytearray, Verifier]:
    """
    Derive the encryption key and password verifier.

    Args:
        password: User password
        salt: Random per-record salt (16 bytes)
        iterations: PBKDF2 iteration count

    Returns:
        (key, verifier): 32-byte key as a wipeable bytearray, and the
        base64 verifier. Identical inputs always give identical outputs.
    """
    material = derive_material(password, salt, iterations)
    with ZeroizeContext(material):
        key = bytearray(material[:KEY_SIZE])
        verifier = Verifier(encode(bytes(material[KEY_SIZE:])))

    logger.debug("Derived key material (iterations=%d)", iterations)
    return key, verifier
