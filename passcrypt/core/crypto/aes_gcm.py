"""
AES-256-GCM Authenticated Encryption
====================================

Seals and opens byte strings under a password-derived key.

Security Properties:
    - 256-bit key
    - 256-bit nonce (GCM hashes nonces longer than 96 bits into its
      initial counter block; uniqueness comes from generating a fresh
      random nonce and a fresh salt-derived key for every record)
    - 128-bit authentication tag appended to the ciphertext

WARNING:
    - Never reuse (key, nonce) pairs
    - open() verifies the tag before returning any plaintext
"""

from __future__ import annotations

from typing import Final

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from passcrypt.core.crypto.exceptions import DecryptionError

AES_KEY_SIZE: Final[int] = 32  # 256 bits
AES_NONCE_SIZE: Final[int] = 32  # 256 bits
AES_TAG_SIZE: Final[int] = 16  # 128 bits


class AesGcmCipher:
    """
    AES-256-GCM AEAD wrapper.

    Usage:
        cipher = AesGcmCipher()
        ciphertext = cipher.seal(key, nonce, b"attack at dawn")
        plaintext = cipher.open(key, nonce, ciphertext)
    """

    __slots__ = ()

    @staticmethod
    def _check_sizes(key: bytes | bytearray, nonce: bytes) -> None:
        if len(key) != AES_KEY_SIZE:
            raise ValueError(f"Key must be exactly {AES_KEY_SIZE} bytes")
        if len(nonce) != AES_NONCE_SIZE:
            raise ValueError(f"Nonce must be exactly {AES_NONCE_SIZE} bytes")

    def seal(self, key: bytes | bytearray, nonce: bytes, plaintext: bytes) -> bytes:
        """
        Encrypt and authenticate plaintext.

        Args:
            key: 32-byte AES key
            nonce: 32-byte nonce, never reused with this key
            plaintext: Data to encrypt (may be empty)

        Returns:
            Ciphertext with the 16-byte tag appended

        Raises:
            ValueError: If key or nonce has the wrong size
        """
        self._check_sizes(key, nonce)
        return AESGCM(key).encrypt(nonce, plaintext, None)

    def open(self, key: bytes | bytearray, nonce: bytes, ciphertext: bytes) -> bytes:
        """
        Verify and decrypt ciphertext.

        Args:
            key: 32-byte AES key
            nonce: The nonce used by seal()
            ciphertext: seal() output, tag included

        Returns:
            Decrypted plaintext

        Raises:
            ValueError: If key or nonce has the wrong size
            DecryptionError: If the tag does not verify (wrong key, wrong
                nonce, truncated or tampered ciphertext)
        """
        self._check_sizes(key, nonce)
        if len(ciphertext) < AES_TAG_SIZE:
            raise DecryptionError("Ciphertext too short (missing authentication tag)")

        try:
            return AESGCM(key).decrypt(nonce, ciphertext, None)
        except InvalidTag as e:
            raise DecryptionError(
                "Authentication failed - data corrupted or tampered"
            ) from e
