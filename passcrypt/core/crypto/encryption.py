"""
Password-Based Encryption
=========================

Encrypts text under a password into a self-contained CipherData record.

Encryption Flow:
    salt (128 bits), iv (256 bits)   <- RandomSource
    key, verifier                    <- PBKDF2-HMAC-SHA512(password, salt)
    ciphertext                       <- AES-256-GCM(key, iv, plaintext)
    CipherData(ciphertext, salt, iv, verifier), all base64

Decryption Flow:
    decode all fields                (FormatError on malformed input)
    key, verifier'                   <- PBKDF2-HMAC-SHA512(password, salt)
    verifier' == verifier            (constant time, PasswordMismatchError)
    plaintext                        <- AES-256-GCM open (DecryptionError)

Security Notes:
    - Every encrypt() draws a new salt, so every record has its own key
      and a (key, iv) pair never repeats
    - The derived key is wiped as soon as the call finishes or fails
    - Encryption holds no mutable state; share one instance freely
"""

from __future__ import annotations

import asyncio
import hmac
import json
from dataclasses import dataclass
from typing import Any, Final, NamedTuple, Optional

from passcrypt.core.config import KdfConfig, SecureConfig
from passcrypt.core.crypto import codec
from passcrypt.core.crypto.aes_gcm import AES_NONCE_SIZE, AES_TAG_SIZE, AesGcmCipher
from passcrypt.core.crypto.exceptions import (
    DecryptionError,
    FormatError,
    PasswordMismatchError,
)
from passcrypt.core.crypto.kdf import SALT_SIZE, VERIFIER_SIZE, derive
from passcrypt.core.crypto.random_source import RandomSource
from passcrypt.core.crypto.types import Ciphertext, Password, Plaintext, Verifier
from passcrypt.core.logging import get_secure_logger
from passcrypt.core.memory.zeroization import ZeroizeContext
from passcrypt.utils.validators import ValidationError, ensure_text

logger = get_secure_logger(__name__)

SALT_BITS: Final[int] = SALT_SIZE * 8
IV_BITS: Final[int] = AES_NONCE_SIZE * 8

_FIELDS: Final[tuple[str, ...]] = ("ciphertext", "salt", "iv", "verifier")


@dataclass(frozen=True, slots=True)
class CipherData:
    """
    Immutable encrypted record.

    Holds everything needed to decrypt except the password. All fields
    are standard base64 text:
        ciphertext: AES-GCM output with appended tag (variable length)
        salt: KDF salt (16 bytes)
        iv: AES-GCM nonce (32 bytes)
        verifier: second half of the derived material (32 bytes)
    """

    ciphertext: Ciphertext
    salt: str
    iv: str
    verifier: Verifier

    def to_dict(self) -> dict[str, str]:
        """Return the record as a plain dict of its four text fields."""
        return {name: getattr(self, name) for name in _FIELDS}

    @classmethod
    def from_dict(cls, data: Any) -> CipherData:
        """
        Build a record from a dict produced by to_dict().

        Raises:
            FormatError: If data is not a dict, or a field is missing or
                not a string
        """
        if not isinstance(data, dict):
            raise FormatError("CipherData must be a JSON object")

        for name in _FIELDS:
            if name not in data:
                raise FormatError(f"CipherData is missing field: {name}")
            if not isinstance(data[name], str):
                raise FormatError(f"CipherData field {name} must be a string")

        return cls(
            ciphertext=Ciphertext(data["ciphertext"]),
            salt=data["salt"],
            iv=data["iv"],
            verifier=Verifier(data["verifier"]),
        )

    def to_json(self) -> str:
        """Serialize to a JSON string."""
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, json_str: str) -> CipherData:
        """
        Deserialize from a JSON string.

        Raises:
            FormatError: If json_str is not valid JSON or not a record
        """
        try:
            data = json.loads(json_str)
        except (TypeError, json.JSONDecodeError) as e:
            raise FormatError("CipherData is not valid JSON") from e
        return cls.from_dict(data)

    def __repr__(self) -> str:
        """Safe representation."""
        return f"CipherData(ciphertext_len={len(self.ciphertext)})"


class _DecodedRecord(NamedTuple):
    ciphertext: bytes
    salt: bytes
    iv: bytes
    verifier: bytes


def _decode_record(cipher_data: CipherData) -> _DecodedRecord:
    """Decode and size-check every field before any cryptographic work."""
    if not isinstance(cipher_data, CipherData):
        raise ValidationError(
            f"cipher_data must be CipherData, not {type(cipher_data).__name__}"
        )

    record = _DecodedRecord(
        ciphertext=codec.decode(cipher_data.ciphertext, field_name="ciphertext"),
        salt=codec.decode(cipher_data.salt, field_name="salt"),
        iv=codec.decode(cipher_data.iv, field_name="iv"),
        verifier=codec.decode(cipher_data.verifier, field_name="verifier"),
    )

    if len(record.salt) != SALT_SIZE:
        raise FormatError(f"salt must decode to {SALT_SIZE} bytes")
    if len(record.iv) != AES_NONCE_SIZE:
        raise FormatError(f"iv must decode to {AES_NONCE_SIZE} bytes")
    if len(record.verifier) != VERIFIER_SIZE:
        raise FormatError(f"verifier must decode to {VERIFIER_SIZE} bytes")
    if len(record.ciphertext) < AES_TAG_SIZE:
        raise FormatError("ciphertext is shorter than the authentication tag")

    return record


class Encryption:
    """
    Password-based authenticated encryption.

    Usage:
        engine = Encryption()
        record = engine.encrypt(as_password("correct-horse"), as_plaintext("attack at dawn"))
        engine.decrypt(as_password("correct-horse"), record)  # "attack at dawn"

    The iteration count is not stored in the record: decrypt with an
    Encryption configured with the same count used to encrypt.
    """

    __slots__ = ("_iterations", "_random", "_cipher")

    def __init__(
        self,
        iterations: Optional[int] = None,
        random_source: Optional[RandomSource] = None,
    ) -> None:
        """
        Initialize the engine.

        Args:
            iterations: PBKDF2 iteration count (defaults to the configured
                value, PASSCRYPT_KDF__ITERATIONS or 100,000)
            random_source: Source for salts and nonces

        Raises:
            ValueError: If iterations is not an integer or is below the
                configured minimum
        """
        if iterations is None:
            iterations = SecureConfig.get_instance().kdf.iterations
        else:
            iterations = KdfConfig(iterations=iterations).iterations

        self._iterations = iterations
        self._random = random_source or RandomSource()
        self._cipher = AesGcmCipher()

    @property
    def iterations(self) -> int:
        """Get the PBKDF2 iteration count."""
        return self._iterations

    def encrypt(self, password: Password, plaintext: Plaintext) -> CipherData:
        """
        Encrypt plaintext under a password.

        Args:
            password: User password
            plaintext: Text to protect

        Returns:
            A new CipherData with fresh salt and iv

        Raises:
            ValidationError: If password or plaintext is not valid text
            EntropyUnavailableError: If secure randomness is unavailable
        """
        ensure_text(password, field_name="password")
        ensure_text(plaintext, field_name="plaintext")

        salt = self._random.generate(SALT_BITS)
        iv = self._random.generate(IV_BITS)

        key, verifier = derive(password, salt, self._iterations)
        with ZeroizeContext(key):
            ciphertext = self._cipher.seal(key, iv, plaintext.encode("utf-8"))

        logger.debug("Encrypted record (ciphertext_len=%d)", len(ciphertext))

        return CipherData(
            ciphertext=Ciphertext(codec.encode(ciphertext)),
            salt=codec.encode(salt),
            iv=codec.encode(iv),
            verifier=verifier,
        )

    def decrypt(self, password: Password, cipher_data: CipherData) -> Plaintext:
        """
        Decrypt a record with a password.

        Args:
            password: User password
            cipher_data: Record produced by encrypt()

        Returns:
            The original plaintext

        Raises:
            ValidationError: If password is not a string or cipher_data
                is not a CipherData
            FormatError: If any field is malformed (raised before any
                key derivation)
            PasswordMismatchError: If the password does not match the
                record's verifier (no decryption is attempted)
            DecryptionError: If the password matches but the ciphertext,
                salt or iv has been corrupted
        """
        ensure_text(password, field_name="password")
        record = _decode_record(cipher_data)

        key, verifier = derive(password, record.salt, self._iterations)
        with ZeroizeContext(key):
            if not hmac.compare_digest(codec.decode(verifier), record.verifier):
                logger.info("Password verifier mismatch")
                raise PasswordMismatchError("Password mismatch")

            try:
                plaintext = self._cipher.open(key, record.iv, record.ciphertext)
            except DecryptionError:
                logger.warning("Authenticated decryption failed despite matching verifier")
                raise

        try:
            return Plaintext(plaintext.decode("utf-8"))
        except UnicodeDecodeError as e:
            raise DecryptionError("Decrypted data is not valid UTF-8") from e

    def verify_password(self, password: Password, cipher_data: CipherData) -> bool:
        """
        Check a password against a record without decrypting it.

        Raises:
            FormatError: If any field is malformed
        """
        ensure_text(password, field_name="password")
        record = _decode_record(cipher_data)

        key, verifier = derive(password, record.salt, self._iterations)
        with ZeroizeContext(key):
            return hmac.compare_digest(codec.decode(verifier), record.verifier)

    async def encrypt_async(self, password: Password, plaintext: Plaintext) -> CipherData:
        """Run encrypt() on the event loop's default executor."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.encrypt, password, plaintext)

    async def decrypt_async(self, password: Password, cipher_data: CipherData) -> Plaintext:
        """Run decrypt() on the event loop's default executor."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.decrypt, password, cipher_data)

    def __repr__(self) -> str:
        return f"Encryption(iterations={self._iterations})"


def encrypt(password: Password, plaintext: Plaintext) -> CipherData:
    """Encrypt with an Encryption built from the current SecureConfig."""
    return Encryption().encrypt(password, plaintext)


def decrypt(password: Password, cipher_data: CipherData) -> Plaintext:
    """Decrypt with an Encryption built from the current SecureConfig."""
    return Encryption().decrypt(password, cipher_data)


async def encrypt_async(password: Password, plaintext: Plaintext) -> CipherData:
    """Coroutine form of encrypt()."""
    return await Encryption().encrypt_async(password, plaintext)


async def decrypt_async(password: Password, cipher_data: CipherData) -> Plaintext:
    """Coroutine form of decrypt()."""
    return await Encryption().decrypt_async(password, cipher_data)
