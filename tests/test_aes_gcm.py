import os

import pytest
from cryptography.exceptions import InvalidTag

from passcrypt.core.crypto.aes_gcm import AES_TAG_SIZE, AesGcmCipher
from passcrypt.core.crypto.exceptions import DecryptionError

KEY = bytes(range(32))
NONCE = bytes(range(32, 64))


@pytest.fixture
def cipher():
    return AesGcmCipher()


def test_seal_then_open(cipher):
    ciphertext = cipher.seal(KEY, NONCE, b"attack at dawn")
    assert len(ciphertext) == len(b"attack at dawn") + AES_TAG_SIZE
    assert cipher.open(KEY, NONCE, ciphertext) == b"attack at dawn"


def test_accepts_bytearray_key(cipher):
    ciphertext = cipher.seal(bytearray(KEY), NONCE, b"data")
    assert cipher.open(bytearray(KEY), NONCE, ciphertext) == b"data"


def test_empty_plaintext(cipher):
    ciphertext = cipher.seal(KEY, NONCE, b"")
    assert len(ciphertext) == AES_TAG_SIZE
    assert cipher.open(KEY, NONCE, ciphertext) == b""


def test_wrong_key_fails(cipher):
    ciphertext = cipher.seal(KEY, NONCE, b"data")
    with pytest.raises(DecryptionError) as exc_info:
        cipher.open(os.urandom(32), NONCE, ciphertext)
    assert isinstance(exc_info.value.__cause__, InvalidTag)


def test_wrong_nonce_fails(cipher):
    ciphertext = cipher.seal(KEY, NONCE, b"data")
    with pytest.raises(DecryptionError):
        cipher.open(KEY, bytes(32), ciphertext)


@pytest.mark.parametrize("index", [0, 5, -1])
def test_flipped_bit_fails(cipher, index):
    ciphertext = bytearray(cipher.seal(KEY, NONCE, b"some longer message"))
    ciphertext[index] ^= 0x01
    with pytest.raises(DecryptionError):
        cipher.open(KEY, NONCE, bytes(ciphertext))


def test_truncated_ciphertext_fails(cipher):
    with pytest.raises(DecryptionError):
        cipher.open(KEY, NONCE, b"\x00" * (AES_TAG_SIZE - 1))


@pytest.mark.parametrize("key,nonce", [(KEY[:16], NONCE), (KEY, NONCE[:12])])
def test_wrong_sizes_rejected(cipher, key, nonce):
    with pytest.raises(ValueError):
        cipher.seal(key, nonce, b"data")
    with pytest.raises(ValueError):
        cipher.open(key, nonce, b"\x00" * 32)
