import hashlib
from base64 import b64decode, b64encode

import pytest

from passcrypt.core.crypto.kdf import KEY_SIZE, derive, derive_material
from passcrypt.utils.validators import ValidationError

SALT = bytes.fromhex("00112233445566778899aabbccddeeff")
ITERATIONS = 1_000


def test_matches_pbkdf2_hmac_sha512():
    expected = hashlib.pbkdf2_hmac("sha512", b"correct-horse", SALT, ITERATIONS, dklen=64)

    key, verifier = derive("correct-horse", SALT, ITERATIONS)

    assert bytes(key) == expected[:32]
    assert verifier == b64encode(expected[32:]).decode()


def test_output_sizes():
    key, verifier = derive("pw", SALT, ITERATIONS)
    assert isinstance(key, bytearray)
    assert len(key) == KEY_SIZE == 32
    assert len(b64decode(verifier)) == 32


def test_derivation_is_deterministic():
    first = derive("pw", SALT, ITERATIONS)
    second = derive("pw", SALT, ITERATIONS)
    assert first == second


def test_key_and_verifier_are_disjoint_halves():
    material = bytes(derive_material("pw", SALT, ITERATIONS))
    key, verifier = derive("pw", SALT, ITERATIONS)
    assert bytes(key) == material[:32]
    assert b64decode(verifier) == material[32:]
    assert bytes(key) != b64decode(verifier)


def test_salt_password_and_iterations_all_matter():
    _, base = derive("pw", SALT, ITERATIONS)
    assert derive("pw2", SALT, ITERATIONS)[1] != base
    assert derive("pw", bytes(16), ITERATIONS)[1] != base
    assert derive("pw", SALT, ITERATIONS + 1)[1] != base


def test_unicode_password_is_utf8_encoded():
    expected = hashlib.pbkdf2_hmac("sha512", "pässwörd".encode("utf-8"), SALT, ITERATIONS, dklen=64)
    key, _ = derive("pässwörd", SALT, ITERATIONS)
    assert bytes(key) == expected[:32]


def test_short_salt_rejected():
    with pytest.raises(ValueError):
        derive("pw", b"short", ITERATIONS)


@pytest.mark.parametrize("iterations", [0, -1, True])
def test_invalid_iterations_rejected(iterations):
    with pytest.raises(ValueError):
        derive("pw", SALT, iterations)


@pytest.mark.parametrize("password", [b"pw", None, "\ud800"])
def test_invalid_password_rejected(password):
    with pytest.raises(ValidationError):
        derive(password, SALT, ITERATIONS)
