import os

import pytest

from passcrypt.core.config import SecureConfig
from passcrypt.core.crypto.encryption import Encryption

# Lowest iteration count the config accepts; keeps the suite fast.
FAST_ITERATIONS = 1_000


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """Isolate every test from PASSCRYPT_* variables and the config singleton."""
    for key in list(os.environ):
        if key.startswith("PASSCRYPT_"):
            monkeypatch.delenv(key)
    SecureConfig.reset_instance()
    yield
    SecureConfig.reset_instance()


@pytest.fixture
def engine():
    return Encryption(iterations=FAST_ITERATIONS)


@pytest.fixture
def record(engine):
    return engine.encrypt("correct-horse", "attack at dawn")
