from pathlib import Path

import pytest

from passcrypt.core.config import (
    KdfConfig,
    LoggingConfig,
    SecureConfig,
)


def test_defaults():
    config = SecureConfig.load()
    assert config.kdf.iterations == 100_000
    assert config.logging.level == "WARNING"
    assert config.logging.enable_file is False


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("PASSCRYPT_KDF__ITERATIONS", "250000")
    monkeypatch.setenv("PASSCRYPT_LOGGING__LEVEL", "DEBUG")
    monkeypatch.setenv("PASSCRYPT_LOGGING__ENABLE_FILE", "true")
    monkeypatch.setenv("PASSCRYPT_LOGGING__JSON", "1")
    monkeypatch.setenv("PASSCRYPT_LOGGING__LOG_DIR", str(tmp_path))

    config = SecureConfig.load()

    assert config.kdf.iterations == 250_000
    assert config.logging.level == "DEBUG"
    assert config.logging.enable_file is True
    assert config.logging.enable_json is True
    assert config.logging.log_dir == Path(tmp_path)


def test_custom_prefix(monkeypatch):
    monkeypatch.setenv("MYAPP_KDF__ITERATIONS", "5000")
    assert SecureConfig.load(env_prefix="myapp").kdf.iterations == 5_000


def test_sensitive_keys_ignored(monkeypatch):
    monkeypatch.setenv("PASSCRYPT_KDF__PASSWORD", "hunter2")
    monkeypatch.setenv("PASSCRYPT_APP__SECRET", "s3cret")
    monkeypatch.setenv("PASSCRYPT_KDF__ITERATIONS", "2000")

    overrides = SecureConfig._parse_env_overrides("PASSCRYPT")

    assert overrides == {"kdf.iterations": "2000"}


def test_invalid_iterations_from_environment(monkeypatch):
    monkeypatch.setenv("PASSCRYPT_KDF__ITERATIONS", "10")
    with pytest.raises(ValueError):
        SecureConfig.load()


def test_non_numeric_iterations_from_environment(monkeypatch):
    monkeypatch.setenv("PASSCRYPT_KDF__ITERATIONS", "lots")
    with pytest.raises(ValueError):
        SecureConfig.load()


@pytest.mark.parametrize(
    "factory",
    [
        lambda: KdfConfig(iterations=999),
        lambda: KdfConfig(iterations=1500.5),
        lambda: KdfConfig(iterations="2000"),
        lambda: KdfConfig(iterations=True),
        lambda: LoggingConfig(level="LOUD"),
        lambda: LoggingConfig(log_dir=Path("relative/logs")),
    ],
)
def test_invalid_sections_rejected(factory):
    with pytest.raises(ValueError):
        factory()


def test_config_is_immutable():
    config = SecureConfig.load()
    with pytest.raises(AttributeError):
        config._kdf = KdfConfig(iterations=5_000)


def test_singleton_and_reset(monkeypatch):
    first = SecureConfig.get_instance()
    assert SecureConfig.get_instance() is first

    monkeypatch.setenv("PASSCRYPT_KDF__ITERATIONS", "3000")
    SecureConfig.reset_instance()
    second = SecureConfig.get_instance()

    assert second is not first
    assert second.kdf.iterations == 3_000


def test_repr_is_safe():
    assert repr(SecureConfig()) == "SecureConfig(iterations=100000, log_level=WARNING)"
