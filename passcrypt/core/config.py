"""
Secure Configuration Module
===========================

Provides immutable, environment-aware configuration for the encryption core.

Security Features:
- Immutable configuration after initialization
- Environment variable override support (PASSCRYPT_ prefix)
- Sensitive-looking keys are never read from the environment
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final, Optional


_SENSITIVE_KEYS: Final[frozenset[str]] = frozenset({
    "password", "secret", "token", "api_key",
    "private", "credential", "auth",
})

DEFAULT_KDF_ITERATIONS: Final[int] = 100_000
MIN_KDF_ITERATIONS: Final[int] = 1_000


def _is_sensitive_key(key: str) -> bool:
    """Check if a configuration key might contain sensitive data."""
    key_lower = key.lower()
    return any(sensitive in key_lower for sensitive in _SENSITIVE_KEYS)


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True, slots=True)
class KdfConfig:
    """Immutable key derivation configuration."""

    iterations: int = DEFAULT_KDF_ITERATIONS

    def __post_init__(self) -> None:
        """Validate key derivation settings."""
        if isinstance(self.iterations, bool) or not isinstance(self.iterations, int):
            raise ValueError("Key derivation iterations must be an integer")
        if self.iterations < MIN_KDF_ITERATIONS:
            raise ValueError(
                f"Key derivation iterations must be at least {MIN_KDF_ITERATIONS:,}"
            )


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Immutable logging configuration."""

    level: str = "WARNING"
    enable_console: bool = True
    enable_file: bool = False
    enable_json: bool = False
    log_dir: Optional[Path] = None
    max_file_size_bytes: int = 10 * 1024 * 1024  # 10 MB
    backup_count: int = 5

    def __post_init__(self) -> None:
        """Validate logging settings."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if self.level.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {self.level}")
        if self.log_dir is not None and not self.log_dir.is_absolute():
            raise ValueError(f"log_dir must be an absolute path: {self.log_dir}")


class SecureConfig:
    """
    Centralized, immutable configuration loader with environment override support.

    Usage:
        config = SecureConfig.load()
        iterations = config.kdf.iterations
        level = config.logging.level
    """

    __slots__ = ("_kdf", "_logging", "_frozen")

    _instance: Optional[SecureConfig] = None

    def __init__(
        self,
        kdf: Optional[KdfConfig] = None,
        logging: Optional[LoggingConfig] = None,
    ) -> None:
        """Initialize configuration. Use SecureConfig.load() for standard initialization."""
        object.__setattr__(self, "_frozen", False)
        object.__setattr__(self, "_kdf", kdf or KdfConfig())
        object.__setattr__(self, "_logging", logging or LoggingConfig())
        object.__setattr__(self, "_frozen", True)

    @property
    def kdf(self) -> KdfConfig:
        """Get key derivation configuration."""
        return self._kdf

    @property
    def logging(self) -> LoggingConfig:
        """Get logging configuration."""
        return self._logging

    @classmethod
    def load(cls, env_prefix: str = "PASSCRYPT") -> SecureConfig:
        """
        Load configuration with environment variable overrides.

        Environment variables are prefixed with PASSCRYPT_ and use
        double underscores for nested values.

        Examples:
            PASSCRYPT_KDF__ITERATIONS=210000
            PASSCRYPT_LOGGING__LEVEL=DEBUG
            PASSCRYPT_LOGGING__LOG_DIR=/var/log/passcrypt

        Args:
            env_prefix: Prefix for environment variables (default: PASSCRYPT)

        Returns:
            Configured SecureConfig instance

        Raises:
            ValueError: If an override has an invalid value
        """
        env_overrides = cls._parse_env_overrides(env_prefix)

        kdf_kwargs: dict[str, Any] = {}
        if "kdf.iterations" in env_overrides:
            kdf_kwargs["iterations"] = int(env_overrides["kdf.iterations"])

        logging_kwargs: dict[str, Any] = {}
        if "logging.level" in env_overrides:
            logging_kwargs["level"] = env_overrides["logging.level"]
        if "logging.enable_console" in env_overrides:
            logging_kwargs["enable_console"] = _parse_bool(env_overrides["logging.enable_console"])
        if "logging.enable_file" in env_overrides:
            logging_kwargs["enable_file"] = _parse_bool(env_overrides["logging.enable_file"])
        if "logging.json" in env_overrides:
            logging_kwargs["enable_json"] = _parse_bool(env_overrides["logging.json"])
        if "logging.log_dir" in env_overrides:
            logging_kwargs["log_dir"] = Path(env_overrides["logging.log_dir"])

        return cls(
            kdf=KdfConfig(**kdf_kwargs) if kdf_kwargs else None,
            logging=LoggingConfig(**logging_kwargs) if logging_kwargs else None,
        )

    @staticmethod
    def _parse_env_overrides(prefix: str) -> dict[str, str]:
        """Parse environment variables with the given prefix."""
        overrides: dict[str, str] = {}
        prefix_upper = f"{prefix.upper()}_"

        for key, value in os.environ.items():
            if key.startswith(prefix_upper):
                # PASSCRYPT_SECTION__KEY -> section.key
                config_key = key[len(prefix_upper):].lower().replace("__", ".")

                if _is_sensitive_key(config_key):
                    continue

                overrides[config_key] = value

        return overrides

    @classmethod
    def get_instance(cls) -> SecureConfig:
        """
        Get or create the singleton configuration instance.

        Returns:
            The global SecureConfig instance
        """
        if cls._instance is None:
            cls._instance = cls.load()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Reset the singleton instance. Use only for testing."""
        cls._instance = None

    def __repr__(self) -> str:
        """Safe string representation."""
        return f"SecureConfig(iterations={self._kdf.iterations}, log_level={self._logging.level})"

    def __setattr__(self, name: str, value: Any) -> None:
        """Prevent modification after initialization."""
        if hasattr(self, "_frozen") and self._frozen:
            raise AttributeError("SecureConfig is immutable after initialization")
        super().__setattr__(name, value)
