"""
Secure Logging Module
=====================

Provides security-aware logging with secret filtering.

Security Features:
- Automatic redaction of passwords, keys, salts, IVs and verifiers
- Redaction of long base64/hex blobs (encoded key material)
- Rotating log files with size limits
- Structured (JSON) output support
"""

from __future__ import annotations

import json
import logging
import re
import sys
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Optional, Pattern

from passcrypt.core.config import LoggingConfig, SecureConfig


_SENSITIVE_PATTERNS: Final[list[tuple[str, Pattern[str]]]] = [
    ("password", re.compile(r'(?i)\b(password|passwd|pwd)\s*[=:]\s*["\']?[^\s"\']+["\']?')),
    ("key", re.compile(r'(?i)\b(key|secret)\s*[=:]\s*["\']?[^\s"\']+["\']?')),
    ("salt", re.compile(r'(?i)\bsalt\s*[=:]\s*["\']?[^\s"\']+["\']?')),
    ("iv", re.compile(r'(?i)\b(iv|nonce)\s*[=:]\s*["\']?[^\s"\']+["\']?')),
    ("verifier", re.compile(r'(?i)\bverifier\s*[=:]\s*["\']?[^\s"\']+["\']?')),
    ("plaintext", re.compile(r'(?i)\bplaintext\s*[=:]\s*["\']?[^\s"\']+["\']?')),
    # Encoded secrets: a 16-byte value is 24 base64 chars
    ("base64_secret", re.compile(r'[A-Za-z0-9+/]{22,}={0,2}')),
    ("hex_secret", re.compile(r'(?i)\b(?:0x)?[a-f0-9]{32,}\b')),
]

_REDACTED_TEXT: Final[str] = "[REDACTED]"

_CONSOLE_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_FILE_FORMAT: Final[str] = (
    "%(asctime)s | %(levelname)-8s | %(name)s | %(funcName)s:%(lineno)d | %(message)s"
)


class SecureLogFilter(logging.Filter):
    """
    Log filter that removes sensitive information from log messages.

    Matches are replaced with ``<name>=[REDACTED]``; the record itself
    is always kept.
    """

    def __init__(self, name: str = "", additional_patterns: Optional[list[Pattern[str]]] = None) -> None:
        super().__init__(name)
        self._additional_patterns = additional_patterns or []

    def filter(self, record: logging.LogRecord) -> bool:
        """Redact sensitive data from the fully formatted message."""
        # Format first: redacting the template alone could eat a %s
        if isinstance(record.msg, str):
            record.msg = self.sanitize(record.getMessage())
            record.args = None

        return True

    def sanitize(self, text: str) -> str:
        """Remove sensitive data from text."""
        result = text
        for name, pattern in _SENSITIVE_PATTERNS:
            result = pattern.sub(f"{name}={_REDACTED_TEXT}", result)
        for pattern in self._additional_patterns:
            result = pattern.sub(_REDACTED_TEXT, result)
        return result


class StructuredLogFormatter(logging.Formatter):
    """Formatter that outputs one JSON object per log record."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data, default=str)


class SecureRotatingFileHandler(RotatingFileHandler):
    """
    Rotating file handler that creates its directory and refuses
    path traversal in the log path.
    """

    def __init__(
        self,
        filename: str | Path,
        maxBytes: int = 10 * 1024 * 1024,
        backupCount: int = 5,
        encoding: str = "utf-8",
    ) -> None:
        if ".." in Path(filename).parts:
            raise ValueError("Log path cannot contain path traversal sequences")

        log_path = Path(filename).resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)

        super().__init__(
            str(log_path),
            mode="a",
            maxBytes=maxBytes,
            backupCount=backupCount,
            encoding=encoding,
        )


def get_secure_logger(
    name: str,
    config: Optional[LoggingConfig] = None,
) -> logging.Logger:
    """
    Create a logger with automatic secret filtering.

    Handlers are attached once per logger name; later calls return the
    already-configured logger.

    Args:
        name: Logger name (typically __name__)
        config: Logging settings (defaults to the global SecureConfig)

    Returns:
        Configured secure logger instance
    """
    logger = logging.getLogger(name)

    if logger.handlers:
        return logger

    if config is None:
        config = SecureConfig.get_instance().logging

    logger.setLevel(getattr(logging, config.level.upper()))
    secure_filter = SecureLogFilter()

    if config.enable_console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter(_CONSOLE_FORMAT, datefmt="%H:%M:%S"))
        console_handler.addFilter(secure_filter)
        logger.addHandler(console_handler)

    if config.enable_file and config.log_dir is not None:
        file_handler = SecureRotatingFileHandler(
            filename=config.log_dir / f"{name.replace('.', '_')}.log",
            maxBytes=config.max_file_size_bytes,
            backupCount=config.backup_count,
        )
        if config.enable_json:
            file_handler.setFormatter(StructuredLogFormatter())
        else:
            file_handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        file_handler.addFilter(secure_filter)
        logger.addHandler(file_handler)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    logger.propagate = False

    return logger
