"""
Core module - Contains configuration, logging, and the crypto core.
"""

from passcrypt.core.config import SecureConfig
from passcrypt.core.logging import SecureLogFilter, get_secure_logger

__all__ = ["SecureConfig", "get_secure_logger", "SecureLogFilter"]
