"""
Utils module - Utility functions and helpers.
"""

from passcrypt.utils.validators import ValidationError, ensure_bytes, ensure_text

__all__ = [
    "ValidationError",
    "ensure_bytes",
    "ensure_text",
]
