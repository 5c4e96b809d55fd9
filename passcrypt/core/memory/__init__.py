"""
PassCrypt Memory Security Module
================================

Best-effort wiping of derived keys and intermediate key material.
"""

from passcrypt.core.memory.zeroization import ZeroizeContext, secure_zero

__all__ = [
    "ZeroizeContext",
    "secure_zero",
]
