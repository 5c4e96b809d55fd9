"""
Secure Random Generation
========================

All salts and nonces come from the OS CSPRNG through the secrets module.
There is no fallback: if the OS cannot provide entropy the operation fails.
"""

from __future__ import annotations

import secrets

from passcrypt.core.crypto.exceptions import EntropyUnavailableError
from passcrypt.core.logging import get_secure_logger

logger = get_secure_logger(__name__)


class RandomSource:
    """
    Cryptographically secure random byte generator.

    Stateless; a single instance may be shared across threads.
    """

    __slots__ = ()

    def generate(self, bits: int) -> bytes:
        """
        Generate ``bits // 8`` random bytes.

        Args:
            bits: Requested size in bits, a positive multiple of 8

        Returns:
            Random bytes from the OS CSPRNG

        Raises:
            ValueError: If bits is not a positive multiple of 8
            EntropyUnavailableError: If the OS entropy source fails
        """
        if isinstance(bits, bool) or not isinstance(bits, int) or bits <= 0 or bits % 8:
            raise ValueError(f"bits must be a positive multiple of 8, got {bits!r}")

        try:
            return secrets.token_bytes(bits // 8)
        except (OSError, NotImplementedError) as e:
            logger.error("Secure random source unavailable: %s", type(e).__name__)
            raise EntropyUnavailableError("Secure random source unavailable") from e


_default_source = RandomSource()


def generate_random_bits(bits: int) -> bytes:
    """Generate random bytes from the shared default RandomSource."""
    return _default_source.generate(bits)
