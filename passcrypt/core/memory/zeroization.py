"""
Memory Zeroization Utilities
============================

Explicit wiping of key material held in mutable buffers.

Python may keep copies of data it has handled (immutable bytes, the
interpreter's own buffers), so this is a best-effort mitigation: it
shortens the lifetime of the buffers we own, nothing more.
"""

from __future__ import annotations

import ctypes
from contextlib import contextmanager
from typing import Iterator


def secure_zero(data: bytearray | memoryview) -> None:
    """
    Overwrite a mutable byte buffer with zeros.

    Args:
        data: bytearray or writable memoryview to wipe

    Raises:
        TypeError: If data is read-only
    """
    if len(data) == 0:
        return

    if isinstance(data, memoryview):
        if data.readonly:
            raise TypeError("Cannot zeroize a read-only buffer")
        data[:] = bytes(len(data))
        return

    addr = ctypes.addressof((ctypes.c_char * len(data)).from_buffer(data))
    ctypes.memset(addr, 0xFF, len(data))
    ctypes.memset(addr, 0, len(data))


@contextmanager
def ZeroizeContext(*buffers: bytearray) -> Iterator[None]:
    """
    Context manager that zeroizes buffers on exit, normal or exceptional.

    Usage:
        key = bytearray(derive(...))
        with ZeroizeContext(key):
            cipher.seal(key, nonce, data)
        # key is now all zeros
    """
    try:
        yield
    finally:
        for buf in buffers:
            secure_zero(buf)
