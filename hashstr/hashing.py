"""Deterministic string hashing and a pass-through hasher for precomputed hashes."""

from __future__ import annotations

import hashlib
import sys

_HASH_SIZE = 8
_MAX_U64 = (1 << 64) - 1


def make_hash(value: str) -> int:
    """Return the fixed-seed 64-bit hash of ``value``.

    The result is the same in every process and on every run.
    """
    if not isinstance(value, str):
        raise TypeError(f"expected str, got {type(value).__name__}")
    digest = hashlib.blake2b(value.encode("utf-8"), digest_size=_HASH_SIZE).digest()
    return int.from_bytes(digest, "little")


class IdentityHasher:
    """A hasher whose result is simply the last 64-bit value written to it.

    Only useful when the values fed to it are already hashes.
    """

    __slots__ = ("_hash",)

    def __init__(self) -> None:
        self._hash = 0

    def write_u64(self, value: int) -> None:
        """Record ``value`` as the current hash."""
        if not 0 <= value <= _MAX_U64:
            raise ValueError(f"value {value} does not fit in 64 unsigned bits")
        self._hash = value

    def write(self, data: bytes) -> None:
        """Record exactly eight bytes, read in native byte order, as the current hash."""
        raw = bytes(data)
        if len(raw) != _HASH_SIZE:
            raise ValueError(f"expected exactly {_HASH_SIZE} bytes, got {len(raw)}")
        self._hash = int.from_bytes(raw, sys.byteorder)

    def finish(self) -> int:
        """Return the current hash."""
        return self._hash