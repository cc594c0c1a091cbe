"""Strings that carry a precomputed 64-bit hash, and helper string types."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from functools import lru_cache, total_ordering
from typing import Union

from .hashing import make_hash

SIZE_HASH = 8
_BYTE_ORDER = sys.byteorder
_MAX_HASH = (1 << 64) - 1


class RefFromBytesError(ValueError):
    """Raised when bytes do not form a valid hash-prefixed string."""


class TooShortError(RefFromBytesError):
    """The input is shorter than the hash prefix."""

    def __init__(self, length: int) -> None:
        self.length = length
        super().__init__(f"expected {SIZE_HASH} or more bytes, got {length}")


class Utf8DecodeError(RefFromBytesError):
    """The bytes after the hash prefix are not valid UTF-8."""

    def __init__(self, cause: UnicodeDecodeError) -> None:
        self.cause = cause
        super().__init__(f"invalid UTF-8 after position {SIZE_HASH}: {cause.reason}")


def _check_hash(hash_value: int) -> None:
    if not isinstance(hash_value, int) or isinstance(hash_value, bool):
        raise TypeError(f"hash must be an int, got {type(hash_value).__name__}")
    if not 0 <= hash_value <= _MAX_HASH:
        raise ValueError(f"hash {hash_value} does not fit in 64 unsigned bits")


@total_ordering
class HashStr:
    """An immutable string stored together with its precomputed hash.

    Equality needs both hash and text to match; ordering follows the text.
    Python's ``hash()`` uses the precomputed value.
    """

    __slots__ = ("_hash", "_str")

    def __init__(self, hash_value: int, value: str) -> None:
        _check_hash(hash_value)
        if not isinstance(value, str):
            raise TypeError(f"expected str, got {type(value).__name__}")
        self._hash = hash_value
        self._str = value

    @classmethod
    def from_hash_and_str(cls, hash_value: int, value: str) -> HashStr:
        """Build a HashStr from an already known hash and its text."""
        return cls(hash_value, value)

    @classmethod
    def anonymous(cls, value: str) -> HashStr:
        """Build a HashStr that belongs to no cache, hashing ``value`` now."""
        return cls(make_hash(value), value)

    @classmethod
    def ref_from_bytes(cls, data: bytes) -> HashStr:
        """Read a HashStr from its native-order hash prefix followed by UTF-8 text."""
        raw = bytes(data)
        if len(raw) < SIZE_HASH:
            raise TooShortError(len(raw))
        try:
            text = raw[SIZE_HASH:].decode("utf-8")
        except UnicodeDecodeError as exc:
            raise Utf8DecodeError(exc) from exc
        return cls(int.from_bytes(raw[:SIZE_HASH], _BYTE_ORDER), text)

    def precomputed_hash(self) -> int:
        return self._hash

    def as_str(self) -> str:
        return self._str

    def as_hash_str_bytes(self) -> bytes:
        """The hash prefix in native byte order followed by the UTF-8 text."""
        return self._hash.to_bytes(SIZE_HASH, _BYTE_ORDER) + self._str.encode("utf-8")

    def __str__(self) -> str:
        return self._str

    def __repr__(self) -> str:
        return f"HashStr({self._hash:#018x}, {self._str!r})"

    def __len__(self) -> int:
        return len(self._str)

    def __hash__(self) -> int:
        return self._hash

    def __eq__(self, other: object) -> bool:
        if isinstance(other, HashStr):
            return self._hash == other._hash and self._str == other._str
        if isinstance(other, UnhashedStr):
            return self._str == other.as_str()
        if isinstance(other, str):
            return self._str == other
        return NotImplemented

    def __lt__(self, other: object) -> bool:
        if isinstance(other, HashStr):
            return self._str < other._str
        return NotImplemented


@total_ordering
class UnhashedStr:
    """A plain string that hashes itself on demand.

    Looks up ``HashStr`` keys in a dict without building a ``HashStr``.
    """

    __slots__ = ("_str",)

    def __init__(self, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError(f"expected str, got {type(value).__name__}")
        self._str = value

    def as_str(self) -> str:
        return self._str

    def __str__(self) -> str:
        return self._str

    def __repr__(self) -> str:
        return f"UnhashedStr({self._str!r})"

    def __hash__(self) -> int:
        return make_hash(self._str)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, UnhashedStr):
            return self._str == other._str
        if isinstance(other, HashStr):
            return self._str == other.as_str()
        return NotImplemented

    def __lt__(self, other: object) -> bool:
        if isinstance(other, UnhashedStr):
            return self._str < other._str
        return NotImplemented


@dataclass(frozen=True)
class HashedStr:
    """A borrowed string paired with its hash, without allocating a HashStr."""

    hash_value: int
    text: str

    @classmethod
    def new(cls, value: str) -> HashedStr:
        return cls(make_hash(value), value)

    def precomputed_hash(self) -> int:
        return self.hash_value

    def as_str(self) -> str:
        return self.text

    def __str__(self) -> str:
        return self.text


HashIndex = Union[str, HashStr, HashedStr]


def get_hash(value: HashIndex) -> int:
    """Return the hash of ``value``, reusing a precomputed one where present."""
    if isinstance(value, (HashStr, HashedStr)):
        return value.precomputed_hash()
    if isinstance(value, str):
        return make_hash(value)
    raise TypeError(f"cannot hash {type(value).__name__}")


def as_text(value: Union[HashIndex, UnhashedStr]) -> str:
    """Return the text carried by ``value``."""
    if isinstance(value, (HashStr, HashedStr, UnhashedStr)):
        return value.as_str()
    if isinstance(value, str):
        return value
    raise TypeError(f"cannot take text from {type(value).__name__}")


@lru_cache(maxsize=None)
def hstr(value: str) -> HashStr:
    """Return the shared HashStr for ``value``; equal inputs give the same object."""
    return HashStr.anonymous(value)