"""A process-wide, thread-safe string cache split into locked bins."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Optional

from .cache import HashStrCache, HashStrHost, Presence
from .hash_str import HashIndex, HashStr, as_text, get_hash

_BIN_SHIFT = 6
NUM_BINS = 1 << _BIN_SHIFT
_TOP_SHIFT = 64 - _BIN_SHIFT


def _which_bin(hash_value: int) -> int:
    """Choose a bin from the top bits of the hash."""
    return (hash_value >> _TOP_SHIFT) % NUM_BINS


@dataclass
class _HostCache:
    host: HashStrHost = field(default_factory=HashStrHost)
    cache: HashStrCache = field(default_factory=HashStrCache)
    lock: threading.Lock = field(default_factory=threading.Lock)


class Bins:
    """A string cache sharded into bins, each guarded by its own lock."""

    __slots__ = ("_bins",)

    def __init__(self) -> None:
        self._bins = tuple(_HostCache() for _ in range(NUM_BINS))

    def _bin(self, hash_value: int) -> _HostCache:
        return self._bins[_which_bin(hash_value)]

    def get(self, index: HashIndex) -> Optional[HashStr]:
        """Return the cached HashStr for ``index``, or None."""
        return self.presence(index).get()

    def presence(self, index: HashIndex) -> Presence:
        """Look up ``index``; the result can be chained into further caches."""
        hash_value = get_hash(index)
        slot = self._bin(hash_value)
        with slot.lock:
            return slot.cache._presence_with_hash(hash_value, as_text(index))

    def cache(self, hash_str: HashStr) -> HashStr:
        """Add ``hash_str`` itself, or return the equal one already cached."""
        if not isinstance(hash_str, HashStr):
            raise TypeError(f"expected HashStr, got {type(hash_str).__name__}")
        slot = self._bin(hash_str.precomputed_hash())
        with slot.lock:
            return slot.cache.cache(hash_str)

    def intern(self, index: HashIndex) -> HashStr:
        """Return the cached HashStr for ``index``, allocating one if new."""
        hash_value = get_hash(index)
        slot = self._bin(hash_value)
        with slot.lock:
            return slot.cache.intern_with(slot.host, index)

    def _clear(self) -> None:
        for slot in self._bins:
            with slot.lock:
                slot.cache.clear()
                slot.host.clear()

    def __len__(self) -> int:
        total = 0
        for slot in self._bins:
            with slot.lock:
                total += len(slot.cache)
        return total


_STRING_CACHE = Bins()


def get_cache() -> Bins:
    """Return the process-wide cache."""
    return _STRING_CACHE


def intern(value: HashIndex) -> HashStr:
    """Intern ``value`` into the process-wide cache."""
    return _STRING_CACHE.intern(value)