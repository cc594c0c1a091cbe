"""Deduplicating caches of HashStrs backed by host storage."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterator, Optional

from .hash_str import HashedStr, HashIndex, HashStr, as_text, get_hash


class HashStrHost:
    """Backing storage that owns HashStrs allocated for a cache.

    Pass it to ``HashStrCache.intern_with`` to intern strings with deduplication.
    """

    __slots__ = ("_allocations",)

    def __init__(self) -> None:
        self._allocations: list[HashStr] = []

    def alloc(self, index: HashIndex) -> HashStr:
        """Allocate a new HashStr, whether or not an equal one already exists."""
        return self._alloc_str_with_hash(get_hash(index), as_text(index))

    def _alloc_str_with_hash(self, hash_value: int, text: str) -> HashStr:
        hash_str = HashStr.from_hash_and_str(hash_value, text)
        self._allocations.append(hash_str)
        return hash_str

    def clear(self) -> None:
        """Release every HashStr this host owns."""
        self._allocations.clear()

    def __len__(self) -> int:
        return len(self._allocations)

    def __repr__(self) -> str:
        return f"HashStrHost(allocations={len(self._allocations)})"


@dataclass(frozen=True)
class Presence:
    """Whether a string was found in a cache.

    When absent, the string and its computed hash are kept so that further
    caches in a chain can be searched without hashing again.
    """

    entry: Optional[HashStr] = None
    absent: Optional[HashedStr] = None

    @property
    def is_present(self) -> bool:
        return self.entry is not None

    def get(self) -> Optional[HashStr]:
        """Return the present HashStr, or None if it was absent."""
        return self.entry

    def or_present_in(self, cache: HashStrCache) -> Presence:
        """If absent, look the string up in ``cache``, reusing the hash."""
        if self.entry is not None or self.absent is None:
            return self
        return cache._presence_with_hash(self.absent.hash_value, self.absent.text)

    def or_intern_with(self, host: HashStrHost, cache: HashStrCache) -> HashStr:
        """Return the present HashStr, or intern the string into ``cache`` on ``host``."""
        if self.entry is not None:
            return self.entry
        if self.absent is None:
            raise ValueError("presence holds neither an entry nor an absent string")
        hash_value, text = self.absent.hash_value, self.absent.text
        return cache._intern_with_hash(
            lambda: host._alloc_str_with_hash(hash_value, text), hash_value, text
        )


class HashStrCache:
    """A set of existing HashStrs, used to deduplicate strings."""

    __slots__ = ("_entries", "_capacity")

    def __init__(self, capacity: int = 0) -> None:
        if capacity < 0:
            raise ValueError("capacity must not be negative")
        self._entries: dict[tuple[int, str], HashStr] = {}
        self._capacity = capacity

    def clear(self) -> None:
        """Forget every cached HashStr; the reserved capacity is kept."""
        self._capacity = max(self._capacity, len(self._entries))
        self._entries.clear()

    def get(self, index: HashIndex) -> Optional[HashStr]:
        """Fetch an existing HashStr, using a precomputed hash where there is one."""
        return self.presence(index).get()

    def presence(self, index: HashIndex) -> Presence:
        """Look up ``index``; the result can be chained into further caches."""
        return self._presence_with_hash(get_hash(index), as_text(index))

    def _presence_with_hash(self, hash_value: int, text: str) -> Presence:
        entry = self._entries.get((hash_value, text))
        if entry is not None:
            return Presence(entry=entry)
        return Presence(absent=HashedStr(hash_value, text))

    def cache(self, hash_str: HashStr) -> HashStr:
        """Add ``hash_str`` itself, or return the equal one already cached."""
        if not isinstance(hash_str, HashStr):
            raise TypeError(f"expected HashStr, got {type(hash_str).__name__}")
        return self._intern_with_hash(
            lambda: hash_str, hash_str.precomputed_hash(), hash_str.as_str()
        )

    def intern_with(self, host: HashStrHost, index: HashIndex) -> HashStr:
        """Return the cached HashStr for ``index``, allocating one on ``host`` if new."""
        hash_value, text = get_hash(index), as_text(index)
        return self._intern_with_hash(
            lambda: host._alloc_str_with_hash(hash_value, text), hash_value, text
        )

    def _intern_with_hash(
        self, make: Callable[[], HashStr], hash_value: int, text: str
    ) -> HashStr:
        key = (hash_value, text)
        entry = self._entries.get(key)
        if entry is None:
            entry = make()
            self._entries[key] = entry
        return entry

    def capacity(self) -> int:
        """Number of entries the cache is prepared to hold."""
        return max(self._capacity, len(self._entries))

    def reserve(self, additional: int) -> None:
        """Prepare room for at least ``additional`` more entries."""
        if additional < 0:
            raise ValueError("additional must not be negative")
        self._capacity = max(self._capacity, len(self._entries) + additional)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[HashStr]:
        return iter(list(self._entries.values()))

    def __contains__(self, index: object) -> bool:
        try:
            return self.get(index) is not None  # type: ignore[arg-type]
        except TypeError:
            return False

    def __repr__(self) -> str:
        return f"HashStrCache(len={len(self._entries)})"