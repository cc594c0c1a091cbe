"""Reading and writing HashStrs as hash-prefixed bytes, optionally interning them."""

from __future__ import annotations

from .cache import HashStrCache, HashStrHost
from .global_cache import get_cache
from .hash_str import HashStr


def serialize(hash_str: HashStr) -> bytes:
    """Return the hash prefix followed by the UTF-8 text of ``hash_str``."""
    if not isinstance(hash_str, HashStr):
        raise TypeError(f"expected HashStr, got {type(hash_str).__name__}")
    return hash_str.as_hash_str_bytes()


def deserialize(data: bytes) -> HashStr:
    """Read a HashStr from hash-prefixed bytes.

    Raises TooShortError or Utf8DecodeError for malformed input.
    """
    return HashStr.ref_from_bytes(data)


def deserialize_into_cache(data: bytes, host: HashStrHost, cache: HashStrCache) -> HashStr:
    """Read hash and text from bytes and intern them into ``cache``."""
    return cache.intern_with(host, deserialize(data))


def intern_str_into_cache(value: str, host: HashStrHost, cache: HashStrCache) -> HashStr:
    """Intern a plain string into ``cache``, hashing it now."""
    if not isinstance(value, str):
        raise TypeError(f"expected str, got {type(value).__name__}")
    return cache.intern_with(host, value)


def deserialize_global(data: bytes) -> HashStr:
    """Read hash and text from bytes and intern them into the process-wide cache."""
    return get_cache().intern(deserialize(data))


def intern_str_global(value: str) -> HashStr:
    """Intern a plain string into the process-wide cache, hashing it now."""
    if not isinstance(value, str):
        raise TypeError(f"expected str, got {type(value).__name__}")
    return get_cache().intern(value)