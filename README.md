# hashstr

Strings that carry a precomputed 64-bit hash, plus caches for interning and
deduplicating them.

A `HashStr` stores its hash alongside its text. Caches reuse that stored hash
when looking it up, so the text is not hashed again. The hash comes from
`hashstr.hashing.make_hash`. It is deterministic: the same text gives the same
value in every process and on every run.

## Installing

```
pip install hashstr
```

## Usage

### Strings with a hash

```python
from hashstr.hash_str import HashStr, UnhashedStr, HashedStr, hstr

static = hstr("bruh")                # shared: hstr("bruh") is hstr("bruh")
runtime = HashStr.anonymous("bruh")  # a fresh object, hashed now
assert static == runtime
assert static.precomputed_hash() == runtime.precomputed_hash()
assert runtime == "bruh" and runtime.as_str() == "bruh"

# HashStr keys can be looked up without building a HashStr
table = {static: 1}
assert table[runtime] == 1
assert table[UnhashedStr("bruh")] == 1

# a string paired with its hash, without making a HashStr
hashed = HashedStr.new("bruh")
assert hashed.precomputed_hash() == static.precomputed_hash()
```

Two `HashStr`s are equal when both their hashes and their texts match. They
are ordered by their text. `hash()` of a `HashStr` uses the precomputed value.

### Interning with a cache

A `HashStrHost` owns the `HashStr`s that are allocated for a cache. A
`HashStrCache` keeps one `HashStr` per distinct string.

```python
from hashstr.cache import HashStrHost, HashStrCache

host = HashStrHost()
cache = HashStrCache()
interned = cache.intern_with(host, "bruh")
assert cache.intern_with(host, static) is interned   # reuses the stored hash
assert cache.cache(runtime) is interned              # nothing new allocated
assert cache.get("bruh") is interned
assert len(cache) == 1 and "bruh" in cache

# chaining caches: the hash is computed only once along the chain
other = HashStrCache()
result = cache.presence("new").or_present_in(other).or_intern_with(host, other)
assert other.get("new") is result
```

`HashStrCache` also provides `clear`, `capacity` and `reserve`. You can
iterate over it. `HashStrHost.alloc` always allocates a new `HashStr`, even
when an equal one already exists.

### Global cache

`hashstr.global_cache` holds one process-wide cache. It is split into 64
bins, and each bin has its own lock, so threads can share it safely.

```python
from hashstr.global_cache import get_cache, intern

a = intern("hello")
assert get_cache().get("hello") is a
assert get_cache().intern("hello") is a
```

### Serialization

A `HashStr` serializes to its 8-byte hash prefix followed by its UTF-8 text.
The prefix is written in the machine's native byte order.

```python
from hashstr.serialization import (
    serialize, deserialize, deserialize_into_cache, deserialize_global,
)

data = serialize(static)
assert deserialize(data) == static
assert deserialize_into_cache(data, host, cache) is interned
assert deserialize_global(data) is intern("bruh")
```

`intern_str_into_cache` and `intern_str_global` intern a plain string. They
hash it when called.

Malformed input raises one of two errors, both from `hashstr.hash_str`:
`TooShortError` when there are fewer than 8 bytes, and `Utf8DecodeError` when
the text is not valid UTF-8. Both are subclasses of `RefFromBytesError`,
which is itself a `ValueError`.

### Identity hasher

`hashstr.hashing.IdentityHasher` returns as its result the last 64-bit value
written to it. Use it only when the values you feed it are already hashes.

## Running the tests

```
pip install -e .[test]
pytest
```