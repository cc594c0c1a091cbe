import threading

import pytest

from hashstr.cache import HashStrCache, HashStrHost
from hashstr.global_cache import Bins, get_cache, intern
from hashstr.hash_str import HashedStr, HashStr
from hashstr.hashing import make_hash


def test_get_cache_is_shared_by_intern():
    cache = get_cache()
    value = intern("singleton-check-word")
    assert cache.get("singleton-check-word") is value
    assert get_cache().get("singleton-check-word") is value
    assert value.as_str() == "singleton-check-word"


def test_intern_deduplicates_globally():
    first = intern("global-dedup-word")
    second = intern("global-dedup-word")
    assert first is second
    assert first.as_str() == "global-dedup-word"
    assert get_cache().get("global-dedup-word") is first


def test_fresh_bins_start_empty():
    bins = Bins()
    assert bins.get("anything") is None
    assert len(bins) == 0


def test_intern_with_str_and_hashstr_index():
    bins = Bins()
    from_str = bins.intern("word")
    from_hashstr = bins.intern(HashStr.anonymous("word"))
    from_hashed = bins.intern(HashedStr.new("word"))
    assert from_str is from_hashstr
    assert from_str is from_hashed
    assert from_str.precomputed_hash() == make_hash("word")
    assert len(bins) == 1


def test_intern_keeps_precomputed_hash():
    bins = Bins()
    custom = HashStr.from_hash_and_str(5, "x")
    interned = bins.intern(custom)
    assert interned.precomputed_hash() == 5
    assert bins.get(custom) is interned
    assert bins.get("x") is None


def test_cache_keeps_given_object():
    bins = Bins()
    given = HashStr.anonymous("given")
    assert bins.cache(given) is given
    assert bins.intern("given") is given
    assert bins.cache(HashStr.anonymous("given")) is given


def test_cache_rejects_plain_string():
    with pytest.raises(TypeError):
        Bins().cache("plain")


def test_high_hashes_spread_over_bins():
    bins = Bins()
    low = bins.intern(HashStr.from_hash_and_str(0, "same"))
    high = bins.intern(HashStr.from_hash_and_str((1 << 64) - 1, "same"))
    assert low is not high
    assert bins.get(HashStr.from_hash_and_str(0, "same")) is low
    assert bins.get(HashStr.from_hash_and_str((1 << 64) - 1, "same")) is high


def test_presence_chains_into_local_cache():
    bins = Bins()
    host = HashStrHost()
    local = HashStrCache()
    hs = bins.presence("local-only").or_present_in(local).or_intern_with(host, local)
    assert local.get("local-only") is hs
    assert bins.get("local-only") is None

    in_global = bins.intern("shared")
    found = bins.presence("shared").or_intern_with(host, local)
    assert found is in_global
    assert local.get("shared") is None


def test_clear_empties_every_bin():
    bins = Bins()
    for word in ["a", "b", "c"]:
        bins.intern(word)
    assert len(bins) == 3
    bins._clear()
    assert len(bins) == 0
    assert bins.get("a") is None


def test_concurrent_interning_yields_one_object():
    bins = Bins()
    results = []
    lock = threading.Lock()

    def worker():
        value = bins.intern("contended")
        with lock:
            results.append(value)

    threads = [threading.Thread(target=worker) for _ in range(16)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert len(results) == 16
    assert all(r is results[0] for r in results)
    assert len(bins) == 1