import uuid

from docsearch.core.cache import QueryCache

OWNER = uuid.uuid4()
OTHER = uuid.uuid4()


def test_get_and_set():
    cache = QueryCache(ttl_seconds=60)
    key = ("documents", OWNER, None, None)
    assert cache.get(key) is None
    assert cache.set(key, ["doc"]) is True
    assert cache.get(key) == ["doc"]
    assert cache.contains(key)


def test_invalidate_drops_only_owner_entries():
    cache = QueryCache(ttl_seconds=60)
    cache.set(("documents", OWNER, None, None), [1])
    cache.set(("categories", OWNER), ["All"])
    cache.set(("documents", OTHER, None, None), [2])

    assert cache.invalidate(OWNER) == 2
    assert not cache.contains(("documents", OWNER, None, None))
    assert not cache.contains(("categories", OWNER))
    assert cache.get(("documents", OTHER, None, None)) == [2]


def test_stale_generation_write_is_dropped():
    cache = QueryCache(ttl_seconds=60)
    key = ("documents", OWNER, None, None)

    generation = cache.generation(OWNER)
    cache.invalidate(OWNER)

    assert cache.set(key, ["stale"], generation) is False
    assert not cache.contains(key)
    assert cache.set(key, ["fresh"], cache.generation(OWNER)) is True


def test_expired_entries_are_not_returned(monkeypatch):
    now = [1000.0]
    monkeypatch.setattr("docsearch.core.cache.time.monotonic", lambda: now[0])

    cache = QueryCache(ttl_seconds=5)
    key = ("categories", OWNER)
    cache.set(key, ["All"])
    now[0] += 4.9
    assert cache.get(key) == ["All"]
    now[0] += 0.2
    assert cache.get(key) is None
    assert len(cache) == 0


def test_max_entries_evicts_oldest():
    cache = QueryCache(ttl_seconds=60, max_entries=2)
    cache.set(("document", OWNER, 1), "a")
    cache.set(("document", OWNER, 2), "b")
    cache.set(("document", OWNER, 3), "c")
    assert len(cache) == 2
    assert not cache.contains(("document", OWNER, 1))


def test_zero_ttl_disables_cache():
    cache = QueryCache(ttl_seconds=0)
    assert cache.set(("categories", OWNER), ["All"]) is False
    assert cache.get(("categories", OWNER)) is None
