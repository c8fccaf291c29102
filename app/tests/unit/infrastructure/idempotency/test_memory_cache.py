"""Unit tests for the in-memory idempotency cache and key builder."""

import threading

import pytest

from infrastructure.idempotency import IdempotencyKeyBuilder, InMemoryIdempotencyCache


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return InMemoryIdempotencyCache(clock=clock)


@pytest.mark.unit
class TestInMemoryIdempotencyCache:
    def test_get_missing_key_returns_none(self, cache):
        assert cache.get("missing") is None

    def test_set_and_get(self, cache):
        cache.set("k", {"event_id": "e1"}, ttl_seconds=10)
        assert cache.get("k") == {"event_id": "e1"}

    def test_entries_expire(self, cache, clock):
        cache.set("k", {"event_id": "e1"}, ttl_seconds=10)
        clock.now = 10
        assert cache.get("k") is None

    def test_set_if_absent_claims_once(self, cache):
        assert cache.set_if_absent("k", {"n": 1}, ttl_seconds=10) is True
        assert cache.set_if_absent("k", {"n": 2}, ttl_seconds=10) is False
        assert cache.get("k") == {"n": 1}

    def test_set_if_absent_after_expiry(self, cache, clock):
        cache.set_if_absent("k", {"n": 1}, ttl_seconds=10)
        clock.now = 11
        assert cache.set_if_absent("k", {"n": 2}, ttl_seconds=10) is True

    def test_concurrent_claims_have_one_winner(self):
        cache = InMemoryIdempotencyCache()
        results = []
        barrier = threading.Barrier(8)

        def claim():
            barrier.wait()
            results.append(cache.set_if_absent("k", {}, ttl_seconds=60))

        threads = [threading.Thread(target=claim) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert results.count(True) == 1

    def test_purge_expired(self, cache, clock):
        cache.set("a", {}, ttl_seconds=5)
        cache.set("b", {}, ttl_seconds=50)
        clock.now = 10
        assert cache.purge_expired() == 1
        assert cache.get_stats()["entries"] == 1

    def test_stats_and_clear(self, cache):
        cache.set("k", {}, ttl_seconds=10)
        cache.get("k")
        cache.get("missing")
        stats = cache.get_stats()
        assert stats["backend"] == "memory"
        assert stats["hits"] == 1
        assert stats["misses"] == 1

        cache.clear()
        assert cache.get_stats() == {"backend": "memory", "entries": 0, "hits": 0, "misses": 0}


@pytest.mark.unit
class TestIdempotencyKeyBuilder:
    def test_key_is_deterministic(self):
        builder = IdempotencyKeyBuilder("milestones")
        first = builder.build("notify", user_id="u1", threshold=50, local_date="2026-10-17")
        second = builder.build("notify", local_date="2026-10-17", threshold=50, user_id="u1")
        assert first == second
        assert first.startswith("milestones:notify:")

    def test_components_change_the_key(self):
        builder = IdempotencyKeyBuilder("milestones")
        day_one = builder.build("notify", user_id="u1", threshold=50, local_date="2026-10-17")
        day_two = builder.build("notify", user_id="u1", threshold=50, local_date="2026-10-18")
        other_threshold = builder.build(
            "notify", user_id="u1", threshold=75, local_date="2026-10-17"
        )
        assert len({day_one, day_two, other_threshold}) == 3
