"""Unit tests for LocalBucketRegistry – insert-if-absent under contention."""
from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor

from ratekeeper.application.rate_limit import LocalBucketRegistry, LocalTokenBucket
from ratekeeper.testing.fakes import FakeClock


class TestLocalBucketRegistry:
    def test_creates_on_first_use(self) -> None:
        registry = LocalBucketRegistry(FakeClock())
        bucket, created = registry.get_or_create("alice", 5, 1.0)
        assert created is True
        assert isinstance(bucket, LocalTokenBucket)
        assert "alice" in registry
        assert len(registry) == 1

    def test_returns_existing_bucket(self) -> None:
        registry = LocalBucketRegistry(FakeClock())
        first, _ = registry.get_or_create("alice", 5, 1.0)
        second, created = registry.get_or_create("alice", 99, 9.0)
        assert second is first
        assert created is False
        assert second.capacity == 5

    def test_get_missing_returns_none(self) -> None:
        assert LocalBucketRegistry().get("nobody") is None

    def test_clear(self) -> None:
        registry = LocalBucketRegistry()
        registry.get_or_create("a", 1, 1.0)
        registry.get_or_create("b", 1, 1.0)
        registry.clear()
        assert len(registry) == 0
        assert "a" not in registry

    def test_buckets_share_registry_clock(self) -> None:
        clock = FakeClock()
        registry = LocalBucketRegistry(clock)
        bucket, _ = registry.get_or_create("a", 1, 1.0)
        assert bucket.try_consume() is True
        assert bucket.try_consume() is False
        clock.advance(seconds=1)
        assert bucket.try_consume() is True

    def test_concurrent_get_or_create_yields_one_bucket(self) -> None:
        registry = LocalBucketRegistry(FakeClock())
        threads = 64
        barrier = threading.Barrier(threads)

        def create() -> tuple[LocalTokenBucket, bool]:
            barrier.wait()
            return registry.get_or_create("hot", 10, 1.0)

        with ThreadPoolExecutor(max_workers=threads) as pool:
            results = [f.result(timeout=10) for f in [pool.submit(create) for _ in range(threads)]]

        buckets = {id(bucket) for bucket, _ in results}
        assert len(buckets) == 1
        assert sum(created for _, created in results) == 1
        assert len(registry) == 1
