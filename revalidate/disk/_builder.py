"""
Disk cache builder — fluent API.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from dataclasses import dataclass
from typing import Any

from kungfu import Result

from revalidate._types import Producer
from revalidate.disk._observe import NOOP, Observer
from revalidate.disk._ops import invalidate
from revalidate.disk._run import run_cached
from revalidate.disk._types import Cached
from revalidate.policy import PolicySpec
from revalidate.store import MemoryStore, Store, StoreError


# ═══════════════════════════════════════════════════════════════════════════════
# Disk Cache Builder
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(slots=True, frozen=True)
class DiskCache[V, P]:
    """
    Fluent disk cache builder.

    Type parameters:
        V: Value type produced and stored
        P: Policy type stored next to each value

    Example:
        user_cache = (
            D.disk_cache(S.FileStore(cache_dir))
            .policy(P.time_policy(minutes=10))
            .observe(D.LoggingObserver())
            .build()
        )
    """

    _store: Store
    _policy: PolicySpec[V, P] | None
    _observer: Observer

    def store(self, s: Store) -> DiskCache[V, P]:
        """Set storage backend."""
        return DiskCache(_store=s, _policy=self._policy, _observer=self._observer)

    def policy[V2, P2](self, p: PolicySpec[V2, P2]) -> DiskCache[V2, P2]:
        """Set validation policy."""
        return DiskCache(_store=self._store, _policy=p, _observer=self._observer)

    def observe(self, o: Observer) -> DiskCache[V, P]:
        """Set event observer (hits, misses, invalidations)."""
        return DiskCache(_store=self._store, _policy=self._policy, _observer=o)

    def build(self) -> DiskCacheExecutor[V, P]:
        """Build executable cache."""
        if self._policy is None:
            raise ValueError("policy() is required")

        return DiskCacheExecutor(
            store=self._store,
            policy=self._policy,
            observer=self._observer,
        )


# ═══════════════════════════════════════════════════════════════════════════════
# Disk Cache Executor
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(slots=True, frozen=True)
class DiskCacheExecutor[V, P]:
    """
    Compiled disk cache, reusable for any key and producer.

    Note: Thin wrapper, binds store, policy and observer for run_cached.
    """

    store: Store
    policy: PolicySpec[V, P]
    observer: Observer

    def transform[E](
        self,
        producer: Producer[V, E],
        key: str,
    ) -> AsyncIterator[Result[Cached[V, P], E | StoreError]]:
        """
        Cached value for key (if valid) followed by the producer's outcome.

        Example:
            async for result in user_cache.transform(fetch_user(uid), f"user:{uid}"):
                ...
        """
        return run_cached(
            key,
            producer,
            self.store,
            self.policy.create,
            self.policy.is_valid,
            self.observer,
        )

    async def collect[E](
        self,
        producer: Producer[V, E],
        key: str,
    ) -> list[Result[Cached[V, P], E | StoreError]]:
        """Run transform() to completion and return every item in order."""
        return [result async for result in self.transform(producer, key)]

    async def invalidate(self, key: str) -> Result[bool, StoreError]:
        """Drop the entry for key. Ok(True) if a value was stored."""
        return await invalidate(self.store, key)


# ═══════════════════════════════════════════════════════════════════════════════
# disk_cache() — Entry Point
# ═══════════════════════════════════════════════════════════════════════════════


def disk_cache(store: Store | None = None) -> DiskCache[Any, Any]:
    """
    Create disk cache builder.

    Without a store, entries live in a MemoryStore for the process lifetime.

    Example:
        from revalidate import disk as D, policy as P, store as S

        user_cache = (
            D.disk_cache(S.FileStore("/var/cache/users"))
            .policy(P.version_policy(1))
            .build()
        )

        async for result in user_cache.transform(fetch_user(uid), "user42"):
            ...
    """
    return DiskCache(
        _store=store if store is not None else MemoryStore(),
        _policy=None,
        _observer=NOOP,
    )


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = ("DiskCache", "DiskCacheExecutor", "disk_cache")
