"""
Disk — serve the last persisted result, then refresh it.

    from revalidate import disk as D

    user_cache = D.disk_cache(store).policy(P.version_policy(1)).build()

    async for result in user_cache.transform(fetch_user(uid), "user42"):
        ...   # Ok(Cached(from_disk=True)) first if valid, then the fresh outcome

Storage layout — two records per logical key K:

    K           → value
    K_policy    → policy

Architecture:

    run_cached
         │
         ▼
    cache-read graph ── valid ──► Ok(Cached(from_disk=True))
         │      └─ invalid / unreadable / torn ──► drop entry, emit nothing
         ▼
    compute_fresh ── Ok ──► persist pair ──► Ok(Cached(from_disk=False))
                 └─ Error ──► Error (verbatim)
"""

from revalidate.disk._types import (
    POLICY_SUFFIX,
    policy_key,
    entry_keys,
    Cached,
)
from revalidate.disk._observe import (
    Observer,
    NoopObserver,
    NOOP,
    LoggingObserver,
)
from revalidate.disk._ops import (
    write_entry,
    delete_entry,
    invalidate,
)
from revalidate.disk._read import (
    ReadRequest,
    SkipReason,
    ReadHit,
    ReadSkipped,
    ReadOutcome,
    read_outcome,
    read_cached,
)
from revalidate.disk._fresh import compute_fresh
from revalidate.disk._run import run_cached
from revalidate.disk._builder import (
    disk_cache,
    DiskCache,
    DiskCacheExecutor,
)

__all__ = (
    # Types
    "POLICY_SUFFIX",
    "policy_key",
    "entry_keys",
    "Cached",
    # Observer
    "Observer",
    "NoopObserver",
    "NOOP",
    "LoggingObserver",
    # Entry operations
    "write_entry",
    "delete_entry",
    "invalidate",
    # Stages
    "ReadRequest",
    "SkipReason",
    "ReadHit",
    "ReadSkipped",
    "ReadOutcome",
    "read_outcome",
    "read_cached",
    "compute_fresh",
    # Sequencer
    "run_cached",
    # Builder
    "disk_cache",
    "DiskCache",
    "DiskCacheExecutor",
)
