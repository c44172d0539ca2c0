"""
revalidate — disk-backed caching for async producers.

    from revalidate import disk as D     # Cache pipeline
    from revalidate import policy as P   # When a stored value may be served
    from revalidate import store as S    # Where entries are persisted

    user_cache = (
        D.disk_cache(S.FileStore(cache_dir))
        .policy(P.time_policy(minutes=10))
        .build()
    )

    async for result in user_cache.transform(fetch_user(uid), f"user:{uid}"):
        ...
"""

from revalidate import policy
from revalidate import store
from revalidate import disk
from revalidate import lift
from revalidate._types import (
    Lazy,
    Pure,
    Producer,
    PolicyFactory,
    PolicyValidator,
)
from revalidate.disk import Cached, run_cached, disk_cache

__version__ = "0.1.0"

__all__ = (
    "policy",
    "store",
    "disk",
    "lift",
    "Lazy",
    "Pure",
    "Producer",
    "PolicyFactory",
    "PolicyValidator",
    "Cached",
    "run_cached",
    "disk_cache",
)
