"""
Fresh-compute stage — run the producer, persist, report.
"""

from __future__ import annotations

import asyncio
import logging

from kungfu import Result, Ok, Error

from revalidate._types import PolicyFactory, Producer
from revalidate.disk._ops import discard_entry, write_entry
from revalidate.disk._types import Cached
from revalidate.store import Store, StoreError

logger = logging.getLogger(__name__)


async def compute_fresh[V, P, E](
    key: str,
    producer: Producer[V, E],
    store: Store,
    create_policy: PolicyFactory[V, P],
) -> Result[Cached[V, P], E | StoreError]:
    """
    Await the producer and persist its value with a new policy.

    - Producer Error → returned verbatim, nothing written.
    - create_policy raises → Error(StoreError), the old entry is dropped.
    - Write failure → Error(StoreError), the computed value is not cached.

    Note: The persist step is shielded. If the caller goes away mid-write,
    the writes still complete.
    """
    match await producer:
        case Error(e):
            return Error(e)
        case Ok(value):
            pass

    match await _create(key, store, create_policy, value):
        case Error(err):
            return Error(err)
        case Ok(policy):
            cached = Cached(value=value, policy=policy, from_disk=False)

    persisted = await asyncio.shield(
        write_entry(store, key, cached.value, cached.policy)
    )
    match persisted:
        case Error(err):
            return Error(err)
        case Ok(_):
            return Ok(cached)


async def _create[V, P](
    key: str,
    store: Store,
    create_policy: PolicyFactory[V, P],
    value: V,
) -> Result[P, StoreError]:
    try:
        return Ok(create_policy(value))
    except Exception as e:
        logger.warning("Policy factory failed for %s: %r", key, e)
        # Stored pair predates this value
        await discard_entry(store, key)
        return Error(StoreError.serialization(key, e))


__all__ = ("compute_fresh",)
