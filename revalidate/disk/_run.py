"""
Sequencer — cached value first, fresh value second.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

from kungfu import Result, Ok

from revalidate._types import PolicyFactory, PolicyValidator, Producer
from revalidate.disk._fresh import compute_fresh
from revalidate.disk._observe import NOOP, Observer
from revalidate.disk._read import ReadRequest, read_cached
from revalidate.disk._types import Cached
from revalidate.store import Store, StoreError


async def run_cached[V, P, E](
    key: str,
    producer: Producer[V, E],
    store: Store,
    create_policy: PolicyFactory[V, P],
    is_valid: PolicyValidator[P],
    observer: Observer = NOOP,
) -> AsyncIterator[Result[Cached[V, P], E | StoreError]]:
    """
    Stream the persisted value for key (if still valid), then the fresh one.

    Yields:
        - at most one Ok(Cached(from_disk=True)), always first
        - exactly one outcome of the producer:
          Ok(Cached(from_disk=False)) or Error(producer error | StoreError)

    The producer only starts after the read path is done. Read-path
    failures never surface: the entry is dropped and the stream goes on.

    Example:
        async for result in D.run_cached(
            "user42",
            fetch_user(uid),
            store,
            P.create_version(1),
            P.validate_version(1),
        ):
            match result:
                case Ok(cached) if cached.from_disk:
                    render_stale(cached.value)
                case Ok(cached):
                    render(cached.value)
                case Error(e):
                    show_error(e)
    """
    disk = await read_cached(ReadRequest(key, store, is_valid, observer))
    if disk is not None:
        yield Ok(disk)

    yield await compute_fresh(key, producer, store, create_policy)


__all__ = ("run_cached",)
