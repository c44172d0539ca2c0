"""
Entry operations — paired value/policy store calls.

Pairs fan out through combinators.parallel and join before returning,
unless the store is transactional, in which case one atomic call is made.
"""

from __future__ import annotations

import logging
from typing import Any

from combinators import parallel as C_parallel, lift as L
from kungfu import Result, Ok, Error, LazyCoroResult

from revalidate.disk._types import entry_keys
from revalidate.store import Store, StoreError, TransactionalStore

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════════
# read_safely() — Single Read
# ═══════════════════════════════════════════════════════════════════════════════


async def read_safely(store: Store, key: str) -> Result[Any, StoreError]:
    """Read key, folding a raising store into Error(IO)."""
    try:
        return await store.read(key)
    except Exception as e:
        return Error(StoreError.io(key, e))


# ═══════════════════════════════════════════════════════════════════════════════
# Fan-out / Fan-in
# ═══════════════════════════════════════════════════════════════════════════════


async def _join[T](
    *calls: LazyCoroResult[Result[T, StoreError], StoreError],
) -> tuple[list[T], list[StoreError]]:
    """Run calls concurrently, wait for all, split values from errors."""
    values: list[T] = []
    errors: list[StoreError] = []

    match await C_parallel(*calls):
        case Ok(results):
            for result in results:
                match result:
                    case Error(err):
                        errors.append(err)
                    case Ok(value):
                        values.append(value)
        case Error(err):
            # A store raised instead of returning Error
            errors.append(err)

    return values, errors


def _delete_call(store: Store, key: str) -> LazyCoroResult[Result[bool, StoreError], StoreError]:
    return L.catching_async(
        lambda: store.delete(key),
        on_error=lambda e: StoreError.io(key, e),
    )


def _write_call(
    store: Store, key: str, value: Any
) -> LazyCoroResult[Result[None, StoreError], StoreError]:
    return L.catching_async(
        lambda: store.write(key, value),
        on_error=lambda e: StoreError.io(key, e),
    )


# ═══════════════════════════════════════════════════════════════════════════════
# write_entry() — Persist Value + Policy
# ═══════════════════════════════════════════════════════════════════════════════


async def write_entry(
    store: Store, key: str, value: Any, policy: Any
) -> Result[None, StoreError]:
    """
    Persist both records of an entry.

    Returns the first write error, if any. Both writes are always awaited.
    """
    value_key, policy_key = entry_keys(key)

    if isinstance(store, TransactionalStore):
        try:
            return await store.write_many({value_key: value, policy_key: policy})
        except Exception as e:
            return Error(StoreError.io(key, e))

    _, errors = await _join(
        _write_call(store, value_key, value),
        _write_call(store, policy_key, policy),
    )
    if errors:
        return Error(errors[0])
    return Ok(None)


# ═══════════════════════════════════════════════════════════════════════════════
# delete_entry() — Drop Value + Policy
# ═══════════════════════════════════════════════════════════════════════════════


async def _remove(store: Store, key: str) -> tuple[bool, list[StoreError]]:
    """Delete both records. (any record existed, errors)."""
    value_key, policy_key = entry_keys(key)

    if isinstance(store, TransactionalStore):
        try:
            result = await store.delete_many([value_key, policy_key])
        except Exception as e:
            return False, [StoreError.io(key, e)]
        match result:
            case Error(err):
                return False, [err]
            case Ok(count):
                return count > 0, []

    existed, errors = await _join(
        _delete_call(store, value_key),
        _delete_call(store, policy_key),
    )
    return any(existed), errors


async def delete_entry(store: Store, key: str) -> list[StoreError]:
    """
    Delete both records of an entry. Idempotent.

    Returns the errors instead of raising. Callers decide whether
    cleanup failures matter.
    """
    _, errors = await _remove(store, key)
    return errors


async def discard_entry(store: Store, key: str) -> None:
    """delete_entry() for the cache path. Failures are logged, never surfaced."""
    for err in await delete_entry(store, key):
        logger.warning("Failed to delete stale cache record %s: %s", err.key or key, err)


# ═══════════════════════════════════════════════════════════════════════════════
# invalidate() — Public Single-Entry Invalidation
# ═══════════════════════════════════════════════════════════════════════════════


async def invalidate(store: Store, key: str) -> Result[bool, StoreError]:
    """
    Drop the entry for key.

    Returns Ok(True) if the delete removed a value or policy record.
    Existence comes from the deletes themselves, not a prior lookup.

    Example:
        result = await D.invalidate(store, "user42")
    """
    existed, errors = await _remove(store, key)
    if errors:
        return Error(errors[0])
    return Ok(existed)


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    "read_safely",
    "write_entry",
    "delete_entry",
    "discard_entry",
    "invalidate",
)
