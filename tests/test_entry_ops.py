"""Tests for paired value/policy store operations."""

from __future__ import annotations

import asyncio

import pytest

from kungfu import Ok, Error

from revalidate import disk as D
from revalidate import policy as P
from revalidate.disk import delete_entry, invalidate, write_entry
from revalidate.policy import VersionPolicy
from revalidate.store import MemoryStore, StoreError

from tests.helpers import CountingTransactionalStore, User, has, ok_value, oks, producing, stored


@pytest.mark.asyncio
async def test_write_entry_writes_both_records(store):
    result = await write_entry(store, "user42", User("Alice"), VersionPolicy(1))

    assert isinstance(result, Ok)
    assert await stored(store, "user42") == User("Alice")
    assert await stored(store, "user42_policy") == VersionPolicy(1)


@pytest.mark.asyncio
async def test_delete_entry_is_idempotent(store):
    await write_entry(store, "user42", User("Alice"), VersionPolicy(1))

    assert await delete_entry(store, "user42") == []
    assert await delete_entry(store, "user42") == []
    assert len(store) == 0


@pytest.mark.asyncio
async def test_delete_entry_reports_errors(faulty_store):
    faulty_store.fail_delete.add("user42_policy")

    errs = await delete_entry(faulty_store, "user42")

    assert [e.key for e in errs] == ["user42_policy"]


@pytest.mark.asyncio
async def test_invalidate_reports_whether_entry_existed(store):
    await write_entry(store, "user42", User("Alice"), VersionPolicy(1))

    match await invalidate(store, "user42"):
        case Ok(existed):
            assert existed is True
        case Error(err):
            pytest.fail(f"invalidate failed: {err}")

    match await invalidate(store, "user42"):
        case Ok(existed):
            assert existed is False
        case Error(err):
            pytest.fail(f"invalidate failed: {err}")

    assert not await has(store, "user42_policy")


@pytest.mark.asyncio
async def test_invalidate_surfaces_delete_failure(faulty_store):
    faulty_store.fail_delete.add("user42")

    result = await invalidate(faulty_store, "user42")

    assert isinstance(result, Error)


# ============================================================================
# Transactional stores
# ============================================================================


@pytest.mark.asyncio
async def test_transactional_store_gets_single_calls():
    store = CountingTransactionalStore()
    executor = D.disk_cache(store).policy(P.version_policy(1)).build()

    await executor.collect(producing(User("Alice")), "user42")
    await executor.collect(producing(User("Alice")), "user42")
    executor_v2 = D.disk_cache(store).policy(P.version_policy(2)).build()
    await executor_v2.collect(producing(User("Alice")), "user42")

    assert "write" not in store.calls
    assert "delete" not in store.calls
    assert store.calls.count("write_many") == 3
    # Empty store on the first run, rejected version on the third
    assert store.calls.count("delete_many") == 2


# ============================================================================
# Cancellation
# ============================================================================


class GatedStore(MemoryStore):
    """Writes block until the gate opens."""

    def __init__(self) -> None:
        super().__init__()
        self.gate = asyncio.Event()
        self.writing = asyncio.Event()

    async def write(self, key, value):
        self.writing.set()
        await self.gate.wait()
        return await super().write(key, value)


@pytest.mark.asyncio
async def test_persist_completes_when_consumer_is_cancelled():
    store = GatedStore()
    executor = D.disk_cache(store).policy(P.version_policy(1)).build()

    task = asyncio.create_task(executor.collect(producing(User("Alice")), "user42"))
    await store.writing.wait()
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    store.gate.set()
    for _ in range(50):
        if len(store) == 2:
            break
        await asyncio.sleep(0.01)

    assert await stored(store, "user42") == User("Alice")
    assert await stored(store, "user42_policy") == VersionPolicy(1)

    results = await executor.collect(producing(User("Bob")), "user42")
    assert [c.value for c in oks(results)] == [User("Alice"), User("Bob")]


@pytest.mark.asyncio
async def test_write_entry_folds_raising_store():
    class BrokenStore(MemoryStore):
        async def write(self, key, value):
            raise ConnectionError("gone")

    result = await write_entry(BrokenStore(), "user42", User("Alice"), VersionPolicy(1))

    match result:
        case Error(err):
            assert isinstance(err, StoreError)
            assert isinstance(err.cause, ConnectionError)
        case Ok(_):
            pytest.fail("write should fail")


@pytest.mark.asyncio
async def test_invalidate_counts_lone_policy_record(store):
    await store.write("user42_policy", VersionPolicy(1))

    result = await invalidate(store, "user42")

    assert ok_value(result) is True
    assert len(store) == 0


@pytest.mark.asyncio
async def test_invalidate_on_transactional_store():
    store = CountingTransactionalStore()
    await write_entry(store, "user42", User("Alice"), VersionPolicy(1))

    first = await invalidate(store, "user42")
    second = await invalidate(store, "user42")

    assert ok_value(first) is True
    assert ok_value(second) is False
    assert "delete_many" in store.calls
