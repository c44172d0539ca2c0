"""Tests for SQLAlchemyStore on aiosqlite."""

from __future__ import annotations

import pytest

from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from revalidate import disk as D
from revalidate import policy as P
from revalidate.policy import VersionPolicy
from revalidate.store import SQLAlchemyStore, TransactionalStore, create_tables

from tests.helpers import User, has, ok_value, oks, producing, stored


async def open_store(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'cache.db'}")
    await create_tables(engine)
    return engine, SQLAlchemyStore(async_sessionmaker(engine, expire_on_commit=False))


@pytest.mark.asyncio
async def test_round_trip_and_upsert(tmp_path):
    engine, store = await open_store(tmp_path)
    try:
        assert isinstance(store, TransactionalStore)

        await store.write("user42", User("Alice"))
        await store.write("user42", User("Bob"))

        assert await stored(store, "user42") == User("Bob")
        assert await has(store, "user42")
        assert not await has(store, "user7")
    finally:
        await engine.dispose()


@pytest.mark.asyncio
async def test_delete_is_idempotent(tmp_path):
    engine, store = await open_store(tmp_path)
    try:
        await store.write("user42", User("Alice"))

        first = await store.delete("user42")
        second = await store.delete("user42")

        assert ok_value(first) is True
        assert ok_value(second) is False
    finally:
        await engine.dispose()


@pytest.mark.asyncio
async def test_write_many_and_delete_many(tmp_path):
    engine, store = await open_store(tmp_path)
    try:
        await store.write_many({"user42": User("Alice"), "user42_policy": VersionPolicy(1)})

        result = await store.delete_many(["user42", "user42_policy", "user7"])

        assert ok_value(result) == 2
        assert not await has(store, "user42_policy")
    finally:
        await engine.dispose()


@pytest.mark.asyncio
async def test_pipeline_on_database(tmp_path):
    engine, store = await open_store(tmp_path)
    try:
        executor = D.disk_cache(store).policy(P.version_policy(1)).build()

        await executor.collect(producing(User("Alice")), "user42")
        results = await executor.collect(producing(User("Bob")), "user42")

        assert [(c.value, c.from_disk) for c in oks(results)] == [
            (User("Alice"), True),
            (User("Bob"), False),
        ]
        assert await stored(store, "user42_policy") == VersionPolicy(1)
    finally:
        await engine.dispose()
