"""
Memory store — for tests and single-process use.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping, Sequence
from typing import Any

from kungfu import Result, Ok, Error

from revalidate.store._types import StoreError


class MemoryStore:
    """
    In-memory key/value store.

    Note: Только для single-instance / тестов.
    Почему: данные не переживут рестарт.

    Note: Not transactional, pairs are written with two calls.
    See TransactionalMemoryStore for the atomic variant.
    """

    def __init__(self) -> None:
        self._records: dict[str, Any] = {}
        self._lock = asyncio.Lock()

    async def read(self, key: str) -> Result[Any, StoreError]:
        async with self._lock:
            if key not in self._records:
                return Error(StoreError.not_found(key))
            return Ok(self._records[key])

    async def write(self, key: str, value: Any) -> Result[None, StoreError]:
        async with self._lock:
            self._records[key] = value
            return Ok(None)

    async def delete(self, key: str) -> Result[bool, StoreError]:
        async with self._lock:
            if key in self._records:
                del self._records[key]
                return Ok(True)
            return Ok(False)

    async def exists(self, key: str) -> Result[bool, StoreError]:
        async with self._lock:
            return Ok(key in self._records)

    async def clear(self) -> None:
        async with self._lock:
            self._records.clear()

    def __len__(self) -> int:
        return len(self._records)


class TransactionalMemoryStore(MemoryStore):
    """MemoryStore with atomic multi-key operations."""

    async def write_many(self, items: Mapping[str, Any]) -> Result[None, StoreError]:
        async with self._lock:
            self._records.update(items)
            return Ok(None)

    async def delete_many(self, keys: Sequence[str]) -> Result[int, StoreError]:
        async with self._lock:
            existed = [k for k in keys if k in self._records]
            for key in existed:
                del self._records[key]
            return Ok(len(existed))


__all__ = ("MemoryStore", "TransactionalMemoryStore")
