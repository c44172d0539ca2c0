"""
Function-based store builder.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from kungfu import Result

from revalidate.store._types import StoreError

type ReadFn = Callable[[str], Awaitable[Result[Any, StoreError]]]
type WriteFn = Callable[[str, Any], Awaitable[Result[None, StoreError]]]
type DeleteFn = Callable[[str], Awaitable[Result[bool, StoreError]]]
type ExistsFn = Callable[[str], Awaitable[Result[bool, StoreError]]]


@dataclass(frozen=True)
class FunctionalStore:
    """
    Store built from functions.

    Example:
        store = store_from(
            read=repo.read_blob,
            write=repo.write_blob,
            delete=repo.delete_blob,
            exists=repo.has_blob,
        )
    """

    _read: ReadFn
    _write: WriteFn
    _delete: DeleteFn
    _exists: ExistsFn

    async def read(self, key: str) -> Result[Any, StoreError]:
        return await self._read(key)

    async def write(self, key: str, value: Any) -> Result[None, StoreError]:
        return await self._write(key, value)

    async def delete(self, key: str) -> Result[bool, StoreError]:
        return await self._delete(key)

    async def exists(self, key: str) -> Result[bool, StoreError]:
        return await self._exists(key)


def store_from(
    read: ReadFn,
    write: WriteFn,
    delete: DeleteFn,
    exists: ExistsFn,
) -> FunctionalStore:
    """
    Create Store from functions.

    Example:
        store = store_from(
            read=lambda key: repo.read_blob(key),
            write=lambda key, value: repo.write_blob(key, value),
            delete=lambda key: repo.delete_blob(key),
            exists=lambda key: repo.has_blob(key),
        )
    """
    return FunctionalStore(
        _read=read,
        _write=write,
        _delete=delete,
        _exists=exists,
    )


__all__ = ("FunctionalStore", "store_from")
