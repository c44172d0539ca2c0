"""Test doubles and helpers shared by the test modules."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from kungfu import Result, Ok, Error, LazyCoroResult

from revalidate import lift as L
from revalidate.disk import Cached
from revalidate.store import MemoryStore, StoreError, TransactionalMemoryStore

# ============================================================================
# Domain
# ============================================================================


@dataclass(frozen=True)
class User:
    name: str


class UserUnavailable(Exception):
    """Producer failure used across tests."""


def producing(value: Any) -> LazyCoroResult[Any, Any]:
    """Producer that succeeds with value."""
    return L.from_result(Ok(value))


def failing(error: Any) -> LazyCoroResult[Any, Any]:
    """Producer that fails with error."""
    return L.from_result(Error(error))


def oks(results: list[Result[Cached[Any, Any], Any]]) -> list[Cached[Any, Any]]:
    """Cached items of the Ok results, in order."""
    items = []
    for result in results:
        match result:
            case Ok(cached):
                items.append(cached)
            case Error(_):
                pass
    return items


def errors(results: list[Result[Any, Any]]) -> list[Any]:
    """Errors of the Error results, in order."""
    found = []
    for result in results:
        match result:
            case Error(e):
                found.append(e)
            case Ok(_):
                pass
    return found


# ============================================================================
# Observers
# ============================================================================


@dataclass
class RecordingObserver:
    """Collects observer events as (event, key) tuples."""

    events: list[tuple[str, str]] = field(default_factory=list)
    causes: list[object] = field(default_factory=list)

    def on_hit(self, key: str) -> None:
        self.events.append(("hit", key))

    def on_miss(self, key: str, cause: object) -> None:
        self.events.append(("miss", key))
        self.causes.append(cause)

    def on_invalid(self, key: str) -> None:
        self.events.append(("invalid", key))


class ExplodingObserver:
    """Observer whose every hook raises."""

    def on_hit(self, key: str) -> None:
        raise RuntimeError("hit hook")

    def on_miss(self, key: str, cause: object) -> None:
        raise RuntimeError("miss hook")

    def on_invalid(self, key: str) -> None:
        raise RuntimeError("invalid hook")


# ============================================================================
# Stores
# ============================================================================


class FaultyStore(MemoryStore):
    """
    MemoryStore with injectable failures and a call log.

    Keys listed in fail_read / fail_write / fail_delete return Error(IO).
    Keys listed in raise_read make read() raise instead.
    """

    def __init__(self) -> None:
        super().__init__()
        self.fail_read: set[str] = set()
        self.fail_write: set[str] = set()
        self.fail_delete: set[str] = set()
        self.raise_read: set[str] = set()
        self.calls: list[tuple[str, str]] = []

    async def read(self, key: str) -> Result[Any, StoreError]:
        self.calls.append(("read", key))
        if key in self.raise_read:
            raise ConnectionError(f"read {key}")
        if key in self.fail_read:
            return Error(StoreError.io(key, OSError(f"read {key}")))
        return await super().read(key)

    async def write(self, key: str, value: Any) -> Result[None, StoreError]:
        self.calls.append(("write", key))
        if key in self.fail_write:
            return Error(StoreError.io(key, OSError(f"write {key}")))
        return await super().write(key, value)

    async def delete(self, key: str) -> Result[bool, StoreError]:
        self.calls.append(("delete", key))
        if key in self.fail_delete:
            return Error(StoreError.io(key, OSError(f"delete {key}")))
        return await super().delete(key)

    def called(self, op: str) -> list[str]:
        return [key for name, key in self.calls if name == op]


class CountingTransactionalStore(TransactionalMemoryStore):
    """TransactionalMemoryStore recording which entry points were used."""

    def __init__(self) -> None:
        super().__init__()
        self.calls: list[str] = []

    async def write(self, key: str, value: Any) -> Result[None, StoreError]:
        self.calls.append("write")
        return await super().write(key, value)

    async def delete(self, key: str) -> Result[bool, StoreError]:
        self.calls.append("delete")
        return await super().delete(key)

    async def write_many(self, items: Mapping[str, Any]) -> Result[None, StoreError]:
        self.calls.append("write_many")
        return await super().write_many(items)

    async def delete_many(self, keys: Sequence[str]) -> Result[int, StoreError]:
        self.calls.append("delete_many")
        return await super().delete_many(keys)


async def stored(store: Any, key: str) -> Any:
    """Value persisted under key, or None when the store has no record."""
    match await store.read(key):
        case Ok(value):
            return value
        case Error(_):
            return None


async def has(store: Any, key: str) -> bool:
    match await store.exists(key):
        case Ok(found):
            return found
        case Error(err):
            raise AssertionError(f"exists({key!r}) failed: {err}")


def ok_value(result: Result[Any, Any]) -> Any:
    match result:
        case Ok(value):
            return value
        case Error(err):
            raise AssertionError(f"expected Ok, got Error({err!r})")
