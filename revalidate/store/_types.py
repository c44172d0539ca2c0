"""
Store types — the key/value contract the cache pipeline depends on.

All methods return Result for explicit error handling.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Protocol, runtime_checkable

from kungfu import Result


# ═══════════════════════════════════════════════════════════════════════════════
# Store Error
# ═══════════════════════════════════════════════════════════════════════════════


class StoreErrorKind(Enum):
    """Store error kinds."""

    NOT_FOUND = auto()  # Key has no record
    IO = auto()  # Backend failed (disk, connection, ...)
    SERIALIZATION = auto()  # Record exists but cannot be decoded/encoded


@dataclass(frozen=True, slots=True)
class StoreError:
    """
    Storage operation error.

    Note: cause keeps the original exception for logging, never re-raised.
    """

    kind: StoreErrorKind
    message: str
    key: str | None = None
    cause: Exception | None = None

    @classmethod
    def not_found(cls, key: str) -> StoreError:
        return cls(StoreErrorKind.NOT_FOUND, f"No record for key: {key}", key)

    @classmethod
    def io(cls, key: str | None, cause: Exception) -> StoreError:
        return cls(StoreErrorKind.IO, str(cause) or type(cause).__name__, key, cause)

    @classmethod
    def serialization(cls, key: str | None, cause: Exception) -> StoreError:
        return cls(
            StoreErrorKind.SERIALIZATION,
            f"Cannot (de)serialize record: {cause}",
            key,
            cause,
        )

    @property
    def is_not_found(self) -> bool:
        return self.kind == StoreErrorKind.NOT_FOUND

    def __str__(self) -> str:
        return self.message


# ═══════════════════════════════════════════════════════════════════════════════
# Store Protocol — Users Implement This
# ═══════════════════════════════════════════════════════════════════════════════


@runtime_checkable
class Store(Protocol):
    """
    Asynchronous key/value store protocol.

    Values are opaque, the store decides how to persist them.
    Implement this for custom backends (Redis, S3, ...).

    Example:
        class RedisStore:
            def __init__(self, client: Redis) -> None:
                self.client = client

            async def read(self, key: str) -> Result[Any, StoreError]:
                try:
                    data = await self.client.get(key)
                except Exception as e:
                    return Error(StoreError.io(key, e))
                if data is None:
                    return Error(StoreError.not_found(key))
                return Ok(pickle.loads(data))

            # ... write / delete / exists
    """

    async def read(self, key: str) -> Result[Any, StoreError]:
        """Read value. Error(NOT_FOUND) if the key has no record."""
        ...

    async def write(self, key: str, value: Any) -> Result[None, StoreError]:
        """Write value, replacing any previous one."""
        ...

    async def delete(self, key: str) -> Result[bool, StoreError]:
        """
        Delete key. Returns Ok(True) if existed.

        Must succeed with Ok(False) for missing keys.
        """
        ...

    async def exists(self, key: str) -> Result[bool, StoreError]:
        """Check if key has a record."""
        ...


@runtime_checkable
class TransactionalStore(Store, Protocol):
    """
    Store that can write or delete several keys atomically.

    Note: When a store implements this, value and policy records are
    written in one transaction, so a crash cannot leave a torn pair.
    """

    async def write_many(self, items: Mapping[str, Any]) -> Result[None, StoreError]:
        """Write all items or none."""
        ...

    async def delete_many(self, keys: Sequence[str]) -> Result[int, StoreError]:
        """Delete all keys or none. Returns how many existed."""
        ...


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    "StoreErrorKind",
    "StoreError",
    "Store",
    "TransactionalStore",
)
