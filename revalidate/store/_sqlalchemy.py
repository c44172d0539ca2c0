"""
SQLAlchemy integration — key/value store on any async database.

Usage:
    1. Use the bundled table, or add CacheEntryMixin to your own model:

        class MyCacheTable(Base, CacheEntryMixin):
            __tablename__ = "my_cache"

    2. Create tables and the store:

        engine = create_async_engine("sqlite+aiosqlite:///cache.db")
        await create_tables(engine)
        store = SQLAlchemyStore(async_sessionmaker(engine))

    3. Use:

        executor = D.disk_cache(store).policy(P.version_policy(1)).build()

Note: Transactional. Value and policy records of an entry are written
and deleted in one transaction.
"""

from collections.abc import Mapping, Sequence
from typing import Any, cast

from sqlalchemy import LargeBinary, String, select, delete as sa_delete
from sqlalchemy.engine import CursorResult
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from kungfu import Result, Ok, Error

from revalidate.store._serializer import PickleSerializer, Serializer
from revalidate.store._types import StoreError


# ═══════════════════════════════════════════════════════════════════════════════
# Cache Entry Mixin — add to your SQLAlchemy model
# ═══════════════════════════════════════════════════════════════════════════════


class CacheEntryMixin:
    """
    Mixin for key/value cache tables.

    Adds columns:
    - key: primary key (logical or derived policy key)
    - value: serialized record
    """

    key: Mapped[str] = mapped_column(String(512), primary_key=True)

    value: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)


class CacheBase(DeclarativeBase):
    pass


class CacheEntryTable(CacheBase, CacheEntryMixin):
    """Default table used by SQLAlchemyStore."""

    __tablename__ = "revalidate_entries"


async def create_tables(engine: AsyncEngine) -> None:
    """Create the default cache table if missing."""
    async with engine.begin() as conn:
        await conn.run_sync(CacheBase.metadata.create_all)


# ═══════════════════════════════════════════════════════════════════════════════
# SQLAlchemy Store
# ═══════════════════════════════════════════════════════════════════════════════


class SQLAlchemyStore:
    """
    Key/value store backed by a SQLAlchemy model with CacheEntryMixin.

    Example:
        store = SQLAlchemyStore(
            session_factory,
            model=MyCacheTable,
            serializer=JsonSerializer(),
        )
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        model: type[CacheEntryMixin] = CacheEntryTable,
        serializer: Serializer | None = None,
    ) -> None:
        """
        Args:
            session_factory: SQLAlchemy async session factory
            model: Mapped class with CacheEntryMixin
            serializer: Bytes codec for values (pickle by default)
        """
        self._session_factory = session_factory
        self._model = model
        self._serializer: Serializer = serializer or PickleSerializer()

    async def read(self, key: str) -> Result[Any, StoreError]:
        try:
            async with self._session_factory() as session:
                stmt = select(self._model.value).where(self._model.key == key)
                data = (await session.execute(stmt)).scalar_one_or_none()
        except Exception as e:
            return Error(StoreError.io(key, e))

        if data is None:
            return Error(StoreError.not_found(key))
        try:
            return Ok(self._serializer.loads(data))
        except Exception as e:
            return Error(StoreError.serialization(key, e))

    async def write(self, key: str, value: Any) -> Result[None, StoreError]:
        return await self.write_many({key: value})

    async def delete(self, key: str) -> Result[bool, StoreError]:
        match await self.delete_many([key]):
            case Ok(count):
                return Ok(count > 0)
            case Error(err):
                return Error(err)

    async def exists(self, key: str) -> Result[bool, StoreError]:
        try:
            async with self._session_factory() as session:
                stmt = select(self._model.key).where(self._model.key == key)
                found = (await session.execute(stmt)).scalar_one_or_none()
                return Ok(found is not None)
        except Exception as e:
            return Error(StoreError.io(key, e))

    async def write_many(self, items: Mapping[str, Any]) -> Result[None, StoreError]:
        """Upsert all items in one transaction."""
        rows: list[CacheEntryMixin] = []
        for key, value in items.items():
            try:
                data = self._serializer.dumps(value)
            except Exception as e:
                return Error(StoreError.serialization(key, e))
            rows.append(self._model(key=key, value=data))  # type: ignore[call-arg]

        try:
            async with self._session_factory.begin() as session:
                for row in rows:
                    await session.merge(row)
            return Ok(None)
        except Exception as e:
            return Error(StoreError.io(_first(items), e))

    async def delete_many(self, keys: Sequence[str]) -> Result[int, StoreError]:
        """Delete all keys in one transaction. Returns how many existed."""
        try:
            async with self._session_factory.begin() as session:
                stmt = sa_delete(self._model).where(self._model.key.in_(list(keys)))
                cursor = cast(CursorResult[Any], await session.execute(stmt))
                return Ok(cursor.rowcount)
        except Exception as e:
            return Error(StoreError.io(_first(keys), e))


def _first(keys: Mapping[str, Any] | Sequence[str]) -> str | None:
    return next(iter(keys), None)


__all__ = (
    "CacheEntryMixin",
    "CacheBase",
    "CacheEntryTable",
    "create_tables",
    "SQLAlchemyStore",
)
