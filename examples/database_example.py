"""
Database store — entries in an async SQLAlchemy table.

SQLAlchemyStore is transactional: value and policy records are written
and deleted in one transaction.

Requires: sqlalchemy[asyncio], aiosqlite
"""

from datetime import timedelta

from kungfu import Ok, Error, LazyCoroResult
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from revalidate import disk as D, policy as P, store as S
from examples._infra import banner, run, User, FakeApi


api = FakeApi()


def fetch_user(user_id: int) -> LazyCoroResult[User, Exception]:
    return LazyCoroResult(lambda: api.get_user(user_id))


async def main() -> None:
    banner("Database store with time + version policy")

    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    await S.create_tables(engine)
    store = S.SQLAlchemyStore(async_sessionmaker(engine, expire_on_commit=False))

    user_cache = (
        D.disk_cache(store)
        .policy(P.time_and_version_policy(1, delta=timedelta(hours=1)))
        .build()
    )

    for attempt in (1, 2):
        print(f"\n{attempt}. Request user 7:")
        async for result in user_cache.transform(fetch_user(7), "user7"):
            match result:
                case Ok(cached):
                    source = "disk" if cached.from_disk else "fresh"
                    print(f"   {source} → {cached.value.name} @ {cached.policy.timestamp:%H:%M:%S}")
                case Error(e):
                    print(f"   error → {e}")

    print("\n3. Unknown user (error, nothing stored):")
    results = await user_cache.collect(fetch_user(999), "user999")
    print(f"   {results}")
    match await store.exists("user999"):
        case Ok(found):
            print(f"   stored={found}")
        case Error(e):
            print(f"   error → {e}")

    await engine.dispose()
    print("\nDone!")


if __name__ == "__main__":
    run(main)
