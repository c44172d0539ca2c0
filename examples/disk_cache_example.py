"""
Disk cache — show the last persisted result, then refresh it.

Key concepts:
- Store = where entries live (FileStore: one file per key)
- Policy = what gets stored next to a value and when it may be served
- transform() yields the cached value first (if valid), then the fresh one

Level 5: revalidate.disk
Level 3: combinators.lift
Level 2: kungfu.Result
"""

import tempfile

from kungfu import Ok, Error, LazyCoroResult
from revalidate import disk as D, policy as P, store as S
from examples._infra import banner, run, User, FakeApi


api = FakeApi()


def fetch_user(user_id: int) -> LazyCoroResult[User, Exception]:
    return LazyCoroResult(lambda: api.get_user(user_id))


async def show(executor: D.DiskCacheExecutor[User, P.VersionPolicy], user_id: int) -> None:
    async for result in executor.transform(fetch_user(user_id), f"user{user_id}"):
        match result:
            case Ok(cached) if cached.from_disk:
                print(f"   disk  → {cached.value.name} (v{cached.policy.version})")
            case Ok(cached):
                print(f"   fresh → {cached.value.name} (v{cached.policy.version})")
            case Error(e):
                print(f"   error → {e}")


async def main() -> None:
    banner("Disk cache: cached first, fresh second")

    with tempfile.TemporaryDirectory() as cache_dir:
        store = S.FileStore(cache_dir)
        v1 = (
            D.disk_cache(store)
            .policy(P.version_policy(1))
            .observe(D.LoggingObserver())
            .build()
        )

        print("\n1. Empty cache (fresh only):")
        await show(v1, 42)

        print("\n2. Cached entry is valid (disk, then fresh):")
        await show(v1, 42)

        print("\n3. API down (disk, then error):")
        api.down = True
        await show(v1, 42)
        api.down = False

        print("\n4. Schema bump to v2 (v1 entry dropped, fresh only):")
        v2 = D.disk_cache(store).policy(P.version_policy(2)).build()
        await show(v2, 42)

        print("\n5. Explicit invalidation:")
        match await v2.invalidate("user42"):
            case Ok(existed):
                print(f"   dropped={existed}")
            case Error(e):
                print(f"   error → {e}")
        await show(v2, 42)

    print(f"\nAPI calls: {api.calls}")
    print("\nDone!")


if __name__ == "__main__":
    run(main)
