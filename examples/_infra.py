"""Shared infrastructure for examples."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Coroutine
from dataclasses import dataclass, field

from kungfu import Result, Ok, Error


# Types
@dataclass(frozen=True, slots=True)
class User:
    id: int
    name: str
    email: str


# Errors
@dataclass(frozen=True, slots=True)
class NotFound(Exception):
    entity: str
    id: int | str

    def __str__(self) -> str:
        return f"{self.entity}:{self.id} not found"


@dataclass(frozen=True, slots=True)
class Unavailable(Exception):
    message: str

    def __str__(self) -> str:
        return self.message


# Fake API
@dataclass(slots=True)
class FakeApi:
    users: dict[int, User] = field(default_factory=lambda: {
        42: User(42, "Alice", "alice@example.com"),
        7: User(7, "Bob", "bob@example.com"),
    })
    down: bool = False
    calls: int = 0

    async def get_user(self, user_id: int) -> Result[User, NotFound | Unavailable]:
        self.calls += 1
        await asyncio.sleep(0.05)
        if self.down:
            return Error(Unavailable("api is down"))
        user = self.users.get(user_id)
        return Ok(user) if user else Error(NotFound("User", user_id))


# Helpers
def banner(title: str) -> None:
    print(f"\n{'─' * 50}\n{title}\n{'─' * 50}")


def run(main: Callable[[], Coroutine[object, object, None]]) -> None:
    asyncio.run(main())
