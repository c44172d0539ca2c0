"""
Lift — turning plain values and coroutines into producers.

Thin layer over combinators.lift.
"""

from __future__ import annotations

from collections.abc import Callable, Awaitable

from kungfu import LazyCoroResult, Result
from combinators.lift import catching_async, pure, fail


def producer[V, E](
    fn: Callable[[], Awaitable[V]],
    on_error: Callable[[Exception], E],
) -> LazyCoroResult[V, E]:
    """
    Producer from an async function. Exceptions become Error(on_error(e)).

    Example:
        fetch = R.producer(
            lambda: api.get_user(uid),
            on_error=lambda e: UserError(str(e)),
        )
    """
    return catching_async(fn, on_error=on_error)


def from_result[V, E](result: Result[V, E]) -> LazyCoroResult[V, E]:
    """Producer that resolves to an already known Result."""
    async def _run() -> Result[V, E]:
        return result
    return LazyCoroResult(_run)


__all__ = (
    # From combinators.lift
    "pure",
    "fail",
    "catching_async",
    # revalidate additions
    "producer",
    "from_result",
)
