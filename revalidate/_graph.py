"""
Graph runner — thin sugar over nodnod.

Compiles a target node once, resolves it many times with injected values.
"""

from __future__ import annotations

from typing import Any, cast
from collections.abc import Callable, Coroutine

from nodnod import Scope, Value, EventLoopAgent, Node, scalar_node as node

type _RunMethod = Callable[[Scope, dict[type[Any], Scope]], Coroutine[Any, Any, None]]


class Graph[T]:
    """
    Pre-compiled graph for a target node.

    Auto-discovers all dependent nodes from the target on first use.

    Example:
        read_graph = Graph(ReadOutcomeNode)
        outcome = await read_graph.resolve(request)
    """

    __slots__ = ("_target", "_agent")

    def __init__(self, target: type[T]) -> None:
        self._target = target
        self._agent: EventLoopAgent | None = None

    @property
    def agent(self) -> EventLoopAgent:
        if self._agent is None:
            self._agent = EventLoopAgent.build(
                {cast(type[Node[Any, Any]], self._target)}
            )
        return self._agent

    async def resolve(self, *values: object) -> T:
        """Inject values by their runtime type and resolve the target."""
        scope = Scope(detail="revalidate")
        async with scope:
            for value in values:
                scope.push(Value(cast(type[Any], type(value)), value))

            run_method = cast(_RunMethod, getattr(self.agent, "run"))
            await run_method(scope, {})

            result = scope.get(self._target)
            if result is None:
                raise KeyError(f"{self._target.__name__} not resolved")
            return cast(T, result.value)


__all__ = ("node", "Graph")
