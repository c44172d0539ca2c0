"""
Observer — side-channel hooks for cache events.

Hooks never influence control flow: exceptions raised by an observer are
logged and dropped.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Protocol

logger = logging.getLogger(__name__)


class Observer(Protocol):
    """
    Cache event sink.

    Example:
        class MetricsObserver:
            def on_hit(self, key: str) -> None:
                HITS.labels(key).inc()

            def on_miss(self, key: str, cause: object) -> None:
                MISSES.labels(key).inc()

            def on_invalid(self, key: str) -> None:
                INVALID.labels(key).inc()
    """

    def on_hit(self, key: str) -> None:
        """Value served from the store."""
        ...

    def on_miss(self, key: str, cause: object) -> None:
        """Store read failed — entry dropped."""
        ...

    def on_invalid(self, key: str) -> None:
        """Entry absent or rejected by its policy — entry dropped."""
        ...


class NoopObserver:
    """Default observer — ignores everything."""

    __slots__ = ()

    def on_hit(self, key: str) -> None:
        pass

    def on_miss(self, key: str, cause: object) -> None:
        pass

    def on_invalid(self, key: str) -> None:
        pass


NOOP = NoopObserver()


class LoggingObserver:
    """
    Observer writing to stdlib logging.

    Hits and invalidations at DEBUG, misses at ERROR.
    """

    __slots__ = ("logger",)

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or logging.getLogger("revalidate")

    def on_hit(self, key: str) -> None:
        self.logger.debug("Cache hit: %s", key)

    def on_miss(self, key: str, cause: object) -> None:
        self.logger.error("Cache miss: %s\nCaused by: %s", key, cause)

    def on_invalid(self, key: str) -> None:
        self.logger.debug("Cache invalid: %s", key)


def notify[*Args](hook: Callable[[*Args], None], *args: *Args) -> None:
    """Call an observer hook, swallowing and logging its failures."""
    try:
        hook(*args)
    except Exception:
        logger.exception("Observer hook %s failed", getattr(hook, "__qualname__", hook))


__all__ = ("Observer", "NoopObserver", "NOOP", "LoggingObserver", "notify")
