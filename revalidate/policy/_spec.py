"""
Policy spec — the create/validate pair the pipeline is parameterized with.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from collections.abc import Callable

from revalidate._types import PolicyFactory, PolicyValidator

# ═══════════════════════════════════════════════════════════════════════════════
# Clock
# ═══════════════════════════════════════════════════════════════════════════════

type Clock = Callable[[], datetime]
"""Source of "now" for time-based policies. Injectable for tests."""


# ═══════════════════════════════════════════════════════════════════════════════
# PolicySpec — create + validate
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class PolicySpec[V, P]:
    """
    Pair of pure functions deciding what gets stored next to a value
    and whether it may be served later.

    Example:
        spec = P.of(
            lambda user: user.revision,
            lambda revision: revision >= MIN_REVISION,
        )

    Note: Immutable, each method returns new PolicySpec.
    """

    create: PolicyFactory[V, P]
    is_valid: PolicyValidator[P]

    def with_create(self, create: PolicyFactory[V, P]) -> PolicySpec[V, P]:
        """Replace the policy factory, keep the validator."""
        return PolicySpec(create=create, is_valid=self.is_valid)

    def with_validator(self, is_valid: PolicyValidator[P]) -> PolicySpec[V, P]:
        """
        Replace the validator, keep the factory.

        Useful when reading with a stricter rule than the one used to write:

            .with_validator(P.validate_version(2))
        """
        return PolicySpec(create=self.create, is_valid=is_valid)


def of[V, P](
    create: PolicyFactory[V, P],
    is_valid: PolicyValidator[P],
) -> PolicySpec[V, P]:
    """Create PolicySpec from two functions."""
    return PolicySpec(create=create, is_valid=is_valid)


# ═══════════════════════════════════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════════════════════════════════


def to_delta(
    *,
    seconds: float | None = None,
    minutes: float | None = None,
    hours: float | None = None,
    delta: timedelta | None = None,
) -> timedelta:
    """
    Collapse keyword durations into a timedelta.

    Example:
        to_delta(minutes=5)              # 5 minutes
        to_delta(delta=timedelta(days=1))
    """
    units = (seconds, minutes, hours)
    if delta is not None and any(u is not None for u in units):
        raise ValueError("pass either delta= or seconds=/minutes=/hours=, not both")
    if delta is None:
        total_seconds = (seconds or 0) + (minutes or 0) * 60 + (hours or 0) * 3600
        delta = timedelta(seconds=total_seconds)
    if delta <= timedelta(0):
        raise ValueError("max age must be positive")
    return delta


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = ("Clock", "PolicySpec", "of", "to_delta")
