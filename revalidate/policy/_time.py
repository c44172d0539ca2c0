"""
Time policy — entries expire after a maximum age.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from revalidate._types import PolicyFactory, PolicyValidator
from revalidate.policy._spec import Clock, PolicySpec, to_delta


@dataclass(frozen=True, slots=True)
class TimePolicy:
    """Moment the cached value was produced."""

    timestamp: datetime

    def age(self, now: datetime) -> timedelta:
        return now - self.timestamp


def create_time[V](
    at: datetime | None = None,
    *,
    now: Clock = datetime.now,
) -> PolicyFactory[V, TimePolicy]:
    """
    Stamp each fresh value with the current time, or with a fixed `at`.
    """

    def create(_value: V) -> TimePolicy:
        return TimePolicy(at if at is not None else now())

    return create


def validate_time(
    max_age: timedelta,
    *,
    now: Clock = datetime.now,
) -> PolicyValidator[TimePolicy]:
    """Valid while the entry is strictly younger than max_age."""

    def is_valid(policy: TimePolicy) -> bool:
        return policy.age(now()) < max_age

    return is_valid


def time_policy[V](
    *,
    seconds: float | None = None,
    minutes: float | None = None,
    hours: float | None = None,
    delta: timedelta | None = None,
    now: Clock = datetime.now,
) -> PolicySpec[V, TimePolicy]:
    """
    Expire cached values after a fixed age.

    Example:
        .policy(P.time_policy(minutes=10))
    """
    max_age = to_delta(seconds=seconds, minutes=minutes, hours=hours, delta=delta)
    return PolicySpec(
        create=create_time(now=now),
        is_valid=validate_time(max_age, now=now),
    )


__all__ = ("TimePolicy", "create_time", "validate_time", "time_policy")
