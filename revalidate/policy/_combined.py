"""
Time-and-version policy — both an age limit and a version ceiling.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from revalidate._types import PolicyFactory, PolicyValidator
from revalidate.policy._spec import Clock, PolicySpec, to_delta


@dataclass(frozen=True, slots=True)
class TimeAndVersionPolicy:
    timestamp: datetime
    version: int


def create_time_and_version[V](
    version: int,
    at: datetime | None = None,
    *,
    now: Clock = datetime.now,
) -> PolicyFactory[V, TimeAndVersionPolicy]:
    def create(_value: V) -> TimeAndVersionPolicy:
        return TimeAndVersionPolicy(
            timestamp=at if at is not None else now(),
            version=version,
        )

    return create


def validate_time_and_version(
    max_age: timedelta,
    version: int,
    *,
    now: Clock = datetime.now,
) -> PolicyValidator[TimeAndVersionPolicy]:
    """
    Valid while younger than max_age and not newer than `version`.

    Note: Older versions stay valid. Only entries written by a newer
    release are rejected.
    """

    def is_valid(policy: TimeAndVersionPolicy) -> bool:
        is_time_correct = now() - policy.timestamp < max_age
        is_version_correct = policy.version <= version
        return is_time_correct and is_version_correct

    return is_valid


def time_and_version_policy[V](
    version: int,
    *,
    seconds: float | None = None,
    minutes: float | None = None,
    hours: float | None = None,
    delta: timedelta | None = None,
    now: Clock = datetime.now,
) -> PolicySpec[V, TimeAndVersionPolicy]:
    """
    Example:
        .policy(P.time_and_version_policy(2, hours=1))
    """
    max_age = to_delta(seconds=seconds, minutes=minutes, hours=hours, delta=delta)
    return PolicySpec(
        create=create_time_and_version(version, now=now),
        is_valid=validate_time_and_version(max_age, version, now=now),
    )


__all__ = (
    "TimeAndVersionPolicy",
    "create_time_and_version",
    "validate_time_and_version",
    "time_and_version_policy",
)
