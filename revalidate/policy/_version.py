"""
Version policy — entries written by another schema version are dropped.
"""

from __future__ import annotations

from dataclasses import dataclass

from revalidate._types import PolicyFactory, PolicyValidator
from revalidate.policy._spec import PolicySpec


@dataclass(frozen=True, slots=True)
class VersionPolicy:
    version: int


def create_version[V](version: int) -> PolicyFactory[V, VersionPolicy]:
    def create(_value: V) -> VersionPolicy:
        return VersionPolicy(version)

    return create


def validate_version(current: int) -> PolicyValidator[VersionPolicy]:
    """Valid only for the exact current version."""

    def is_valid(policy: VersionPolicy) -> bool:
        return policy.version == current

    return is_valid


def version_policy[V](version: int) -> PolicySpec[V, VersionPolicy]:
    """
    Write and accept a single version.

    Example:
        .policy(P.version_policy(3))
    """
    return PolicySpec(
        create=create_version(version),
        is_valid=validate_version(version),
    )


__all__ = ("VersionPolicy", "create_version", "validate_version", "version_policy")
