"""
Disk cache types.
"""

from __future__ import annotations

from dataclasses import dataclass

# ═══════════════════════════════════════════════════════════════════════════════
# Key Layout
# ═══════════════════════════════════════════════════════════════════════════════

POLICY_SUFFIX = "_policy"
"""Persisted-format detail — changing it orphans every stored entry."""


def policy_key(key: str) -> str:
    """Store key of the policy record paired with `key`."""
    return key + POLICY_SUFFIX


def entry_keys(key: str) -> tuple[str, str]:
    """(value key, policy key) for a logical key."""
    return key, policy_key(key)


# ═══════════════════════════════════════════════════════════════════════════════
# Cached — Emitted Unit
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Cached[V, P]:
    """
    A value with its policy and provenance.

    from_disk=True  — served from the store, produced by an earlier run
    from_disk=False — freshly produced by this run, already persisted
    """

    value: V
    policy: P
    from_disk: bool


__all__ = ("POLICY_SUFFIX", "policy_key", "entry_keys", "Cached")
