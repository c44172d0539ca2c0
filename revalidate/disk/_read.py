"""
Cache-read graph — serving a persisted entry as nodnod nodes.

State nodes validate, a polymorphic outcome routes. Every route ends
without an error: cache-path failures only ever drop the entry.

Architecture:
    ReadRequest (injected)
         │
         ▼
    RequestNode
         │
         ▼
    FetchPolicyNode (reads K_policy, evaluates is_valid once)
         │
         ├──────────────────────┬─────────────────────────┐
         ▼                      ▼                         ▼
    ValidPolicyNode        StalePolicyNode        PolicyReadFailedNode
         │                      │                         │
         └──────────────────────┼─────────────────────────┘
                                ▼
                  CacheReadOutcome (@polymorphic)
                                │
                                ▼
                         ReadResultNode

Note: НЕ используем 'from __future__ import annotations' потому что
nodnod использует type hints в runtime для dependency resolution.
"""

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any

from nodnod import NodeError, polymorphic, case

from kungfu import Ok, Error

from revalidate import _graph as G
from revalidate._types import PolicyValidator
from revalidate.disk._observe import Observer, notify
from revalidate.disk._ops import read_safely, discard_entry
from revalidate.disk._types import Cached, policy_key
from revalidate.store import Store, StoreError

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════════
# Input — Request (injected)
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class ReadRequest:
    """Everything the read path needs for one logical key."""

    key: str
    store: Store
    is_valid: PolicyValidator[Any]
    observer: Observer


# ═══════════════════════════════════════════════════════════════════════════════
# Entry Node
# ═══════════════════════════════════════════════════════════════════════════════


@G.node
class RequestNode:
    """Wraps ReadRequest for graph."""

    def __init__(self, request: ReadRequest) -> None:
        self.request = request

    @classmethod
    def __compose__(cls, request: ReadRequest) -> "RequestNode":
        return cls(request)


# ═══════════════════════════════════════════════════════════════════════════════
# Fetch Policy
# ═══════════════════════════════════════════════════════════════════════════════


@G.node
class FetchPolicyNode:
    """
    Reads the policy record and validates it.

    Note: is_valid runs here, exactly once. State nodes only inspect `valid`.
    A raising validator counts as invalid.
    """

    def __init__(
        self,
        request: ReadRequest,
        policy: Any,
        valid: bool,
        read_error: StoreError | None = None,
    ) -> None:
        self.request = request
        self.policy = policy
        self.valid = valid
        self.read_error = read_error

    @classmethod
    async def __compose__(cls, request_node: RequestNode) -> "FetchPolicyNode":
        request = request_node.request
        result = await read_safely(request.store, policy_key(request.key))

        match result:
            case Ok(policy):
                return cls(request, policy, _validate(request, policy))
            case Error(err):
                return cls(request, None, False, read_error=err)


def _validate(request: ReadRequest, policy: Any) -> bool:
    try:
        return bool(request.is_valid(policy))
    except Exception as e:
        logger.warning("Policy validator failed for %s: %r", request.key, e)
        return False


# ═══════════════════════════════════════════════════════════════════════════════
# State Nodes — Each validates one policy state
# ═══════════════════════════════════════════════════════════════════════════════


@G.node
class ValidPolicyNode:
    """Validates: policy read and accepted."""

    def __init__(self, request: ReadRequest, policy: Any) -> None:
        self.request = request
        self.policy = policy

    @classmethod
    def __compose__(cls, fetch: FetchPolicyNode) -> "ValidPolicyNode":
        if fetch.read_error is not None:
            raise NodeError("Policy not read")
        if not fetch.valid:
            raise NodeError("Policy rejected")
        return cls(fetch.request, fetch.policy)


@G.node
class StalePolicyNode:
    """Validates: policy absent, or read and rejected."""

    def __init__(self, request: ReadRequest) -> None:
        self.request = request

    @classmethod
    def __compose__(cls, fetch: FetchPolicyNode) -> "StalePolicyNode":
        err = fetch.read_error
        if err is not None and not err.is_not_found:
            raise NodeError("Read failed")
        if fetch.valid:
            raise NodeError("Policy accepted")
        return cls(fetch.request)


@G.node
class PolicyReadFailedNode:
    """Validates: store failed to read the policy (not a plain absence)."""

    def __init__(self, request: ReadRequest, error: StoreError) -> None:
        self.request = request
        self.error = error

    @classmethod
    def __compose__(cls, fetch: FetchPolicyNode) -> "PolicyReadFailedNode":
        err = fetch.read_error
        if err is None:
            raise NodeError("Policy read")
        if err.is_not_found:
            raise NodeError("Policy absent")
        return cls(fetch.request, err)


# ═══════════════════════════════════════════════════════════════════════════════
# Outcome Types
# ═══════════════════════════════════════════════════════════════════════════════


class SkipReason(Enum):
    """Why nothing was served from the store."""

    INVALID = auto()  # Policy absent or rejected
    POLICY_UNREADABLE = auto()  # Policy record could not be read
    TORN = auto()  # Policy accepted, value record unreadable


@dataclass(frozen=True)
class ReadHit:
    """Entry served from the store."""

    cached: Cached[Any, Any]


@dataclass(frozen=True)
class ReadSkipped:
    """Entry dropped, nothing served."""

    reason: SkipReason
    cause: StoreError | None = None


type ReadOutcome = ReadHit | ReadSkipped


# ═══════════════════════════════════════════════════════════════════════════════
# Polymorphic Outcome — Each case uses validated state nodes
# ═══════════════════════════════════════════════════════════════════════════════


@polymorphic[ReadOutcome]
class CacheReadOutcome:
    """
    Polymorphic router, each @case depends on validated state node.

    Note: State nodes are mutually exclusive, exactly one case applies.
    """

    @case
    async def hit(cls, node: ValidPolicyNode) -> ReadOutcome:
        """Policy accepted — read the paired value."""
        request = node.request
        result = await read_safely(request.store, request.key)

        match result:
            case Ok(value):
                notify(request.observer.on_hit, request.key)
                return ReadHit(Cached(value=value, policy=node.policy, from_disk=True))
            case Error(err):
                # Torn pair or corrupt value, heals on next access
                notify(request.observer.on_miss, request.key, err)
                await discard_entry(request.store, request.key)
                return ReadSkipped(SkipReason.TORN, err)

    @case
    async def invalid(cls, node: StalePolicyNode) -> ReadOutcome:
        """Policy absent or rejected — drop the entry."""
        request = node.request
        await discard_entry(request.store, request.key)
        notify(request.observer.on_invalid, request.key)
        return ReadSkipped(SkipReason.INVALID)

    @case
    async def unreadable(cls, node: PolicyReadFailedNode) -> ReadOutcome:
        """Policy read failed — report and drop the entry."""
        request = node.request
        notify(request.observer.on_miss, request.key, node.error)
        await discard_entry(request.store, request.key)
        return ReadSkipped(SkipReason.POLICY_UNREADABLE, node.error)


# ═══════════════════════════════════════════════════════════════════════════════
# Final Node
# ═══════════════════════════════════════════════════════════════════════════════


@G.node
class ReadResultNode:
    """Unwraps the routed outcome."""

    def __init__(self, outcome: ReadOutcome) -> None:
        self.outcome = outcome

    @classmethod
    def __compose__(cls, outcome: CacheReadOutcome) -> "ReadResultNode":
        return cls(outcome.value)


# ═══════════════════════════════════════════════════════════════════════════════
# Public API
# ═══════════════════════════════════════════════════════════════════════════════

_read_graph = G.Graph(ReadResultNode)


async def read_outcome(request: ReadRequest) -> ReadOutcome:
    """Run the cache-read graph for one request."""
    node = await _read_graph.resolve(request)
    return node.outcome


async def read_cached(request: ReadRequest) -> Cached[Any, Any] | None:
    """
    Serve the persisted entry if its policy validates.

    Never fails: anything that goes wrong on the cache path drops the
    entry and yields None.
    """
    try:
        outcome = await read_outcome(request)
    except Exception as e:
        logger.warning("Cache read aborted for %s: %r", request.key, e)
        notify(request.observer.on_miss, request.key, e)
        await discard_entry(request.store, request.key)
        return None

    match outcome:
        case ReadHit(cached=cached):
            return cached
        case ReadSkipped():
            return None


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    "ReadRequest",
    "RequestNode",
    "FetchPolicyNode",
    "ValidPolicyNode",
    "StalePolicyNode",
    "PolicyReadFailedNode",
    "SkipReason",
    "ReadHit",
    "ReadSkipped",
    "ReadOutcome",
    "CacheReadOutcome",
    "ReadResultNode",
    "read_outcome",
    "read_cached",
)
