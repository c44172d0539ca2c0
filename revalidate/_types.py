"""
Core types for revalidate.

Re-exports from kungfu/combinators + the function shapes the pipeline consumes.
"""

from __future__ import annotations

from typing import Never
from collections.abc import Callable

# Re-export from kungfu
from kungfu import Result, Ok, Error, LazyCoroResult

# Re-export from combinators
from combinators import LCR

# ═══════════════════════════════════════════════════════════════════════════════
# Lazy Computation Aliases
# ═══════════════════════════════════════════════════════════════════════════════

type Lazy[T, E] = LazyCoroResult[T, E]
"""Lazy async computation that may fail."""

type Pure[T] = Lazy[T, Never]
"""Lazy computation that cannot fail."""

type Producer[V, E] = Lazy[V, E]
"""One-shot computation whose result gets cached."""

# ═══════════════════════════════════════════════════════════════════════════════
# Policy Functions
# ═══════════════════════════════════════════════════════════════════════════════

type PolicyFactory[V, P] = Callable[[V], P]
"""Builds the policy stored next to a freshly computed value."""

type PolicyValidator[P] = Callable[[P], bool]
"""Decides whether a persisted policy still allows serving its value."""

# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    # Re-exports from kungfu
    "Result",
    "Ok",
    "Error",
    "LazyCoroResult",
    # Re-exports from combinators
    "LCR",
    # Type aliases
    "Lazy",
    "Pure",
    "Producer",
    # Policy functions
    "PolicyFactory",
    "PolicyValidator",
)
