"""
Core types for undoable.

Re-exports from kungfu + the computation alias every transaction is built from.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable

# Re-export from kungfu
from kungfu import Result, Ok, Error, LazyCoroResult

# ═══════════════════════════════════════════════════════════════════════════════
# Computation
# ═══════════════════════════════════════════════════════════════════════════════

type Computation[T, E] = Callable[[], Awaitable[Result[T, E]]]
"""
One-shot async work that reports Ok(value) or Error(failure).

Failures are returned, not raised. Each call performs the work again.
"""

type Undo[E] = Computation[None, E]
"""Computation that undoes a step; success carries no payload."""

# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    # Re-exports from kungfu
    "Result",
    "Ok",
    "Error",
    "LazyCoroResult",
    # Aliases
    "Computation",
    "Undo",
)
