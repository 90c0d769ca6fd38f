"""
Lift — Helpers for turning async code and kungfu values into computations.

Re-exports from combinators.lift with undoable-specific additions.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable

from kungfu import LazyCoroResult, Result

# Re-export from combinators.lift
from combinators.lift import (
    pure,
    fail,
    catching_async,
)

from undoable._types import Computation


# ═══════════════════════════════════════════════════════════════════════════════
# Computation <-> LazyCoroResult
# ═══════════════════════════════════════════════════════════════════════════════

def from_lazy[T, E](lazy: LazyCoroResult[T, E]) -> Computation[T, E]:
    """Computation that awaits lazy each time it is called."""
    async def _run() -> Result[T, E]:
        return await lazy
    return _run


def to_lazy[T, E](computation: Computation[T, E]) -> LazyCoroResult[T, E]:
    """
    Wrap a computation (e.g. a transaction's commit) as LazyCoroResult.

    Example:
        committed = await L.to_lazy(booking.commit).map(lambda b: b.id)
    """
    async def _run() -> Result[T, E]:
        return await computation()
    return LazyCoroResult(_run)


# ═══════════════════════════════════════════════════════════════════════════════
# Plain values and async callables
# ═══════════════════════════════════════════════════════════════════════════════

def from_result[T, E](result: Result[T, E]) -> Computation[T, E]:
    """Computation that always reports result."""
    async def _run() -> Result[T, E]:
        return result
    return _run


def from_awaitable[T, E](
    awaitable_fn: Callable[[], Awaitable[T]],
    on_error: Callable[[Exception], E],
) -> Computation[T, E]:
    """
    Create a computation from an async function.

    Exceptions raised by awaitable_fn are reported as Error(on_error(exc)).
    """
    return from_lazy(catching_async(awaitable_fn, on_error=on_error))


__all__ = (
    # From combinators.lift
    "pure",
    "fail",
    "catching_async",
    # undoable additions
    "from_lazy",
    "to_lazy",
    "from_result",
    "from_awaitable",
)
