"""
Leaf transaction creation.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Never

from kungfu import Result, Ok, Error, LazyCoroResult
from combinators import lift as L

from undoable._types import Computation, Undo
from undoable.lift import from_lazy as computation_of
from undoable.tx._transaction import Transaction

# ═══════════════════════════════════════════════════════════════════════════════
# transaction() — Primary Constructor
# ═══════════════════════════════════════════════════════════════════════════════


def transaction[T, E](
    commit: Computation[T, E],
    rollback: Undo[E],
) -> Transaction[T, E]:
    """
    Create a transaction from a do/undo pair.

    Args:
        commit: Performs the step, returns Ok(value) or Error(failure)
        rollback: Undoes the step, returns Ok(None) or Error(failure)

    Returns:
        Transaction that can be composed with .map(), .chain() and .ap()

    Example:
        from undoable import tx as T

        async def write_config() -> Result[Path, IOFailure]: ...
        async def restore_config() -> Result[None, IOFailure]: ...

        step = T.transaction(write_config, restore_config)
    """
    return Transaction(commit=commit, rollback=rollback)


def failed[E](error: E) -> Transaction[Never, E]:
    """Transaction whose commit fails with error and has nothing to undo."""

    async def commit() -> Result[Never, E]:
        return Error(error)

    async def rollback() -> Result[None, E]:
        return Ok(None)

    return Transaction(commit, rollback)


# ═══════════════════════════════════════════════════════════════════════════════
# from_lazy() — From kungfu LazyCoroResult
# ═══════════════════════════════════════════════════════════════════════════════


def from_lazy[T, E](
    commit: LazyCoroResult[T, E],
    rollback: LazyCoroResult[None, E],
) -> Transaction[T, E]:
    """
    Create a transaction from two lazy results.

    Example:
        T.from_lazy(
            L.catching_async(lambda: api.reserve(sku), on_error=StockError),
            L.catching_async(lambda: api.release(sku), on_error=StockError),
        )
    """
    return Transaction(computation_of(commit), computation_of(rollback))


# ═══════════════════════════════════════════════════════════════════════════════
# from_async() — From async callables
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(slots=True)
class _Committed[T]:
    """Value produced by one leaf's commit, kept for its undo."""

    value: Ok[T] | None = None


def from_async[T, E](
    action: Callable[[], Awaitable[T]],
    on_error: Callable[[Exception], E],
    undo: Callable[[T], Awaitable[None]] | None = None,
) -> Transaction[T, E]:
    """
    Create a transaction from plain async callables.

    Exceptions from action or undo become failures via on_error. undo
    receives the committed value and only runs if commit succeeded.

    Example:
        T.from_async(
            lambda: api.book_flight(flight_id),
            on_error=lambda e: BookingError(str(e)),
            undo=lambda booking: api.cancel_booking(booking.id),
        )
    """
    committed: _Committed[T] = _Committed()
    perform = L.catching_async(action, on_error=on_error)

    async def commit() -> Result[T, E]:
        result = await perform
        match result:
            case Ok(value):
                committed.value = Ok(value)
        return result

    async def rollback() -> Result[None, E]:
        match committed.value:
            case Ok(value) if undo is not None:
                return await L.catching_async(lambda: undo(value), on_error=on_error)
            case _:
                return Ok(None)

    return Transaction(commit, rollback)


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = ("transaction", "failed", "from_lazy", "from_async")
