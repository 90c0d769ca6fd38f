"""
Transaction composition over many steps.
"""

from __future__ import annotations

from collections.abc import Callable

from undoable.tx._transaction import Transaction, of

# ═══════════════════════════════════════════════════════════════════════════════
# sequence() — One After Another
# ═══════════════════════════════════════════════════════════════════════════════


def _append[T](items: tuple[T, ...]) -> Callable[[T], tuple[T, ...]]:
    return lambda item: (*items, item)


def sequence[T, E](*txs: Transaction[T, E]) -> Transaction[tuple[T, ...], E]:
    """
    Commit transactions in order, collecting their values.

    A failure undoes every step that already committed.

    Example:
        migrate = T.sequence(
            T.transaction(add_column, drop_column),
            T.transaction(backfill, clear_backfill),
        )
    """
    acc: Transaction[tuple[T, ...], E] = of(())
    for tx in txs:
        acc = acc.chain(lambda items, tx=tx: tx.map(_append(items)))
    return acc


# ═══════════════════════════════════════════════════════════════════════════════
# parallel() — All At Once
# ═══════════════════════════════════════════════════════════════════════════════


def parallel[T, E](*txs: Transaction[T, E]) -> Transaction[tuple[T, ...], E]:
    """
    Commit transactions concurrently, all must succeed.

    The first failure is reported; steps still running are not cancelled.
    Rollback undoes every step concurrently.

    Example:
        trip = T.parallel(
            T.from_async(book_flight, on_error=BookingError, undo=cancel_flight),
            T.from_async(book_hotel, on_error=BookingError, undo=cancel_hotel),
        )
    """
    acc: Transaction[tuple[T, ...], E] = of(())
    for tx in txs:
        acc = acc.map(_append).ap(tx)
    return acc


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = ("sequence", "parallel")
