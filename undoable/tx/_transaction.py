"""
Transaction — paired commit/rollback computations and their algebra.

A transaction builds up two computations side by side: the work to perform
on commit, and the work that undoes it on rollback. Because the rollback side
only grows as far as commit actually got, a failure in a later stage can be
undone in reverse starting from the point of failure.

    of(x)          unit: commits x, nothing to undo
    tx.map(f)      transform the committed value
    tx.chain(f)    sequence a dependent stage
    tx.ap(other)   apply a committed function to a committed value, both
                   commits running concurrently
"""

from __future__ import annotations

import inspect
import logging
import textwrap
from collections.abc import Callable
from dataclasses import dataclass
from typing import Never

from kungfu import Result, Ok, Error

from undoable._types import Computation, Undo
from undoable.tx._settle import Settle, start_branches

logger = logging.getLogger(__name__)

# ═══════════════════════════════════════════════════════════════════════════════
# Transaction
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True, repr=False)
class Transaction[T, E]:
    """
    A step that can be committed and rolled back.

    Nothing runs until `commit` or `rollback` is awaited. Each is meant to be
    invoked once per instance; the caller decides whether and when to roll
    back.

    Example:
        from undoable import tx as T

        reserve = T.transaction(reserve_seat, release_seat)
        booking = reserve.chain(lambda seat: T.transaction(
            charge_card(seat),
            refund_card(seat),
        ))

        match await booking.commit():
            case Ok(receipt):
                ...
            case Error(e):
                await booking.rollback()
    """

    commit: Computation[T, E]
    rollback: Undo[E]

    @staticmethod
    def of[U](value: U) -> Transaction[U, Never]:
        """Lift a value into a transaction."""
        return of(value)

    # ───────────────────────────────────────────────────────────────────────────
    # Functor
    # ───────────────────────────────────────────────────────────────────────────

    def map[U](self, f: Callable[[T], U]) -> Transaction[U, E]:
        """Transform the committed value. Undoing it undoes nothing extra."""
        return self.chain(lambda x: of(f(x)))

    # ───────────────────────────────────────────────────────────────────────────
    # Monad
    # ───────────────────────────────────────────────────────────────────────────

    def chain[U, E2](
        self,
        f: Callable[[T], Transaction[U, E2]],
    ) -> Transaction[U, E | E2]:
        """
        Run f's transaction after this one commits.

        If the second stage fails to commit, this stage is rolled back before
        the failure is returned. The returned failure is always the second
        stage's, even when that rollback fails too.

        Rolling back the result undoes whichever stages took effect: both,
        merged with rollback_both, or only this one. A stage already undone
        during commit is not undone again.
        """
        first = self
        progress: _Progress[U, E | E2] = _Progress()

        async def commit() -> Result[U, E | E2]:
            match await first.commit():
                case Error(e):
                    return Error(e)
                case Ok(x):
                    later = f(x)
                    match await later.commit():
                        case Ok(y):
                            progress.later = later
                            return Ok(y)
                        case Error(e):
                            logger.debug("second stage failed, rolling back first: %r", e)
                            progress.undone = await first.rollback()
                            if isinstance(progress.undone, Error):
                                logger.warning(
                                    "rollback after failed stage failed: %r",
                                    progress.undone.value,
                                )
                            return Error(e)

        async def rollback() -> Result[None, E | E2]:
            if progress.undone is not None:
                return progress.undone
            if progress.later is None:
                return await first.rollback()
            return await rollback_both(progress.later.rollback, first.rollback)()

        return Transaction(commit, rollback)

    # ───────────────────────────────────────────────────────────────────────────
    # Applicative
    # ───────────────────────────────────────────────────────────────────────────

    def ap[A, B, E2](
        self: Transaction[Callable[[A], B], E],
        other: Transaction[A, E2],
    ) -> Transaction[B, E | E2]:
        """
        Apply this transaction's function to other's value.

        Both commits start concurrently. The first failure wins; a later
        failure or a success arriving after it is dropped. Rollback undoes
        both sides concurrently via rollback_both.
        """
        fn_side = self

        async def commit() -> Result[B, E | E2]:
            cell: Settle[B, E | E2] = Settle()
            slots: _Slots[Callable[[A], B], A] = _Slots()

            def emit() -> None:
                if cell.settled:
                    return
                match slots.fn, slots.arg:
                    case Ok(fn), Ok(arg):
                        cell.resolve(fn(arg))

            def take_fn(fn: Callable[[A], B]) -> None:
                slots.fn = Ok(fn)
                emit()

            def take_arg(arg: A) -> None:
                slots.arg = Ok(arg)
                emit()

            start_branches(cell, (fn_side.commit, take_fn), (other.commit, take_arg))
            return await cell.wait()

        return Transaction(commit, rollback_both(fn_side.rollback, other.rollback))

    # ───────────────────────────────────────────────────────────────────────────
    # Debug representation
    # ───────────────────────────────────────────────────────────────────────────

    def __repr__(self) -> str:
        return f"Transaction({render(self.commit)}, {render(self.rollback)})"

    __str__ = __repr__


# ═══════════════════════════════════════════════════════════════════════════════
# Per-combinator State
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(slots=True)
class _Progress[U, E]:
    """What one chained transaction has done so far."""

    later: Transaction[U, E] | None = None
    undone: Result[None, E] | None = None


@dataclass(slots=True)
class _Slots[F, A]:
    """Values stashed by the two sides of one ap commit."""

    fn: Ok[F] | None = None
    arg: Ok[A] | None = None


# ═══════════════════════════════════════════════════════════════════════════════
# of() — Unit
# ═══════════════════════════════════════════════════════════════════════════════


async def _nothing_to_undo() -> Result[None, Never]:
    return Ok(None)


def of[T](value: T) -> Transaction[T, Never]:
    """
    Transaction that commits value and has nothing to undo.

    Example:
        add = lambda a: lambda b: a + b
        total = T.of(add).ap(T.of(1)).ap(T.of(2))   # commits 3
    """

    async def commit() -> Result[T, Never]:
        return Ok(value)

    return Transaction(commit, _nothing_to_undo)


# ═══════════════════════════════════════════════════════════════════════════════
# rollback_both() — Parallel Rollback Merge
# ═══════════════════════════════════════════════════════════════════════════════


def rollback_both[E](first: Undo[E], second: Undo[E]) -> Undo[E]:
    """
    Undo two steps concurrently.

    Succeeds once both rollbacks have succeeded. The first failure is
    reported as soon as it arrives, and the other rollback keeps running to
    completion. A second failure is logged and dropped.
    """

    async def rollback() -> Result[None, E]:
        cell: Settle[None, E] = Settle(needed=2)
        start_branches(cell, (first, cell.resolve), (second, cell.resolve))
        return await cell.wait()

    return rollback


# ═══════════════════════════════════════════════════════════════════════════════
# render() — Source Text
# ═══════════════════════════════════════════════════════════════════════════════


def render(computation: object) -> str:
    """Source text of a computation, or its qualified name if unavailable."""
    try:
        return textwrap.dedent(inspect.getsource(computation)).strip()  # type: ignore[arg-type]
    except (OSError, TypeError):
        return getattr(computation, "__qualname__", type(computation).__qualname__)


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = ("Transaction", "of", "rollback_both", "render")
