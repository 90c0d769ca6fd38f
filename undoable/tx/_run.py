"""
Transaction execution with rollback on failure.
"""

from __future__ import annotations

import logging

from kungfu import Result, Ok, Error

from undoable.tx._transaction import Transaction
from undoable.tx._types import TransactionResult, TransactionError
from undoable.tx.policy import AllOnFailurePolicy, SkipPolicy, CompensationPolicy

logger = logging.getLogger(__name__)

# ═══════════════════════════════════════════════════════════════════════════════
# run() — Commit, Roll Back On Failure
# ═══════════════════════════════════════════════════════════════════════════════


async def run[T, E](
    tx: Transaction[T, E],
    policy: CompensationPolicy = AllOnFailurePolicy(),
) -> Result[TransactionResult[T], TransactionError[E]]:
    """
    Commit tx; if that fails, roll it back once.

    On success: returns TransactionResult with the committed value.
    On failure: returns TransactionError carrying the commit failure and the
    rollback outcome. A failed rollback is reported, never retried.

    Example:
        from undoable import tx as T

        result = await T.run(booking)

        match result:
            case Ok(r):
                print(f"Booked: {r.value}")
            case Error(e) if not e.rollback_complete:
                print(f"Booking failed and could not be undone: {e.rollback_error}")
            case Error(e):
                print(f"Booking failed: {e.error}")
    """
    match await tx.commit():
        case Ok(value):
            logger.debug("transaction committed")
            return Ok(TransactionResult(value=value))

        case Error(error):
            match policy:
                case SkipPolicy():
                    logger.info("transaction failed, rollback skipped: %r", error)
                    return Error(TransactionError(error=error, rollback_attempted=False))

                case AllOnFailurePolicy():
                    logger.info("transaction failed, rolling back: %r", error)
                    match await tx.rollback():
                        case Ok(_):
                            return Error(TransactionError(error=error, rollback_attempted=True))
                        case Error(rollback_error):
                            logger.warning("rollback failed: %r", rollback_error)
                            return Error(TransactionError(
                                error=error,
                                rollback_attempted=True,
                                rollback_error=rollback_error,
                            ))


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = ("run",)
