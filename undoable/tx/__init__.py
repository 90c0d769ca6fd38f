"""
Transactions — staged work with rollback.

    from undoable import tx as T

    booking = T.transaction(reserve, release).chain(lambda seat: T.transaction(charge(seat), refund(seat)))
    result = await T.run(booking)
"""

from __future__ import annotations

from undoable.tx._transaction import Transaction, of, rollback_both, render
from undoable.tx._types import TransactionResult, TransactionError
from undoable.tx._settle import Settle
from undoable.tx._construct import transaction, failed, from_lazy, from_async
from undoable.tx._compose import sequence, parallel
from undoable.tx._run import run
from undoable.tx import policy

__all__ = (
    "Transaction",
    "TransactionResult",
    "TransactionError",
    "Settle",
    "of",
    "transaction",
    "failed",
    "from_lazy",
    "from_async",
    "rollback_both",
    "render",
    "sequence",
    "parallel",
    "run",
    "policy",
)
