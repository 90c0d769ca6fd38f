"""
undoable — staged async work that can be rolled back.

    from undoable import tx as T     # Transactions and their algebra
    from undoable import lift as L   # Bridges from async code and kungfu values
"""

from undoable import tx
from undoable import lift
from undoable._types import (
    Computation,
    Undo,
    Result,
    Ok,
    Error,
    LazyCoroResult,
)

__version__ = "0.1.0"

__all__ = (
    "tx",
    "lift",
    "Computation",
    "Undo",
    "Result",
    "Ok",
    "Error",
    "LazyCoroResult",
)
