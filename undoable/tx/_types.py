"""
Transaction outcome types.
"""

from __future__ import annotations

from dataclasses import dataclass

# ═══════════════════════════════════════════════════════════════════════════════
# Result Types
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class TransactionResult[T]:
    """Committed transaction."""

    value: T


@dataclass(frozen=True, slots=True)
class TransactionError[E]:
    """
    Failed commit with the outcome of the rollback that followed.

    `error` is always the commit failure. A rollback failure is reported
    separately in `rollback_error`, never in place of it.
    """

    error: E
    rollback_attempted: bool
    rollback_error: E | None = None

    @property
    def rollback_complete(self) -> bool:
        return self.rollback_attempted and self.rollback_error is None


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = ("TransactionResult", "TransactionError")
