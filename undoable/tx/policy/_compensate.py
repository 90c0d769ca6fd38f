"""
Compensation policies.
"""

from __future__ import annotations

from dataclasses import dataclass

@dataclass(frozen=True, slots=True)
class AllOnFailurePolicy:
    """Roll back whatever committed when commit fails."""
    pass

def all_on_failure() -> AllOnFailurePolicy:
    """Roll back on failure."""
    return AllOnFailurePolicy()


@dataclass(frozen=True, slots=True)
class SkipPolicy:
    """Leave committed steps in place; the caller rolls back itself."""
    pass

def skip() -> SkipPolicy:
    """No rollback."""
    return SkipPolicy()


type CompensationPolicy = AllOnFailurePolicy | SkipPolicy


__all__ = (
    "AllOnFailurePolicy",
    "all_on_failure",
    "SkipPolicy",
    "skip",
    "CompensationPolicy",
)
