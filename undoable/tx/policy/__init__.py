"""
Transaction execution policies.

Namespace: T.policy.*

Examples:
    await T.run(booking, policy=T.policy.compensate.all_on_failure())
    await T.run(booking, policy=T.policy.compensate.skip())
"""

from __future__ import annotations

from undoable.tx.policy._compensate import (
    AllOnFailurePolicy,
    SkipPolicy,
    CompensationPolicy,
    all_on_failure,
    skip,
)


# Namespace objects
class compensate:
    """Compensation policies."""

    all_on_failure = staticmethod(all_on_failure)
    skip = staticmethod(skip)


__all__ = (
    "compensate",
    "AllOnFailurePolicy",
    "SkipPolicy",
    "CompensationPolicy",
)
