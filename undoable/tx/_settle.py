"""
Settle-once cell and background branches for concurrent composition.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Coroutine

from kungfu import Result, Ok, Error

from undoable._types import Computation

logger = logging.getLogger(__name__)

# ═══════════════════════════════════════════════════════════════════════════════
# Settle — Write-Once Outcome
# ═══════════════════════════════════════════════════════════════════════════════


class Settle[T, E]:
    """
    Write-once outcome shared by the branches of one concurrent merge.

    Settles with Ok after `needed` successful arrivals, or with Error on the
    first failure. Anything arriving after settlement is a no-op.

    Example:
        cell = Settle[None, str](needed=2)
        cell.resolve(None)    # recorded, still open
        cell.reject("disk")   # settles with Error("disk")
        cell.resolve(None)    # ignored
        await cell.wait()     # Error("disk")
    """

    __slots__ = ("_future", "_needed", "_arrived")

    def __init__(self, needed: int = 1) -> None:
        if needed < 1:
            raise ValueError(f"needed must be positive, got {needed}")
        self._future: asyncio.Future[Result[T, E]] = (
            asyncio.get_running_loop().create_future()
        )
        self._needed = needed
        self._arrived = 0

    @property
    def settled(self) -> bool:
        return self._future.done()

    def resolve(self, value: T) -> None:
        self._arrived += 1
        if self._future.done() or self._arrived < self._needed:
            return
        self._future.set_result(Ok(value))

    def reject(self, error: E) -> None:
        if self._future.done():
            logger.warning("dropping failure after settlement: %r", error)
            return
        self._future.set_result(Error(error))

    def crash(self, exc: Exception) -> None:
        if self._future.done():
            logger.error("branch raised after settlement", exc_info=exc)
            return
        self._future.set_exception(exc)

    async def wait(self) -> Result[T, E]:
        return await self._future


# ═══════════════════════════════════════════════════════════════════════════════
# Branches
# ═══════════════════════════════════════════════════════════════════════════════

# Event loop only keeps weak references to tasks.
_running: set[asyncio.Task[None]] = set()


def spawn(coro: Coroutine[object, object, None]) -> asyncio.Task[None]:
    """Start coro on the running loop and keep it alive until it finishes."""
    task = asyncio.get_running_loop().create_task(coro)
    _running.add(task)
    task.add_done_callback(_running.discard)
    return task


async def feed[T, E](
    computation: Computation[T, E],
    on_ok: Callable[[T], None],
    cell: Settle[object, E],
) -> None:
    """Run one branch to completion and report its outcome into cell."""
    try:
        match await computation():
            case Ok(value):
                on_ok(value)
            case Error(e):
                cell.reject(e)
    except Exception as exc:
        cell.crash(exc)


def start_branches[T, E](
    cell: Settle[object, E],
    *branches: tuple[Computation[T, E], Callable[[T], None]],
) -> None:
    """Start every branch before any of them is awaited."""
    for computation, on_ok in branches:
        spawn(feed(computation, on_ok, cell))


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = ("Settle", "spawn", "feed", "start_branches")
