"""Shared probes for transaction tests."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field

import pytest
from kungfu import Result, Ok, Error

from undoable import tx as T


def expect_ok[V](result: Result[V, object]) -> V:
    match result:
        case Ok(value):
            return value
        case Error(e):
            pytest.fail(f"expected Ok, got Error({e!r})")


def expect_error(result: Result[object, object]) -> object:
    match result:
        case Error(e):
            return e
        case Ok(value):
            pytest.fail(f"expected Error, got Ok({value!r})")


@dataclass(slots=True)
class Probe:
    """Leaf transaction that counts how often its commit and rollback ran."""

    name: str
    events: list[str]
    value: object = None
    commit_error: object | None = None
    rollback_error: object | None = None
    commit_delay: float = 0
    rollback_delay: float = 0
    commits: int = 0
    rollbacks: int = 0

    def tx(self) -> T.Transaction[object, object]:
        async def commit() -> Result[object, object]:
            await asyncio.sleep(self.commit_delay)
            self.commits += 1
            self.events.append(f"commit:{self.name}")
            if self.commit_error is not None:
                return Error(self.commit_error)
            return Ok(self.value)

        async def rollback() -> Result[None, object]:
            await asyncio.sleep(self.rollback_delay)
            self.rollbacks += 1
            self.events.append(f"rollback:{self.name}")
            if self.rollback_error is not None:
                return Error(self.rollback_error)
            return Ok(None)

        return T.transaction(commit, rollback)


@pytest.fixture
def events() -> list[str]:
    return []


@pytest.fixture
def probe(events: list[str]) -> Callable[..., Probe]:
    """Factory for probes sharing one event log."""

    def make(name: str, **kwargs: object) -> Probe:
        return Probe(name, events, **kwargs)  # type: ignore[arg-type]

    return make
