"""run() and compensation policies"""

from __future__ import annotations

import pytest

from undoable import tx as T
from tests.conftest import expect_ok, expect_error


class TestRun:
    """run()"""

    @pytest.mark.asyncio
    async def test_success(self, probe) -> None:
        step = probe("step", value=10)
        result = expect_ok(await T.run(step.tx().chain(lambda x: T.of(x * 2))))

        assert result == T.TransactionResult(value=20)
        assert step.rollbacks == 0

    @pytest.mark.asyncio
    async def test_failure_rolls_back(self, probe) -> None:
        a = probe("a", value=add_one)
        b = probe("b", commit_error="boom")
        error = expect_error(await T.run(a.tx().ap(b.tx())))

        assert error.error == "boom"
        assert error.rollback_attempted
        assert error.rollback_complete
        assert (a.rollbacks, b.rollbacks) == (1, 1)

    @pytest.mark.asyncio
    async def test_chain_failure_undoes_first_once(self, probe) -> None:
        first = probe("first", value=10)
        error = expect_error(await T.run(first.tx().chain(lambda _: T.failed("boom"))))

        assert error.error == "boom"
        assert error.rollback_complete
        assert first.rollbacks == 1

    @pytest.mark.asyncio
    async def test_rollback_failure_reported(self, probe) -> None:
        a = probe("a", value=add_one, rollback_error="stuck")
        b = probe("b", commit_error="boom")
        error = expect_error(await T.run(a.tx().ap(b.tx())))

        assert error.error == "boom"
        assert error.rollback_error == "stuck"
        assert not error.rollback_complete

    @pytest.mark.asyncio
    async def test_skip_policy(self, probe) -> None:
        a = probe("a", value=add_one)
        b = probe("b", commit_error="boom")
        error = expect_error(
            await T.run(a.tx().ap(b.tx()), policy=T.policy.compensate.skip())
        )

        assert error.error == "boom"
        assert not error.rollback_attempted
        assert not error.rollback_complete
        assert (a.rollbacks, b.rollbacks) == (0, 0)

    @pytest.mark.asyncio
    async def test_explicit_default_policy(self, probe) -> None:
        step = probe("step", commit_error="boom")
        error = expect_error(
            await T.run(step.tx(), policy=T.policy.compensate.all_on_failure())
        )
        assert error.rollback_complete
        assert step.rollbacks == 1


def add_one(x: int) -> int:
    return x + 1
