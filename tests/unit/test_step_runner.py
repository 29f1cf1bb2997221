"""StepRunner retry and backoff behavior."""

import pytest

from jobboard.application.use_cases.identity_sync.steps import StepRunner
from jobboard.domain.exceptions import TransientInfrastructureException, ValidationException


class RecordingSleep:
    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


def _failing(times: int, exc: BaseException, result: str = "ok"):
    calls = {"n": 0}

    async def fn() -> str:
        calls["n"] += 1
        if calls["n"] <= times:
            raise exc
        return result

    return fn, calls


async def test_returns_first_success_without_sleeping() -> None:
    sleep = RecordingSleep()
    runner = StepRunner(sleep=sleep)
    fn, calls = _failing(0, ConnectionError())
    assert await runner.run("create-user", fn) == "ok"
    assert calls["n"] == 1
    assert sleep.delays == []


async def test_retries_with_exponential_backoff() -> None:
    sleep = RecordingSleep()
    runner = StepRunner(max_attempts=4, backoff_seconds=0.5, sleep=sleep)
    fn, calls = _failing(3, TimeoutError())
    assert await runner.run("create-user", fn) == "ok"
    assert calls["n"] == 4
    assert sleep.delays == [0.5, 1.0, 2.0]


async def test_exhausted_attempts_raise_transient_exception() -> None:
    runner = StepRunner(max_attempts=3, sleep=RecordingSleep())
    fn, calls = _failing(10, ConnectionError("refused"))
    with pytest.raises(TransientInfrastructureException) as exc_info:
        await runner.run("delete-user", fn)
    assert calls["n"] == 3
    assert exc_info.value.details == {
        "operation": "delete-user",
        "reason": "refused",
        "attempts": 3,
    }
    assert isinstance(exc_info.value.__cause__, ConnectionError)


async def test_validation_errors_are_not_retried() -> None:
    runner = StepRunner(
        max_attempts=3, retry_on=(Exception,), sleep=RecordingSleep()
    )
    fn, calls = _failing(1, ValidationException("bad payload"))
    with pytest.raises(ValidationException):
        await runner.run("create-user", fn)
    assert calls["n"] == 1


async def test_unlisted_errors_propagate_immediately() -> None:
    runner = StepRunner(sleep=RecordingSleep())
    fn, calls = _failing(1, KeyError("boom"))
    with pytest.raises(KeyError):
        await runner.run("create-user", fn)
    assert calls["n"] == 1


def test_max_attempts_must_be_positive() -> None:
    with pytest.raises(ValueError):
        StepRunner(max_attempts=0)
