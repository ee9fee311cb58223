"""Unit tests for the retrying step executor.

Retries are triggered by raised exceptions only; a returned failure is final.
"""

from __future__ import annotations

import time

import pytest

from agent_workflow_engine.engine.workflow import (
    RetryPolicy,
    StepExecutor,
    StepResult,
    WorkflowContext,
    WorkflowStep,
)


class FlakyBody:
    """Raises on the first `failures` calls, then succeeds."""

    def __init__(self, failures: int) -> None:
        self.failures = failures
        self.calls = 0
        self.called_at: list[float] = []

    async def __call__(self, _context: WorkflowContext) -> StepResult:
        self.calls += 1
        self.called_at.append(time.monotonic())
        if self.calls <= self.failures:
            raise RuntimeError(f"boom {self.calls}")
        return StepResult.ok({"attempts": self.calls})


def _context() -> WorkflowContext:
    return WorkflowContext(workflow_id="wf-1", step_id="flaky")


def _step(body: FlakyBody, policy: RetryPolicy | None = None) -> WorkflowStep:
    return WorkflowStep(id="flaky", name="Flaky", execute=body, retry_policy=policy)


@pytest.mark.asyncio
async def test_single_attempt_without_retry_policy(executor: StepExecutor) -> None:
    body = FlakyBody(failures=1)

    result = await executor.execute(_step(body), _context())

    assert body.calls == 1
    assert result.success is False
    assert result.error == "boom 1"


@pytest.mark.asyncio
async def test_recovers_within_retry_budget(executor: StepExecutor, recording_sleep) -> None:
    body = FlakyBody(failures=2)

    result = await executor.execute(_step(body, RetryPolicy(max_retries=3)), _context())

    assert body.calls == 3
    assert result == StepResult.ok({"attempts": 3})
    assert recording_sleep.delays == [1.0, 2.0]


@pytest.mark.asyncio
async def test_exhausted_retries_report_last_error(executor: StepExecutor) -> None:
    body = FlakyBody(failures=2)

    result = await executor.execute(_step(body, RetryPolicy(max_retries=1)), _context())

    assert body.calls == 2
    assert result.success is False
    assert result.error == "boom 2"


@pytest.mark.asyncio
async def test_returned_failure_is_not_retried(executor: StepExecutor, recording_sleep) -> None:
    calls = 0

    async def body(_context: WorkflowContext) -> StepResult:
        nonlocal calls
        calls += 1
        return StepResult.fail("customer list empty")

    step = WorkflowStep(
        id="lookup", name="Lookup", execute=body, retry_policy=RetryPolicy(max_retries=3)
    )
    result = await executor.execute(step, _context())

    assert calls == 1
    assert result.error == "customer list empty"
    assert recording_sleep.delays == []


@pytest.mark.asyncio
async def test_backoff_doubles_per_attempt(executor: StepExecutor, recording_sleep) -> None:
    body = FlakyBody(failures=10)

    result = await executor.execute(
        _step(body, RetryPolicy(max_retries=3, backoff_ms=1000)), _context()
    )

    assert body.calls == 4
    assert not result.success
    # No sleep after the final attempt.
    assert recording_sleep.delays == [1.0, 2.0, 4.0]


@pytest.mark.asyncio
async def test_real_backoff_respects_lower_bound() -> None:
    body = FlakyBody(failures=2)
    executor = StepExecutor()

    result = await executor.execute(
        _step(body, RetryPolicy(max_retries=2, backoff_ms=20)), _context()
    )

    assert result.success
    first_gap = body.called_at[1] - body.called_at[0]
    second_gap = body.called_at[2] - body.called_at[1]
    # Small tolerance for clock granularity.
    assert first_gap >= 0.020 - 0.002
    assert second_gap >= 0.040 - 0.002


@pytest.mark.asyncio
async def test_executor_defaults_apply_to_steps_without_policy(recording_sleep) -> None:
    executor = StepExecutor(default_max_retries=2, default_backoff_ms=50, sleep=recording_sleep)
    body = FlakyBody(failures=2)

    result = await executor.execute(_step(body), _context())

    assert result.success
    assert body.calls == 3
    assert recording_sleep.delays == [0.05, 0.1]


@pytest.mark.asyncio
async def test_exception_without_message_uses_class_name(executor: StepExecutor) -> None:
    async def body(_context: WorkflowContext) -> StepResult:
        raise TimeoutError()

    result = await executor.execute(WorkflowStep(id="t", name="T", execute=body), _context())

    assert result.error == "TimeoutError"


@pytest.mark.parametrize(
    "kwargs",
    [{"max_retries": -1}, {"backoff_ms": 0}, {"backoff_ms": -5}],
)
def test_retry_policy_rejects_invalid_values(kwargs: dict[str, int]) -> None:
    with pytest.raises(ValueError):
        RetryPolicy(**kwargs)


def test_retry_policy_delay_seconds() -> None:
    policy = RetryPolicy(max_retries=3, backoff_ms=1000)
    assert [policy.delay_seconds(i) for i in range(3)] == [1.0, 2.0, 4.0]
