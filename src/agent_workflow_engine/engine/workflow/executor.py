"""Single-step execution with retry and exponential backoff.

Retries are driven by exceptions only. A step body that returns
`StepResult(success=False)` has reported a logical failure; that result is
final and is handed back as-is. A step body that raises is retried up to
`max_retries` times, sleeping `backoff_ms * 2**attempt_index` between
attempts. Once attempts are exhausted the last exception's message becomes the
result's error.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from .models import RetryPolicy, StepResult, WorkflowContext, WorkflowStep

logger = logging.getLogger(__name__)

DEFAULT_MAX_RETRIES = 0
DEFAULT_BACKOFF_MS = 1000

Sleep = Callable[[float], Awaitable[object]]


def _error_message(exc: BaseException) -> str:
    return str(exc) or type(exc).__name__


class StepExecutor:
    """Runs one step to a `StepResult`; never raises for step-body failures."""

    def __init__(
        self,
        *,
        default_max_retries: int = DEFAULT_MAX_RETRIES,
        default_backoff_ms: int = DEFAULT_BACKOFF_MS,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._default_policy = RetryPolicy(
            max_retries=default_max_retries, backoff_ms=default_backoff_ms
        )
        self._sleep = sleep

    def policy_for(self, step: WorkflowStep) -> RetryPolicy:
        return step.retry_policy or self._default_policy

    async def execute(self, step: WorkflowStep, context: WorkflowContext) -> StepResult:
        policy = self.policy_for(step)
        last_error: Exception | None = None

        for attempt in range(policy.max_retries + 1):
            try:
                return await step.execute(context)
            except Exception as e:
                last_error = e
                logger.warning(
                    "Step attempt failed",
                    extra={
                        "workflow_id": context.workflow_id,
                        "step_id": step.id,
                        "attempt": attempt + 1,
                        "max_attempts": policy.max_retries + 1,
                        "error": _error_message(e),
                    },
                )

            if attempt < policy.max_retries:
                delay = policy.delay_seconds(attempt)
                logger.info(
                    "Retrying step after backoff",
                    extra={
                        "workflow_id": context.workflow_id,
                        "step_id": step.id,
                        "delay_ms": int(delay * 1000),
                    },
                )
                await self._sleep(delay)

        assert last_error is not None
        return StepResult.fail(_error_message(last_error))
