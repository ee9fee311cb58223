"""Sequential workflow runner.

Steps run strictly in declaration order, one at a time, sharing a single
`WorkflowContext`. The first failing step fails the whole workflow; earlier
side effects are not rolled back.

`depends_on` is not used for scheduling. A step whose declared dependency has
not completed earlier in the same run is logged and executed anyway.

Cancelling the task that awaits `execute_workflow` moves a running workflow to
`cancelled`; the `CancelledError` is re-raised to the caller.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from .executor import StepExecutor
from .models import (
    SUPPORTED_STEP_KINDS,
    StepResult,
    Workflow,
    WorkflowContext,
    WorkflowResult,
    WorkflowStatus,
    WorkflowStep,
)
from .registry import WorkflowRegistry
from .state_machine import IllegalTransitionError, transition

logger = logging.getLogger(__name__)


class WorkflowRunner:
    def __init__(
        self,
        registry: WorkflowRegistry,
        executor: StepExecutor | None = None,
        *,
        env: object | None = None,
    ) -> None:
        self.registry = registry
        self.executor = executor or StepExecutor()
        self.env = env

    async def execute_workflow(
        self, workflow_id: str, initial_data: Mapping[str, Any] | None = None
    ) -> WorkflowResult:
        """Run every step of a registered workflow.

        Raises:
            WorkflowNotFoundError: If `workflow_id` is not registered.
        """

        workflow = self.registry.require_workflow(workflow_id)

        try:
            transition(workflow, to=WorkflowStatus.RUNNING)
        except IllegalTransitionError as e:
            logger.warning(
                "Workflow cannot be started",
                extra={"workflow_id": workflow.id, "status": workflow.status.value},
            )
            return WorkflowResult.fail(str(e))

        workflow.started_at = datetime.now(tz=UTC)
        logger.info("Workflow started", extra={"workflow_id": workflow.id})

        try:
            context = WorkflowContext(
                workflow_id=workflow.id,
                data=dict(initial_data or {}),
                env=self.env,
            )
            completed: set[str] = set()

            for step in workflow.steps:
                workflow.current_step = step.id
                context.step_id = step.id
                self._warn_unmet_dependencies(workflow, step, completed)

                result = await self._run_step(step, context)
                if not result.success:
                    transition(workflow, to=WorkflowStatus.FAILED)
                    logger.warning(
                        "Workflow failed",
                        extra={
                            "workflow_id": workflow.id,
                            "step_id": step.id,
                            "error": result.error,
                        },
                    )
                    return result

                if result.data:
                    context.data.update(result.data)
                completed.add(step.id)

            transition(workflow, to=WorkflowStatus.COMPLETED)
            workflow.completed_at = datetime.now(tz=UTC)
            logger.info("Workflow completed", extra={"workflow_id": workflow.id})
            return WorkflowResult.ok(context.data)

        except asyncio.CancelledError:
            if workflow.status is WorkflowStatus.RUNNING:
                transition(workflow, to=WorkflowStatus.CANCELLED)
            logger.warning(
                "Workflow cancelled",
                extra={"workflow_id": workflow.id, "step_id": workflow.current_step},
            )
            raise

        except Exception as e:
            if workflow.status is WorkflowStatus.RUNNING:
                transition(workflow, to=WorkflowStatus.FAILED)
            logger.exception("Workflow aborted", extra={"workflow_id": workflow.id})
            return WorkflowResult.fail(str(e) or type(e).__name__)

    async def _run_step(self, step: WorkflowStep, context: WorkflowContext) -> StepResult:
        if step.kind not in SUPPORTED_STEP_KINDS:
            return StepResult.fail(f"Unsupported step kind: {step.kind.value}")
        return await self.executor.execute(step, context)

    @staticmethod
    def _warn_unmet_dependencies(
        workflow: Workflow, step: WorkflowStep, completed: set[str]
    ) -> None:
        missing = [dep for dep in step.depends_on if dep not in completed]
        if missing:
            logger.warning(
                "Step dependencies have not completed; running in declaration order",
                extra={"workflow_id": workflow.id, "step_id": step.id, "missing": missing},
            )
