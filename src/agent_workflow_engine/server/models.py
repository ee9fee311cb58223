"""Pydantic models for the REST server."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from agent_workflow_engine.engine.workflow import (
    Schedule,
    ScheduleStatus,
    StepKind,
    Workflow,
    WorkflowResult,
    WorkflowStatus,
)


class ApiStep(BaseModel):
    id: str
    name: str
    kind: StepKind
    depends_on: list[str] = Field(default_factory=list)
    max_retries: int | None = None
    backoff_ms: int | None = None


class ApiWorkflow(BaseModel):
    id: str
    name: str
    status: WorkflowStatus
    steps: list[ApiStep]

    created_at: datetime
    started_at: datetime | None = None
    completed_at: datetime | None = None
    current_step: str | None = None

    @classmethod
    def from_workflow(cls, workflow: Workflow) -> ApiWorkflow:
        return cls(
            id=workflow.id,
            name=workflow.name,
            status=workflow.status,
            steps=[
                ApiStep(
                    id=step.id,
                    name=step.name,
                    kind=step.kind,
                    depends_on=list(step.depends_on),
                    max_retries=step.retry_policy.max_retries if step.retry_policy else None,
                    backoff_ms=step.retry_policy.backoff_ms if step.retry_policy else None,
                )
                for step in workflow.steps
            ],
            created_at=workflow.created_at,
            started_at=workflow.started_at,
            completed_at=workflow.completed_at,
            current_step=workflow.current_step,
        )


class ApiWorkflowResult(BaseModel):
    success: bool
    data: dict[str, Any] | None = None
    error: str | None = None

    @classmethod
    def from_result(cls, result: WorkflowResult) -> ApiWorkflowResult:
        return cls(success=result.success, data=result.data, error=result.error)


class CampaignRequest(BaseModel):
    conference: str | None = None
    date: str | None = None


class CampaignRun(BaseModel):
    workflow: ApiWorkflow
    result: ApiWorkflowResult


class ScheduleRequest(BaseModel):
    task: dict[str, Any]
    scheduled_for: datetime
    description: str | None = None


class ApiSchedule(BaseModel):
    id: str
    task: dict[str, Any]
    scheduled_for: datetime
    description: str | None = None
    status: ScheduleStatus
    created_at: datetime

    @classmethod
    def from_schedule(cls, schedule: Schedule) -> ApiSchedule:
        task = schedule.task if isinstance(schedule.task, dict) else {"value": schedule.task}
        return cls(
            id=schedule.id,
            task=task,
            scheduled_for=schedule.scheduled_for,
            description=schedule.description,
            status=schedule.status,
            created_at=schedule.created_at,
        )
