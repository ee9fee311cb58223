"""Workflow execution engine.

This package holds:
- Step, context and result types
- An explicit status state machine
- The workflow and schedule registries
- The retrying step executor and the sequential runner
"""

from .executor import StepExecutor
from .models import (
    RetryPolicy,
    StepKind,
    StepResult,
    Workflow,
    WorkflowContext,
    WorkflowResult,
    WorkflowStatus,
    WorkflowStep,
)
from .registry import WorkflowNotFoundError, WorkflowRegistry
from .runner import WorkflowRunner
from .schedules import Schedule, ScheduleRegistry, ScheduleStatus
from .state_machine import IllegalTransitionError

__all__ = [
    "IllegalTransitionError",
    "RetryPolicy",
    "Schedule",
    "ScheduleRegistry",
    "ScheduleStatus",
    "StepExecutor",
    "StepKind",
    "StepResult",
    "Workflow",
    "WorkflowContext",
    "WorkflowNotFoundError",
    "WorkflowRegistry",
    "WorkflowResult",
    "WorkflowRunner",
    "WorkflowStatus",
    "WorkflowStep",
]
