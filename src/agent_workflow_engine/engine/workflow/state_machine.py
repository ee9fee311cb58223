from __future__ import annotations

from .models import Workflow, WorkflowStatus

ALLOWED_TRANSITIONS: dict[WorkflowStatus, set[WorkflowStatus]] = {
    WorkflowStatus.PENDING: {WorkflowStatus.RUNNING, WorkflowStatus.CANCELLED},
    WorkflowStatus.RUNNING: {
        WorkflowStatus.COMPLETED,
        WorkflowStatus.FAILED,
        WorkflowStatus.CANCELLED,
    },
    WorkflowStatus.COMPLETED: set(),
    WorkflowStatus.FAILED: set(),
    WorkflowStatus.CANCELLED: set(),
}

TERMINAL_STATUSES: frozenset[WorkflowStatus] = frozenset(
    status for status, targets in ALLOWED_TRANSITIONS.items() if not targets
)


class IllegalTransitionError(ValueError):
    pass


def can_transition(current: WorkflowStatus, to: WorkflowStatus) -> bool:
    return to in ALLOWED_TRANSITIONS.get(current, set())


def transition(workflow: Workflow, *, to: WorkflowStatus) -> Workflow:
    """Move `workflow` to status `to` in place, failing loudly on illegal moves."""

    if not can_transition(workflow.status, to):
        raise IllegalTransitionError(
            f"Illegal transition: {workflow.status.value} -> {to.value}"
        )
    workflow.status = to
    return workflow
