"""In-memory workflow registry.

The registry is an explicitly constructed store; callers own it and pass it
to the runner. It does not validate the step graph: duplicate step ids,
dangling `depends_on` targets and cycles are accepted as declared.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Sequence

from .models import Workflow, WorkflowStep

logger = logging.getLogger(__name__)


class WorkflowNotFoundError(KeyError):
    def __init__(self, workflow_id: str) -> None:
        super().__init__(workflow_id)
        self.workflow_id = workflow_id

    def __str__(self) -> str:
        return f"Workflow {self.workflow_id} not found"


class WorkflowRegistry:
    def __init__(self) -> None:
        self._workflows: dict[str, Workflow] = {}

    def create_workflow(self, name: str, steps: Sequence[WorkflowStep]) -> Workflow:
        workflow = Workflow(id=uuid.uuid4().hex, name=name, steps=list(steps))
        self._workflows[workflow.id] = workflow
        logger.info(
            "Workflow created",
            extra={"workflow_id": workflow.id, "workflow_name": name, "step_count": len(steps)},
        )
        return workflow

    def get_workflow(self, workflow_id: str) -> Workflow | None:
        return self._workflows.get(workflow_id)

    def require_workflow(self, workflow_id: str) -> Workflow:
        workflow = self._workflows.get(workflow_id)
        if workflow is None:
            raise WorkflowNotFoundError(workflow_id)
        return workflow

    def list_workflows(self) -> list[Workflow]:
        return list(self._workflows.values())

    def __len__(self) -> int:
        return len(self._workflows)
