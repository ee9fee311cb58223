"""Conference follow-up campaign expressed as a workflow.

get_customers -> create_campaign -> send_emails

Each step calls one mock email tool and contributes one key to the context:
`customers`, `campaignId` and `emailsSent`. Tool-level failures are raised so
that the step's retry policy applies to them.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from agent_workflow_engine.engine.tools.email import FOLLOW_UP_TEMPLATE, EmailAgent
from agent_workflow_engine.engine.workflow.models import (
    RetryPolicy,
    StepResult,
    Workflow,
    WorkflowContext,
    WorkflowResult,
    WorkflowStep,
)
from agent_workflow_engine.engine.workflow.registry import WorkflowRegistry
from agent_workflow_engine.engine.workflow.runner import WorkflowRunner

WORKFLOW_NAME = "Conference Follow-up"
SEND_RETRY_POLICY = RetryPolicy(max_retries=3, backoff_ms=1000)


class ToolCallFailed(RuntimeError):
    pass


def build_conference_followup_steps(
    agent: EmailAgent,
    *,
    conference: str,
    date: str | None = None,
    send_retry_policy: RetryPolicy = SEND_RETRY_POLICY,
) -> list[WorkflowStep]:
    async def get_customers(_context: WorkflowContext) -> StepResult:
        result = await agent.execute_tool(
            "get_conference_customers", {"conference": conference, "date": date}
        )
        if not result.get("success"):
            raise ToolCallFailed("Failed to get customers")
        return StepResult.ok({"customers": result["customers"]})

    async def create_campaign(context: WorkflowContext) -> StepResult:
        result = await agent.execute_tool(
            "create_email_campaign",
            {
                "campaignName": f"{conference} Follow-up",
                "customers": context.data["customers"],
                "emailTemplate": FOLLOW_UP_TEMPLATE,
            },
        )
        return StepResult.ok({"campaignId": result["campaignId"]})

    async def send_emails(context: WorkflowContext) -> StepResult:
        result = await agent.execute_tool(
            "send_campaign_emails", {"campaignId": context.data["campaignId"]}
        )
        if not result.get("success"):
            raise ToolCallFailed("Failed to send emails")
        return StepResult.ok({"emailsSent": result["summary"]["sent"]})

    return [
        WorkflowStep(id="get_customers", name="Get Conference Customers", execute=get_customers),
        WorkflowStep(
            id="create_campaign",
            name="Create Email Campaign",
            execute=create_campaign,
            depends_on=("get_customers",),
        ),
        WorkflowStep(
            id="send_emails",
            name="Send Campaign Emails",
            execute=send_emails,
            depends_on=("create_campaign",),
            retry_policy=send_retry_policy,
        ),
    ]


async def run_conference_followup(
    *,
    registry: WorkflowRegistry,
    runner: WorkflowRunner,
    agent: EmailAgent,
    conference: str,
    date: str | None = None,
    initial_data: Mapping[str, Any] | None = None,
) -> tuple[Workflow, WorkflowResult]:
    """Register the campaign workflow and run it to completion."""

    steps = build_conference_followup_steps(agent, conference=conference, date=date)
    workflow = registry.create_workflow(WORKFLOW_NAME, steps)
    result = await runner.execute_workflow(workflow.id, initial_data)
    return workflow, result
