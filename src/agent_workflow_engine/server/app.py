"""FastAPI app factory.

Endpoints are intentionally thin wrappers over the engine: the registries and
runner are built once per app and kept on `app.state`.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from agent_workflow_engine import __version__
from agent_workflow_engine.engine.campaigns import run_conference_followup
from agent_workflow_engine.engine.config import EngineSettings
from agent_workflow_engine.engine.runtime import build_runner
from agent_workflow_engine.engine.tools import EmailAgent
from agent_workflow_engine.engine.workflow import ScheduleRegistry, WorkflowRegistry
from agent_workflow_engine.server.models import (
    ApiSchedule,
    ApiWorkflow,
    ApiWorkflowResult,
    CampaignRequest,
    CampaignRun,
    ScheduleRequest,
)

logger = logging.getLogger(__name__)


def create_app(settings: EngineSettings | None = None) -> FastAPI:
    settings = settings or EngineSettings()

    app = FastAPI(
        title="Agent Workflow Engine",
        version=__version__,
        description="REST API over the in-memory workflow engine.",
        openapi_url="/api/openapi.json",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    registry = WorkflowRegistry()
    schedules = ScheduleRegistry()
    runner = build_runner(settings, registry)
    agent = EmailAgent()

    app.state.settings = settings
    app.state.registry = registry
    app.state.schedules = schedules

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.parsed_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/api/v1/health")
    def health() -> dict[str, str]:
        return {"status": "ok", "version": __version__}

    @app.get("/api/v1/workflows", response_model=list[ApiWorkflow])
    def list_workflows() -> list[ApiWorkflow]:
        return [ApiWorkflow.from_workflow(w) for w in registry.list_workflows()]

    @app.get("/api/v1/workflows/{workflow_id}", response_model=ApiWorkflow)
    def get_workflow(workflow_id: str) -> ApiWorkflow:
        workflow = registry.get_workflow(workflow_id)
        if workflow is None:
            raise HTTPException(status_code=404, detail="Workflow not found")
        return ApiWorkflow.from_workflow(workflow)

    @app.post("/api/v1/campaigns/conference-followup", response_model=CampaignRun)
    async def run_campaign(req: CampaignRequest) -> CampaignRun:
        workflow, result = await run_conference_followup(
            registry=registry,
            runner=runner,
            agent=agent,
            conference=req.conference or settings.conference_name,
            date=req.date or settings.conference_date,
        )
        if not result.success:
            logger.warning(
                "Campaign workflow failed",
                extra={"workflow_id": workflow.id, "error": result.error},
            )
        return CampaignRun(
            workflow=ApiWorkflow.from_workflow(workflow),
            result=ApiWorkflowResult.from_result(result),
        )

    @app.get("/api/v1/schedules", response_model=list[ApiSchedule])
    def list_schedules() -> list[ApiSchedule]:
        return [ApiSchedule.from_schedule(s) for s in schedules.list_schedules()]

    @app.post("/api/v1/schedules", response_model=ApiSchedule, status_code=201)
    def create_schedule(req: ScheduleRequest) -> ApiSchedule:
        schedule = schedules.schedule_task(req.task, req.scheduled_for, req.description)
        return ApiSchedule.from_schedule(schedule)

    @app.get("/api/v1/schedules/{schedule_id}", response_model=ApiSchedule)
    def get_schedule(schedule_id: str) -> ApiSchedule:
        schedule = schedules.get_schedule(schedule_id)
        if schedule is None:
            raise HTTPException(status_code=404, detail="Schedule not found")
        return ApiSchedule.from_schedule(schedule)

    return app
