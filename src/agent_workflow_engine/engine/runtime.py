"""Engine wiring shared by the CLI and the HTTP server."""

from __future__ import annotations

from agent_workflow_engine.engine.config import EngineSettings
from agent_workflow_engine.engine.workflow import StepExecutor, WorkflowRegistry, WorkflowRunner


def build_runner(settings: EngineSettings, registry: WorkflowRegistry) -> WorkflowRunner:
    """Runner whose default retry policy and step `env` come from `settings`."""

    executor = StepExecutor(
        default_max_retries=settings.default_max_retries,
        default_backoff_ms=settings.default_backoff_ms,
    )
    return WorkflowRunner(registry, executor, env=settings)
