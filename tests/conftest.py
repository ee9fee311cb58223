"""Test configuration and fixtures."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from agent_workflow_engine.engine.config import EngineSettings
from agent_workflow_engine.engine.workflow import (
    StepExecutor,
    StepResult,
    WorkflowContext,
    WorkflowRegistry,
    WorkflowRunner,
    WorkflowStep,
)

_ENV_VARS = (
    "LOG_LEVEL",
    "WORKFLOW_DEFAULT_MAX_RETRIES",
    "WORKFLOW_DEFAULT_BACKOFF_MS",
    "WORKFLOW_CONFERENCE_NAME",
    "WORKFLOW_CONFERENCE_DATE",
    "WORKFLOW_CORS_ORIGINS",
)


class RecordingSleep:
    """Stand-in for `asyncio.sleep` that records requested delays."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Keep settings independent of the developer's environment and `.env`."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def settings() -> EngineSettings:
    return EngineSettings()


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def executor(recording_sleep: RecordingSleep) -> StepExecutor:
    return StepExecutor(sleep=recording_sleep)


@pytest.fixture
def registry() -> WorkflowRegistry:
    return WorkflowRegistry()


@pytest.fixture
def runner(
    registry: WorkflowRegistry, executor: StepExecutor, settings: EngineSettings
) -> WorkflowRunner:
    return WorkflowRunner(registry, executor, env=settings)


@pytest.fixture
def make_step() -> Callable[..., WorkflowStep]:
    """Build a step whose body records calls and returns a fixed result."""

    def _make(
        step_id: str,
        result: StepResult | None = None,
        calls: list[str] | None = None,
        **kwargs: object,
    ) -> WorkflowStep:
        outcome = result or StepResult.ok()

        async def body(context: WorkflowContext) -> StepResult:
            if calls is not None:
                calls.append(context.step_id)
            return outcome

        name = step_id.replace("_", " ").title()
        return WorkflowStep(id=step_id, name=name, execute=body, **kwargs)

    return _make
