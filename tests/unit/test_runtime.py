"""Unit tests for the shared engine wiring."""

from __future__ import annotations

import pytest

from agent_workflow_engine.engine.config import EngineSettings
from agent_workflow_engine.engine.runtime import build_runner
from agent_workflow_engine.engine.workflow import RetryPolicy, WorkflowRegistry


def test_build_runner_applies_settings_defaults(
    monkeypatch: pytest.MonkeyPatch, make_step
) -> None:
    monkeypatch.setenv("WORKFLOW_DEFAULT_MAX_RETRIES", "2")
    monkeypatch.setenv("WORKFLOW_DEFAULT_BACKOFF_MS", "250")
    settings = EngineSettings()
    registry = WorkflowRegistry()

    runner = build_runner(settings, registry)

    assert runner.registry is registry
    assert runner.env is settings
    assert runner.executor.policy_for(make_step("a")) == RetryPolicy(max_retries=2, backoff_ms=250)


def test_step_policy_overrides_settings_defaults(settings: EngineSettings, make_step) -> None:
    runner = build_runner(settings, WorkflowRegistry())
    policy = RetryPolicy(max_retries=3, backoff_ms=1000)

    assert runner.executor.policy_for(make_step("send", retry_policy=policy)) is policy
