#!/usr/bin/env python3
"""Programmatic workflow example.

This demonstrates using the engine components directly:

* load settings from `.env`
* register a workflow whose second step fails transiently
* run it and print the final result

The flaky step raises twice before succeeding; its retry policy allows three
retries, so the workflow completes after two backoff delays.
"""

from __future__ import annotations

import argparse
import asyncio
import json
from typing import Sequence

from agent_workflow_engine.engine.config import EngineSettings
from agent_workflow_engine.engine.logging import configure_logging
from agent_workflow_engine.engine.workflow import (
    RetryPolicy,
    StepExecutor,
    StepResult,
    WorkflowContext,
    WorkflowRegistry,
    WorkflowRunner,
    WorkflowStep,
)


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run a small workflow (programmatic example).")
    parser.add_argument("--backoff-ms", type=int, default=100, help="Base retry backoff in ms")
    return parser.parse_args(argv)


async def _run(backoff_ms: int) -> StepResult:
    attempts = 0

    async def lookup(_context: WorkflowContext) -> StepResult:
        return StepResult.ok({"customer": "TechCorp"})

    async def notify(context: WorkflowContext) -> StepResult:
        nonlocal attempts
        attempts += 1
        if attempts < 3:
            raise ConnectionError(f"relay unavailable (attempt {attempts})")
        return StepResult.ok({"notified": context.data["customer"], "attempts": attempts})

    settings = EngineSettings()
    registry = WorkflowRegistry()
    runner = WorkflowRunner(registry, StepExecutor(), env=settings)

    workflow = registry.create_workflow(
        "Notify customer",
        [
            WorkflowStep(id="lookup", name="Look up customer", execute=lookup),
            WorkflowStep(
                id="notify",
                name="Notify customer",
                execute=notify,
                depends_on=("lookup",),
                retry_policy=RetryPolicy(max_retries=3, backoff_ms=backoff_ms),
            ),
        ],
    )
    return await runner.execute_workflow(workflow.id)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    configure_logging(EngineSettings().log_level)

    result = asyncio.run(_run(args.backoff_ms))
    print(json.dumps(result.to_json(), indent=2))
    return 0 if result.success else 1


if __name__ == "__main__":
    raise SystemExit(main())
