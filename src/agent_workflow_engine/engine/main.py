"""CLI entrypoint for the workflow engine.

Runs the mock conference follow-up campaign through the engine and prints the
workflow result as JSON.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from pydantic import ValidationError

from agent_workflow_engine import __version__
from agent_workflow_engine.engine.campaigns import run_conference_followup
from agent_workflow_engine.engine.config import EngineSettings
from agent_workflow_engine.engine.logging import configure_logging
from agent_workflow_engine.engine.runtime import build_runner
from agent_workflow_engine.engine.tools import EmailAgent
from agent_workflow_engine.engine.workflow import WorkflowRegistry

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="workflow-engine",
        description="Sequential workflow engine with per-step retry and backoff",
    )
    parser.add_argument(
        "--version", action="version", version=f"agent-workflow-engine {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_campaign = subparsers.add_parser(
        "run-campaign",
        help="Run the conference follow-up campaign workflow against the mock email tools",
    )
    run_campaign.add_argument(
        "--conference",
        default=None,
        help="Conference name (defaults to WORKFLOW_CONFERENCE_NAME)",
    )
    run_campaign.add_argument(
        "--date",
        default=None,
        help="Conference date in ISO format (defaults to WORKFLOW_CONFERENCE_DATE)",
    )

    subparsers.add_parser("list-tools", help="List the mock email tools")

    return parser


async def _run_campaign(settings: EngineSettings, conference: str, date: str) -> int:
    registry = WorkflowRegistry()
    runner = build_runner(settings, registry)

    workflow, result = await run_conference_followup(
        registry=registry,
        runner=runner,
        agent=EmailAgent(),
        conference=conference,
        date=date,
    )

    print(json.dumps({"workflow": workflow.to_json(), "result": result.to_json()}, indent=2))
    return 0 if result.success else 1


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = EngineSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    configure_logging(settings.log_level)

    try:
        if args.command == "run-campaign":
            return asyncio.run(
                _run_campaign(
                    settings,
                    conference=args.conference or settings.conference_name,
                    date=args.date or settings.conference_date,
                )
            )

        if args.command == "list-tools":
            agent = EmailAgent()
            for name in agent.tools.names():
                tool = agent.tools.get(name)
                assert tool is not None
                print(f"{tool.name}: {tool.description}")
            return 0

        logger.error("Unknown command", extra={"command": args.command})
        return 2

    except Exception:
        logger.exception("Command failed")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
