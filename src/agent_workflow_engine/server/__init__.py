"""FastAPI server adapter for agent-workflow-engine.

This module exposes a REST API over the workflow engine.

Design intent:
- Keep execution logic in `agent_workflow_engine.engine.*`
- Keep server-specific concerns (routing, CORS, response models) here
"""

from __future__ import annotations

__all__ = ["create_app"]

from agent_workflow_engine.server.app import create_app
