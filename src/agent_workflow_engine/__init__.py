"""Agent Workflow Engine.

A demonstration scaffold for agent tool workflows:
- configuration loaded from `.env`
- structured logging
- a sequential workflow runner with per-step retry and exponential backoff
- mock email tools and a conference follow-up campaign
"""

__version__ = "0.1.0"

from agent_workflow_engine.engine.config import EngineSettings

__all__ = ["__version__", "EngineSettings"]
