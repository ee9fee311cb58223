"""Prebuilt workflows over the mock agent tools."""

from .conference_followup import (
    WORKFLOW_NAME,
    build_conference_followup_steps,
    run_conference_followup,
)

__all__ = ["WORKFLOW_NAME", "build_conference_followup_steps", "run_conference_followup"]
