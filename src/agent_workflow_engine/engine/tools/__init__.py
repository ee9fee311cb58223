"""Mock agent tools invoked from workflow steps."""

from .base import Tool, ToolNotFoundError, ToolRegistry
from .email import CampaignNotFoundError, Customer, EmailAgent, EmailCampaign

__all__ = [
    "CampaignNotFoundError",
    "Customer",
    "EmailAgent",
    "EmailCampaign",
    "Tool",
    "ToolNotFoundError",
    "ToolRegistry",
]
