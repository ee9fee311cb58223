"""Mock email tools for conference follow-up campaigns.

Nothing is delivered: customer data is a fixed list, campaigns live in an
in-memory map, and "sending" writes a log line per recipient.
"""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

from .base import Tool, ToolRegistry

logger = logging.getLogger(__name__)

DEFAULT_CONFERENCE_DATE = "2024-12-10"


class CampaignNotFoundError(KeyError):
    def __init__(self, campaign_id: str) -> None:
        super().__init__(campaign_id)
        self.campaign_id = campaign_id

    def __str__(self) -> str:
        return f"Campaign {self.campaign_id} not found"


class Customer(BaseModel):
    id: int
    name: str
    email: str
    company: str
    conference: str
    meeting_date: str
    notes: str | None = None


CampaignStatus = Literal["draft", "scheduled", "sending", "completed", "failed"]


class EmailCampaign(BaseModel):
    id: str
    name: str
    customers: list[Customer]
    email_template: str
    status: CampaignStatus = "draft"
    created_at: datetime = Field(default_factory=lambda: datetime.now(tz=UTC))
    scheduled_for: datetime | None = None
    sent_count: int = 0
    failed_count: int = 0


_MOCK_CUSTOMERS: list[tuple[str, str, str, str]] = [
    (
        "John Smith",
        "john@techcorp.com",
        "TechCorp",
        "Interested in DDoS protection and CDN services",
    ),
    (
        "Sarah Johnson",
        "sarah@startup.com",
        "StartupXYZ",
        "Looking for edge computing solutions for their mobile app",
    ),
    (
        "Mike Chen",
        "mike@enterprise.com",
        "Enterprise Inc",
        "Needs comprehensive security solutions and compliance",
    ),
    (
        "Emily Davis",
        "emily@retail.com",
        "RetailGiant",
        "Interested in performance optimization for e-commerce",
    ),
]

FOLLOW_UP_TEMPLATE = """\
Subject: Following up on our conversation at {{conferenceName}}

Hi {{customerName}},

It was great meeting you at {{conferenceName}} and learning about {{company}}'s initiatives.

Based on our conversation about {{notes}}, I believe our platform could address your needs.

Would you be available for a 30-minute call next week?

Best regards,
Solutions Team"""


def personalize(template: str, customer: Customer) -> str:
    return (
        template.replace("{{customerName}}", customer.name)
        .replace("{{company}}", customer.company)
        .replace("{{notes}}", customer.notes or "")
        .replace("{{conferenceName}}", customer.conference)
    )


class EmailAgent:
    """Owns the email tools and the campaigns they create."""

    def __init__(self) -> None:
        self.campaigns: dict[str, EmailCampaign] = {}
        self.tools = ToolRegistry()
        self._register_tools()

    async def execute_tool(self, name: str, args: dict[str, Any]) -> dict[str, Any]:
        return await self.tools.execute(name, args)

    def _register_tools(self) -> None:
        self.tools.add(
            Tool(
                name="get_conference_customers",
                description="Retrieve all customers met at a specific conference",
                execute=self._get_conference_customers,
                parameters={
                    "type": "object",
                    "properties": {
                        "conference": {"type": "string"},
                        "date": {"type": "string", "description": "ISO date"},
                    },
                    "required": ["conference"],
                },
            )
        )
        self.tools.add(
            Tool(
                name="draft_personalized_email",
                description="Create a personalized email for a customer",
                execute=self._draft_personalized_email,
                parameters={
                    "type": "object",
                    "properties": {
                        "customerName": {"type": "string"},
                        "company": {"type": "string"},
                        "notes": {"type": "string"},
                        "conferenceName": {"type": "string"},
                    },
                    "required": ["customerName", "company", "conferenceName"],
                },
            )
        )
        self.tools.add(
            Tool(
                name="create_email_campaign",
                description="Create an email campaign for multiple customers",
                execute=self._create_email_campaign,
                parameters={
                    "type": "object",
                    "properties": {
                        "campaignName": {"type": "string"},
                        "customers": {"type": "array"},
                        "emailTemplate": {"type": "string"},
                    },
                    "required": ["campaignName", "customers", "emailTemplate"],
                },
            )
        )
        self.tools.add(
            Tool(
                name="send_campaign_emails",
                description="Send emails from a campaign to all customers",
                execute=self._send_campaign_emails,
                parameters={
                    "type": "object",
                    "properties": {"campaignId": {"type": "string"}},
                    "required": ["campaignId"],
                },
            )
        )
        self.tools.add(
            Tool(
                name="monitor_campaign_responses",
                description="Monitor and track responses to email campaigns",
                execute=self._monitor_campaign_responses,
                parameters={
                    "type": "object",
                    "properties": {"campaignId": {"type": "string"}},
                    "required": ["campaignId"],
                },
            )
        )

    def _require_campaign(self, campaign_id: str) -> EmailCampaign:
        campaign = self.campaigns.get(campaign_id)
        if campaign is None:
            raise CampaignNotFoundError(campaign_id)
        return campaign

    async def _get_conference_customers(self, args: dict[str, Any]) -> dict[str, Any]:
        conference = str(args["conference"])
        meeting_date = str(args.get("date") or DEFAULT_CONFERENCE_DATE)
        customers = [
            Customer(
                id=idx,
                name=name,
                email=email,
                company=company,
                notes=notes,
                conference=conference,
                meeting_date=meeting_date,
            )
            for idx, (name, email, company, notes) in enumerate(_MOCK_CUSTOMERS, start=1)
        ]
        return {"success": True, "customers": [c.model_dump(mode="json") for c in customers]}

    async def _draft_personalized_email(self, args: dict[str, Any]) -> dict[str, Any]:
        customer = Customer(
            id=0,
            name=str(args["customerName"]),
            email="",
            company=str(args["company"]),
            notes=args.get("notes"),
            conference=str(args["conferenceName"]),
            meeting_date="",
        )
        return {
            "success": True,
            "email": {
                "subject": f"Following up on our conversation at {customer.conference}",
                "body": personalize(FOLLOW_UP_TEMPLATE, customer),
                "personalized": True,
            },
        }

    async def _create_email_campaign(self, args: dict[str, Any]) -> dict[str, Any]:
        campaign = EmailCampaign(
            id=uuid.uuid4().hex,
            name=str(args["campaignName"]),
            customers=[Customer.model_validate(c) for c in args["customers"]],
            email_template=str(args["emailTemplate"]),
        )
        self.campaigns[campaign.id] = campaign
        return {
            "success": True,
            "campaignId": campaign.id,
            "campaign": campaign.model_dump(mode="json"),
        }

    def _deliver(self, campaign: EmailCampaign, customer: Customer) -> str:
        """Pretend to send one personalized email; returns the message id."""

        body = personalize(campaign.email_template, customer)
        logger.info(
            "Mock email sent",
            extra={
                "campaign_id": campaign.id,
                "recipient": customer.email,
                "company": customer.company,
                "body_chars": len(body),
            },
        )
        return uuid.uuid4().hex

    async def _send_campaign_emails(self, args: dict[str, Any]) -> dict[str, Any]:
        campaign = self._require_campaign(str(args["campaignId"]))
        campaign.status = "sending"

        results: list[dict[str, object]] = []
        for customer in campaign.customers:
            try:
                message_id = self._deliver(campaign, customer)
            except Exception as e:
                logger.warning(
                    "Mock email failed",
                    extra={
                        "campaign_id": campaign.id,
                        "recipient": customer.email,
                        "error": str(e),
                    },
                )
                results.append(
                    {
                        "customerId": customer.id,
                        "email": customer.email,
                        "status": "failed",
                        "error": str(e),
                    }
                )
                campaign.failed_count += 1
                continue

            results.append(
                {
                    "customerId": customer.id,
                    "email": customer.email,
                    "status": "sent",
                    "messageId": message_id,
                }
            )
            campaign.sent_count += 1

        campaign.status = "completed"
        return {
            "success": True,
            "campaignId": campaign.id,
            "results": results,
            "summary": {
                "total": len(campaign.customers),
                "sent": campaign.sent_count,
                "failed": campaign.failed_count,
            },
        }

    async def _monitor_campaign_responses(self, args: dict[str, Any]) -> dict[str, Any]:
        campaign = self._require_campaign(str(args["campaignId"]))

        # Canned responses for the first two recipients.
        responses: list[dict[str, object]] = []
        for customer, responded in zip(campaign.customers[:2], (True, False), strict=False):
            responses.append(
                {
                    "customerId": customer.id,
                    "customerName": customer.name,
                    "email": customer.email,
                    "responded": responded,
                    "interested": True if responded else None,
                    "nextAction": "Schedule demo call" if responded else "Follow up in 3 days",
                }
            )

        return {
            "success": True,
            "campaignId": campaign.id,
            "responses": responses,
            "summary": {
                "totalCustomers": len(campaign.customers),
                "responded": sum(1 for r in responses if r["responded"]),
                "interested": sum(1 for r in responses if r["interested"] is True),
            },
        }
