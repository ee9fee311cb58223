"""In-memory record of tasks scheduled for later.

Nothing here fires a schedule. Callers that want a task to run at
`scheduled_for` need an external trigger (cron, a scheduled worker) that
reads the records back.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum

logger = logging.getLogger(__name__)


class ScheduleStatus(str, Enum):
    SCHEDULED = "scheduled"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(slots=True)
class Schedule:
    id: str
    task: object
    scheduled_for: datetime
    description: str | None = None
    status: ScheduleStatus = ScheduleStatus.SCHEDULED
    created_at: datetime = field(default_factory=lambda: datetime.now(tz=UTC))


class ScheduleRegistry:
    def __init__(self) -> None:
        self._schedules: dict[str, Schedule] = {}

    def schedule_task(
        self, task: object, scheduled_for: datetime, description: str | None = None
    ) -> Schedule:
        schedule = Schedule(
            id=uuid.uuid4().hex,
            task=task,
            scheduled_for=scheduled_for,
            description=description,
        )
        self._schedules[schedule.id] = schedule
        logger.info(
            "Task scheduled",
            extra={
                "schedule_id": schedule.id,
                "scheduled_for": scheduled_for.isoformat(),
                "description": description or "No description",
            },
        )
        return schedule

    def get_schedule(self, schedule_id: str) -> Schedule | None:
        return self._schedules.get(schedule_id)

    def list_schedules(self) -> list[Schedule]:
        return list(self._schedules.values())
