"""
Daily saving reminders.

A goal with reminders enabled gets one repeating request per day at the
chosen time of day. The request is keyed by the goal id, so scheduling again
replaces the previous time and cancelling removes it. Delivering the
notification is left to whatever consumes the pending requests.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, time, timedelta
from typing import Dict, List, Optional, Protocol, Union, runtime_checkable
from uuid import UUID

from cashsaver.config import settings
from cashsaver.services.goal_ledger.entities import SavingGoal
from cashsaver.utils.datetime_utils import local_now, to_local

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReminderRequest:
    """A pending daily reminder for one goal."""

    identifier: str
    goal_id: UUID
    title: str
    body: str
    hour: int
    minute: int
    repeats: bool = True

    def next_fire_time(self, now: Optional[datetime] = None) -> datetime:
        """
        Next moment this reminder fires, strictly after ``now``.

        Args:
            now: Reference moment (defaults to the local current time)

        Returns:
            Aware datetime in the local zone
        """
        now = to_local(now) if now is not None else local_now()
        candidate = now.replace(hour=self.hour, minute=self.minute, second=0, microsecond=0)
        if candidate <= now:
            candidate += timedelta(days=1)
        return candidate


@runtime_checkable
class ReminderScheduler(Protocol):
    """Protocol for reminder backends."""

    async def schedule(self, goal: SavingGoal, at: Union[time, datetime]) -> ReminderRequest:
        """Schedule (or reschedule) the daily reminder for ``goal``."""
        ...

    async def cancel(self, goal_id: UUID) -> None:
        """Cancel the goal's reminder. Cancelling an unknown goal is a no-op."""
        ...


class InMemoryReminderScheduler:
    """Keeps pending reminder requests in process memory."""

    def __init__(self, title: str = settings.REMINDER_TITLE):
        self._title = title
        self._requests: Dict[UUID, ReminderRequest] = {}

    async def schedule(self, goal: SavingGoal, at: Union[time, datetime]) -> ReminderRequest:
        # Only hour and minute matter; a full datetime is reduced to its time of day
        if isinstance(at, datetime):
            at = to_local(at).time()

        request = ReminderRequest(
            identifier=str(goal.id),
            goal_id=goal.id,
            title=self._title,
            body=f"Don't forget to add your daily deposit for {goal.title}",
            hour=at.hour,
            minute=at.minute,
        )
        self._requests[goal.id] = request

        logger.info(f"Scheduled daily reminder for goal {goal.id} at {at.hour:02d}:{at.minute:02d}")
        return request

    async def cancel(self, goal_id: UUID) -> None:
        if self._requests.pop(goal_id, None) is not None:
            logger.info(f"Cancelled reminder for goal {goal_id}")

    def get(self, goal_id: UUID) -> Optional[ReminderRequest]:
        return self._requests.get(goal_id)

    def pending(self) -> List[ReminderRequest]:
        """All pending requests, earliest time of day first."""
        return sorted(self._requests.values(), key=lambda r: (r.hour, r.minute, r.identifier))
