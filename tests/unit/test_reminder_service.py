"""Unit tests for the in-memory reminder scheduler."""

from datetime import date, datetime, time, timezone
from decimal import Decimal
from uuid import uuid4

import pytest

from cashsaver.services.goal_ledger import SavingGoal
from cashsaver.services.reminder_service import (
    InMemoryReminderScheduler,
    ReminderRequest,
    ReminderScheduler,
)


@pytest.fixture
def goal():
    return SavingGoal(
        id=uuid4(),
        title="Vacation",
        target_amount=Decimal("2000"),
        start_date=date(2024, 1, 1),
        end_date=date(2024, 6, 30),
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        reminder_enabled=True,
        reminder_time=time(20, 30),
    )


@pytest.mark.unit
class TestInMemoryReminderScheduler:
    def test_satisfies_protocol(self):
        assert isinstance(InMemoryReminderScheduler(), ReminderScheduler)

    @pytest.mark.asyncio
    async def test_schedule_builds_daily_request(self, goal):
        scheduler = InMemoryReminderScheduler()

        request = await scheduler.schedule(goal, time(20, 30))

        assert request.identifier == str(goal.id)
        assert request.title == "Daily Saving Reminder"
        assert request.body == "Don't forget to add your daily deposit for Vacation"
        assert (request.hour, request.minute, request.repeats) == (20, 30, True)
        assert scheduler.get(goal.id) == request

    @pytest.mark.asyncio
    async def test_datetime_is_reduced_to_time_of_day(self, goal):
        scheduler = InMemoryReminderScheduler()

        request = await scheduler.schedule(goal, datetime(2030, 5, 17, 7, 45, tzinfo=timezone.utc))

        assert (request.hour, request.minute) == (7, 45)

    @pytest.mark.asyncio
    async def test_rescheduling_replaces_previous_request(self, goal):
        scheduler = InMemoryReminderScheduler()
        await scheduler.schedule(goal, time(8, 0))

        await scheduler.schedule(goal, time(21, 0))

        assert len(scheduler.pending()) == 1
        assert scheduler.get(goal.id).hour == 21

    @pytest.mark.asyncio
    async def test_cancel_removes_request(self, goal):
        scheduler = InMemoryReminderScheduler()
        await scheduler.schedule(goal, time(8, 0))

        await scheduler.cancel(goal.id)

        assert scheduler.get(goal.id) is None

    @pytest.mark.asyncio
    async def test_cancel_unknown_goal_is_noop(self):
        scheduler = InMemoryReminderScheduler()

        await scheduler.cancel(uuid4())

        assert scheduler.pending() == []

    @pytest.mark.asyncio
    async def test_custom_title(self, goal):
        scheduler = InMemoryReminderScheduler(title="Save today")

        request = await scheduler.schedule(goal, time(8, 0))

        assert request.title == "Save today"


@pytest.mark.unit
class TestNextFireTime:
    def _request(self, hour, minute):
        return ReminderRequest(
            identifier="g", goal_id=uuid4(), title="t", body="b", hour=hour, minute=minute
        )

    def test_later_today(self):
        now = datetime(2024, 1, 10, 8, 0, tzinfo=timezone.utc)

        assert self._request(20, 30).next_fire_time(now) == datetime(
            2024, 1, 10, 20, 30, tzinfo=timezone.utc
        )

    def test_already_passed_rolls_to_tomorrow(self):
        now = datetime(2024, 1, 31, 21, 0, tzinfo=timezone.utc)

        assert self._request(20, 30).next_fire_time(now) == datetime(
            2024, 2, 1, 20, 30, tzinfo=timezone.utc
        )

    def test_exact_time_rolls_to_tomorrow(self):
        now = datetime(2024, 1, 10, 20, 30, tzinfo=timezone.utc)

        assert self._request(20, 30).next_fire_time(now).day == 11
