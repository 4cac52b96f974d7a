"""Per-day pacing status for the goal calendar."""

import calendar
import enum
from datetime import date
from decimal import Decimal
from typing import Dict

from cashsaver.services.goal_ledger.entities import SavingGoal
from cashsaver.utils.datetime_utils import DateLike, calendar_day, is_same_day
from cashsaver.utils.money import ZERO


class DayStatus(str, enum.Enum):
    """Calendar marker for one day of one goal."""

    COMPLETED = "completed"
    INCOMPLETE = "incomplete"
    NOT_APPLICABLE = "not_applicable"


class CalendarStatusService:
    """
    Classifies calendar days against a goal's pacing.

    Every in-range day is measured against the goal's *current*
    ``daily_amount``; there is no per-day schedule. Past days are therefore
    re-judged whenever a deposit changes the daily figure.
    """

    @staticmethod
    def in_range(goal: SavingGoal, day: DateLike) -> bool:
        return goal.start_date <= calendar_day(day) <= goal.end_date

    @staticmethod
    def required_on(goal: SavingGoal, day: DateLike) -> Decimal:
        """Amount the goal asks for on ``day`` (zero outside its window)."""
        if CalendarStatusService.in_range(goal, day):
            return goal.daily_amount
        return ZERO

    @staticmethod
    def deposited_on(goal: SavingGoal, day: DateLike) -> Decimal:
        """Sum of the goal's deposits recorded on the same local calendar day."""
        return sum((d.amount for d in goal.deposits if is_same_day(d.date, day)), ZERO)

    @staticmethod
    def resolve_day_status(goal: SavingGoal, day: DateLike) -> DayStatus:
        """
        Classify ``day`` for ``goal``.

        A day with something required and nothing deposited is INCOMPLETE,
        not NOT_APPLICABLE.
        """
        if not CalendarStatusService.in_range(goal, day):
            return DayStatus.NOT_APPLICABLE

        required = CalendarStatusService.required_on(goal, day)
        if required <= 0:
            return DayStatus.NOT_APPLICABLE

        deposited = CalendarStatusService.deposited_on(goal, day)
        if deposited >= required:
            return DayStatus.COMPLETED
        return DayStatus.INCOMPLETE

    @staticmethod
    def month_statuses(goal: SavingGoal, year: int, month: int) -> Dict[date, DayStatus]:
        """Status of every day in a calendar month, in day order."""
        _, days_in_month = calendar.monthrange(year, month)
        return {
            day: CalendarStatusService.resolve_day_status(goal, day)
            for day in (date(year, month, n) for n in range(1, days_in_month + 1))
        }

    @staticmethod
    def goal_progress(goal: SavingGoal) -> Decimal:
        """Saved share of the target, capped at 1."""
        if goal.target_amount <= 0:
            return ZERO
        return min(goal.current_amount / goal.target_amount, Decimal("1"))


calendar_status_service = CalendarStatusService()
