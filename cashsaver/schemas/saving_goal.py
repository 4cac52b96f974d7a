"""Saving goal schemas."""

from datetime import date, datetime, time
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from cashsaver.services.calendar_status_service import DayStatus
from cashsaver.utils.money import MAX_AMOUNT


class SavingGoalCreate(BaseModel):
    """Schema for creating a saving goal."""

    title: str = Field(min_length=1, max_length=200)
    target_amount: Decimal = Field(gt=0, lt=MAX_AMOUNT)
    start_date: date
    end_date: date
    reminder_enabled: bool = False
    reminder_time: Optional[time] = None


class DepositCreate(BaseModel):
    """Schema for recording a deposit."""

    amount: Decimal = Field(gt=0, lt=MAX_AMOUNT)
    note: Optional[str] = Field(None, max_length=500)


class DepositResponse(BaseModel):
    """Schema for deposit response."""

    id: UUID
    goal_id: UUID
    amount: Decimal
    date: datetime
    note: Optional[str]

    class Config:
        from_attributes = True


class SavingGoalResponse(BaseModel):
    """Schema for saving goal response."""

    id: UUID
    title: str
    target_amount: Decimal
    current_amount: Decimal
    daily_amount: Decimal
    start_date: date
    end_date: date
    is_completed: bool
    reminder_enabled: bool
    reminder_time: Optional[time]
    created_at: datetime

    class Config:
        from_attributes = True


class SavingGoalDetailResponse(SavingGoalResponse):
    """Goal with its progress figures and deposit history (newest first)."""

    progress: float
    remaining_amount: Decimal
    deposits: List[DepositResponse]


class CalendarDayResponse(BaseModel):
    """Status of one calendar day for a goal."""

    date: date
    status: DayStatus
    required_amount: Decimal
    deposited_amount: Decimal


class CalendarMonthResponse(BaseModel):
    """Every day of one month for a goal."""

    goal_id: UUID
    year: int
    month: int
    days: List[CalendarDayResponse]


class GoalStatisticsResponse(BaseModel):
    """Totals across all goals."""

    total_saved: Decimal
    total_target: Decimal
    completed_goals: int
    active_goals: int
    saving_tips: List[str]
