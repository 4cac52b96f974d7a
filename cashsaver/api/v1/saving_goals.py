"""Saving goals API endpoints."""

from datetime import date
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query

from cashsaver.core.exceptions import InvalidInputError, NotFoundError, PersistenceFailureError
from cashsaver.dependencies import get_ledger, get_reminder_scheduler
from cashsaver.schemas.saving_goal import (
    CalendarDayResponse,
    CalendarMonthResponse,
    DepositCreate,
    DepositResponse,
    GoalStatisticsResponse,
    SavingGoalCreate,
    SavingGoalDetailResponse,
    SavingGoalResponse,
)
from cashsaver.services.calendar_status_service import DayStatus, calendar_status_service
from cashsaver.services.goal_ledger import GoalLedger, SavingGoal
from cashsaver.services.reminder_service import ReminderScheduler
from cashsaver.services.statistics_service import SAVING_TIPS, statistics_service

router = APIRouter()

PERSISTENCE_FAILURE_DETAIL = "Could not save your change. Please try again."


def _detail_response(goal: SavingGoal, ledger: GoalLedger) -> SavingGoalDetailResponse:
    base = SavingGoalResponse.model_validate(goal)
    return SavingGoalDetailResponse(
        **base.model_dump(),
        progress=float(calendar_status_service.goal_progress(goal)),
        remaining_amount=max(goal.remaining_amount, 0),
        deposits=[DepositResponse.model_validate(d) for d in ledger.get_deposits(goal.id)],
    )


def _day_response(goal: SavingGoal, day: date, status: Optional[DayStatus] = None) -> CalendarDayResponse:
    return CalendarDayResponse(
        date=day,
        status=status or calendar_status_service.resolve_day_status(goal, day),
        required_amount=calendar_status_service.required_on(goal, day),
        deposited_amount=calendar_status_service.deposited_on(goal, day),
    )


def _get_goal_or_404(ledger: GoalLedger, goal_id: UUID) -> SavingGoal:
    try:
        return ledger.get_goal(goal_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Saving goal not found")


@router.post("/", response_model=SavingGoalResponse, status_code=201)
async def create_goal(
    goal_data: SavingGoalCreate,
    ledger: GoalLedger = Depends(get_ledger),
    reminders: ReminderScheduler = Depends(get_reminder_scheduler),
):
    """Create a new saving goal and schedule its daily reminder if enabled."""
    try:
        goal = await ledger.create_goal(**goal_data.model_dump())
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PersistenceFailureError:
        raise HTTPException(status_code=503, detail=PERSISTENCE_FAILURE_DETAIL)

    if goal.reminder_enabled and goal.reminder_time is not None:
        await reminders.schedule(goal, goal.reminder_time)

    return SavingGoalResponse.model_validate(goal)


@router.get("/", response_model=List[SavingGoalResponse])
async def list_goals(
    is_completed: Optional[bool] = None,
    ledger: GoalLedger = Depends(get_ledger),
):
    """Get all saving goals, newest first."""
    return [SavingGoalResponse.model_validate(g) for g in ledger.list_goals(is_completed)]


# --- Collection-level routes must come BEFORE /{goal_id} to avoid path conflicts ---

@router.get("/statistics", response_model=GoalStatisticsResponse)
async def get_statistics(ledger: GoalLedger = Depends(get_ledger)):
    """Totals across every goal, with saving tips."""
    stats = statistics_service.compute_statistics(ledger.list_goals())
    return GoalStatisticsResponse(
        total_saved=stats.total_saved,
        total_target=stats.total_target,
        completed_goals=stats.completed_goals,
        active_goals=stats.active_goals,
        saving_tips=SAVING_TIPS,
    )


# --- Per-goal routes ---

@router.get("/{goal_id}", response_model=SavingGoalDetailResponse)
async def get_goal(goal_id: UUID, ledger: GoalLedger = Depends(get_ledger)):
    """Get a goal with its progress and deposits."""
    goal = _get_goal_or_404(ledger, goal_id)
    return _detail_response(goal, ledger)


@router.delete("/{goal_id}", status_code=204)
async def delete_goal(goal_id: UUID, ledger: GoalLedger = Depends(get_ledger)):
    """Delete a goal, its deposits and its reminder."""
    try:
        await ledger.delete_goal(goal_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Saving goal not found")
    except PersistenceFailureError:
        raise HTTPException(status_code=503, detail=PERSISTENCE_FAILURE_DETAIL)


@router.get("/{goal_id}/deposits", response_model=List[DepositResponse])
async def list_deposits(goal_id: UUID, ledger: GoalLedger = Depends(get_ledger)):
    """Deposits for a goal, most recent first."""
    _get_goal_or_404(ledger, goal_id)
    return [DepositResponse.model_validate(d) for d in ledger.get_deposits(goal_id)]


@router.post("/{goal_id}/deposits", response_model=DepositResponse, status_code=201)
async def add_deposit(
    goal_id: UUID,
    deposit_data: DepositCreate,
    ledger: GoalLedger = Depends(get_ledger),
):
    """Record a deposit toward a goal."""
    try:
        deposit = await ledger.add_deposit(goal_id, deposit_data.amount, note=deposit_data.note)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Saving goal not found")
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PersistenceFailureError:
        raise HTTPException(status_code=503, detail=PERSISTENCE_FAILURE_DETAIL)

    return DepositResponse.model_validate(deposit)


@router.delete("/{goal_id}/deposits/{deposit_id}", status_code=204)
async def remove_deposit(
    goal_id: UUID,
    deposit_id: UUID,
    ledger: GoalLedger = Depends(get_ledger),
):
    """Remove a deposit from a goal."""
    try:
        await ledger.remove_deposit(goal_id, deposit_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PersistenceFailureError:
        raise HTTPException(status_code=503, detail=PERSISTENCE_FAILURE_DETAIL)


@router.get("/{goal_id}/calendar", response_model=CalendarMonthResponse)
async def get_calendar_month(
    goal_id: UUID,
    year: int = Query(..., ge=1900, le=2100),
    month: int = Query(..., ge=1, le=12),
    ledger: GoalLedger = Depends(get_ledger),
):
    """Day statuses for every day of a month."""
    goal = _get_goal_or_404(ledger, goal_id)
    statuses = calendar_status_service.month_statuses(goal, year, month)
    return CalendarMonthResponse(
        goal_id=goal.id,
        year=year,
        month=month,
        days=[_day_response(goal, day, status) for day, status in statuses.items()],
    )


@router.get("/{goal_id}/calendar/{day}", response_model=CalendarDayResponse)
async def get_calendar_day(
    goal_id: UUID,
    day: date,
    ledger: GoalLedger = Depends(get_ledger),
):
    """Status of one day with the required and deposited amounts."""
    goal = _get_goal_or_404(ledger, goal_id)
    return _day_response(goal, day)
