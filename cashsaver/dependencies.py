"""FastAPI dependencies for the goal ledger and its collaborators."""

from fastapi import HTTPException, Request, status

from cashsaver.services.goal_ledger import GoalLedger
from cashsaver.services.reminder_service import ReminderScheduler


def get_ledger(request: Request) -> GoalLedger:
    """Ledger built at application startup."""
    ledger = getattr(request.app.state, "ledger", None)
    if ledger is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Goal ledger is not ready yet",
        )
    return ledger


def get_reminder_scheduler(request: Request) -> ReminderScheduler:
    """Reminder scheduler shared with the ledger."""
    scheduler = getattr(request.app.state, "reminders", None)
    if scheduler is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Reminder scheduler is not ready yet",
        )
    return scheduler
