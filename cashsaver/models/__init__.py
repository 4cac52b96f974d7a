"""SQLAlchemy models package."""

from cashsaver.models.saving_goal import DepositRecord, SavingGoalRecord

__all__ = [
    "SavingGoalRecord",
    "DepositRecord",
]
