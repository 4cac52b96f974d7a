"""Goal ledger package: goal and deposit state with its derived pacing figures."""

from cashsaver.services.goal_ledger.entities import Deposit, SavingGoal
from cashsaver.services.goal_ledger.ledger import GoalLedger
from cashsaver.services.goal_ledger.pacing import initial_daily_amount, ongoing_daily_amount
from cashsaver.services.goal_ledger.store import GoalStore, SqlAlchemyGoalStore

__all__ = [
    "Deposit",
    "SavingGoal",
    "GoalLedger",
    "GoalStore",
    "SqlAlchemyGoalStore",
    "initial_daily_amount",
    "ongoing_daily_amount",
]
