"""Summary statistics across all goals."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, List

from cashsaver.services.goal_ledger.entities import SavingGoal
from cashsaver.utils.money import ZERO

SAVING_TIPS: List[str] = [
    "Set specific, measurable goals with clear deadlines to stay motivated.",
    "Automate your savings by setting up automatic transfers to your savings account.",
    "Track your spending to identify areas where you can cut back and save more.",
    "Start small and gradually increase your savings amount as you get comfortable.",
    "Use the 50/30/20 rule: 50% needs, 30% wants, 20% savings and debt repayment.",
    "Reduce unnecessary subscriptions and redirect that money to your savings goals.",
    "Cook at home more often instead of eating out to save significant amounts.",
    "Challenge yourself with no-spend days or weeks to boost your savings.",
    "Sell items you no longer need and put the proceeds toward your goals.",
    "Take advantage of cashback apps and rewards programs to maximize savings.",
]


@dataclass(frozen=True)
class GoalStatistics:
    total_saved: Decimal
    total_target: Decimal
    completed_goals: int
    active_goals: int


class StatisticsService:
    """Folds the goal set into totals."""

    @staticmethod
    def compute_statistics(goals: Iterable[SavingGoal]) -> GoalStatistics:
        total_saved = ZERO
        total_target = ZERO
        completed = 0
        active = 0

        for goal in goals:
            total_saved += goal.current_amount
            total_target += goal.target_amount
            if goal.is_completed:
                completed += 1
            else:
                active += 1

        return GoalStatistics(
            total_saved=total_saved,
            total_target=total_target,
            completed_goals=completed,
            active_goals=active,
        )


statistics_service = StatisticsService()
