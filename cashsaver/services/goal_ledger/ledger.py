"""Goal ledger: the single owner of goal balances and pacing figures."""

import asyncio
from dataclasses import replace
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Awaitable, Callable, Dict, Iterable, List, Optional, Tuple
from uuid import UUID, uuid4

from cashsaver.core.exceptions import InvalidInputError, NotFoundError, PersistenceFailureError
from cashsaver.core.logging_config import get_logger
from cashsaver.services.goal_ledger.entities import Deposit, SavingGoal
from cashsaver.services.goal_ledger.pacing import initial_daily_amount, ongoing_daily_amount
from cashsaver.services.goal_ledger.store import GoalStore
from cashsaver.utils.datetime_utils import DateLike, calendar_day, local_now, to_local
from cashsaver.utils.money import CENT, DAILY_SCALE, MAX_AMOUNT, ZERO, Amount, to_decimal

if TYPE_CHECKING:
    from cashsaver.services.reminder_service import ReminderScheduler

logger = get_logger(__name__)

Pacing = Callable[[SavingGoal, Decimal], Decimal]


def _positive_amount(value: Amount, field: str) -> Decimal:
    """Validate a money amount, rounded to cents, as strictly positive and storable."""
    amount = to_decimal(value, field)
    if amount >= MAX_AMOUNT:
        raise InvalidInputError(f"{field} must be less than {MAX_AMOUNT:,.0f}")
    try:
        amount = amount.quantize(CENT)
    except InvalidOperation:
        raise InvalidInputError(f"{field} cannot be represented in cents, got {value!r}")
    if amount <= 0:
        raise InvalidInputError(f"{field} must be greater than zero")
    if amount >= MAX_AMOUNT:
        raise InvalidInputError(f"{field} must be less than {MAX_AMOUNT:,.0f}")
    return amount


class GoalLedger:
    """
    Owns every goal and its deposits and keeps their derived figures correct.

    After each call, for every goal:
    - ``current_amount`` equals the sum of its deposits
    - ``is_completed`` equals ``current_amount >= target_amount``
    - ``daily_amount`` is non-negative and zero for completed goals

    Mutations are serialized by one lock. Each builds the replacement goal,
    commits it through the store, and only then installs it in memory, so a
    failed commit leaves the ledger exactly as it was.
    """

    def __init__(
        self,
        store: GoalStore,
        reminders: Optional["ReminderScheduler"] = None,
        clock: Callable[[], datetime] = local_now,
    ):
        self._store = store
        self._reminders = reminders
        self._clock = clock
        self._lock = asyncio.Lock()
        self._goals: Dict[UUID, SavingGoal] = {}
        self._deposit_owner: Dict[UUID, UUID] = {}

    @classmethod
    async def load(
        cls,
        store: GoalStore,
        reminders: Optional["ReminderScheduler"] = None,
        clock: Callable[[], datetime] = local_now,
    ) -> "GoalLedger":
        """Build a ledger holding every goal already committed to ``store``."""
        ledger = cls(store, reminders=reminders, clock=clock)
        for goal in await store.load_goals():
            ledger._install(goal)
        logger.info("goals_loaded", count=len(ledger._goals))
        return ledger

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_goal(self, goal_id: UUID) -> SavingGoal:
        goal = self._goals.get(goal_id)
        if goal is None:
            raise NotFoundError(f"Goal {goal_id} not found")
        return goal

    def list_goals(self, is_completed: Optional[bool] = None) -> List[SavingGoal]:
        """Goals newest first, optionally filtered by completion."""
        goals = sorted(self._goals.values(), key=lambda g: g.created_at, reverse=True)
        if is_completed is not None:
            goals = [g for g in goals if g.is_completed == is_completed]
        return goals

    def active_goals(self) -> List[SavingGoal]:
        return self.list_goals(is_completed=False)

    def get_deposits(self, goal_id: UUID) -> List[Deposit]:
        """A goal's deposits, most recent first."""
        goal = self.get_goal(goal_id)
        return sorted(goal.deposits, key=lambda d: d.date, reverse=True)

    def goal_for_deposit(self, deposit_id: UUID) -> SavingGoal:
        goal_id = self._deposit_owner.get(deposit_id)
        if goal_id is None:
            raise NotFoundError(f"Deposit {deposit_id} not found")
        return self._goals[goal_id]

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def create_goal(
        self,
        title: str,
        target_amount: Amount,
        start_date: DateLike,
        end_date: DateLike,
        reminder_enabled: bool = False,
        reminder_time: Optional[time] = None,
    ) -> SavingGoal:
        """
        Create a goal with no deposits.

        The first daily figure spreads the target over the whole window
        from ``start_date``; see ``initial_daily_amount``.

        Raises:
            InvalidInputError: Empty title, non-positive target or end before start
            PersistenceFailureError: If the store rejects the new goal
        """
        title = (title or "").strip()
        if not title:
            raise InvalidInputError("title must not be empty")
        target = _positive_amount(target_amount, "target_amount")
        start, end = calendar_day(start_date), calendar_day(end_date)
        if end < start:
            raise InvalidInputError("end_date must be on or after start_date")

        draft = SavingGoal(
            id=uuid4(),
            title=title,
            target_amount=target,
            start_date=start,
            end_date=end,
            created_at=to_local(self._clock()),
            reminder_enabled=reminder_enabled,
            reminder_time=reminder_time if reminder_enabled else None,
        )

        async with self._lock:
            goal = self._recompute(draft, (), self._initial_pacing)
            await self._commit(self._store.add_goal(goal), "create_goal", goal.id)
            self._install(goal)

        logger.info(
            "goal_created",
            goal_id=str(goal.id),
            target=str(goal.target_amount),
            start_date=goal.start_date.isoformat(),
            end_date=goal.end_date.isoformat(),
            daily=str(goal.daily_amount),
        )
        return goal

    async def add_deposit(
        self,
        goal_id: UUID,
        amount: Amount,
        note: Optional[str] = None,
        deposited_at: Optional[datetime] = None,
    ) -> Deposit:
        """
        Record a deposit and recompute the goal's figures.

        Args:
            goal_id: Goal receiving the deposit
            amount: Positive amount
            note: Optional free text, blank notes are dropped
            deposited_at: When it was recorded (defaults to now)

        Raises:
            InvalidInputError: If amount is not positive or the balance would overflow
            NotFoundError: If the goal does not exist
            PersistenceFailureError: If the store rejects the commit
        """
        value = _positive_amount(amount, "amount")
        note = note.strip() if note else None

        async with self._lock:
            goal = self.get_goal(goal_id)
            if goal.current_amount + value >= MAX_AMOUNT:
                raise InvalidInputError(
                    f"amount would take the goal balance past {MAX_AMOUNT:,.0f}"
                )
            deposit = Deposit(
                id=uuid4(),
                goal_id=goal.id,
                amount=value,
                date=to_local(deposited_at or self._clock()),
                note=note or None,
            )
            updated = self._recompute(goal, goal.deposits + (deposit,), self._ongoing_pacing)
            await self._commit(self._store.save_deposit(updated, deposit), "add_deposit", goal.id)
            self._install(updated)

        logger.info(
            "deposit_added",
            goal_id=str(goal_id),
            deposit_id=str(deposit.id),
            amount=str(value),
            current=str(updated.current_amount),
            daily=str(updated.daily_amount),
            completed=updated.is_completed,
        )
        return deposit

    async def remove_deposit(self, goal_id: UUID, deposit_id: UUID) -> None:
        """
        Remove one of the goal's deposits and recompute its figures.

        The goal may drop back to not completed.

        Raises:
            NotFoundError: If the goal does not exist or the deposit is not its own
            PersistenceFailureError: If the store rejects the commit
        """
        async with self._lock:
            goal = self.get_goal(goal_id)
            if goal.find_deposit(deposit_id) is None:
                raise NotFoundError(f"Deposit {deposit_id} does not belong to goal {goal_id}")

            kept = tuple(d for d in goal.deposits if d.id != deposit_id)
            updated = self._recompute(goal, kept, self._ongoing_pacing)
            await self._commit(
                self._store.remove_deposit(updated, deposit_id), "remove_deposit", goal.id
            )
            self._install(updated, dropped=[deposit_id])

        logger.info(
            "deposit_removed",
            goal_id=str(goal_id),
            deposit_id=str(deposit_id),
            current=str(updated.current_amount),
            daily=str(updated.daily_amount),
            completed=updated.is_completed,
        )

    async def delete_goal(self, goal_id: UUID) -> None:
        """
        Delete a goal with all of its deposits and cancel its reminder.

        Raises:
            NotFoundError: If the goal does not exist
            PersistenceFailureError: If the store rejects the commit
        """
        async with self._lock:
            goal = self.get_goal(goal_id)
            await self._commit(self._store.delete_goal(goal.id), "delete_goal", goal.id)
            del self._goals[goal.id]
            for deposit in goal.deposits:
                self._deposit_owner.pop(deposit.id, None)

        logger.info("goal_deleted", goal_id=str(goal_id), deposits=len(goal.deposits))

        if self._reminders is not None:
            await self._reminders.cancel(goal_id)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _today(self) -> date:
        return calendar_day(self._clock())

    def _initial_pacing(self, goal: SavingGoal, current: Decimal) -> Decimal:
        return initial_daily_amount(goal.target_amount, current, goal.start_date, goal.end_date)

    def _ongoing_pacing(self, goal: SavingGoal, current: Decimal) -> Decimal:
        return ongoing_daily_amount(goal.target_amount, current, goal.end_date, self._today())

    def _recompute(
        self,
        goal: SavingGoal,
        deposits: Tuple[Deposit, ...],
        pacing: Pacing,
    ) -> SavingGoal:
        """Derive balance, completion and daily figure from the deposit set."""
        current = sum((d.amount for d in deposits), ZERO)
        is_completed = current >= goal.target_amount
        daily_amount = ZERO if is_completed else max(ZERO, pacing(goal, current))
        # Same scale as the daily_amount column
        daily_amount = daily_amount.quantize(DAILY_SCALE)
        return replace(
            goal,
            deposits=deposits,
            current_amount=current,
            is_completed=is_completed,
            daily_amount=daily_amount,
        )

    def _install(self, goal: SavingGoal, dropped: Iterable[UUID] = ()) -> None:
        self._goals[goal.id] = goal
        for deposit in goal.deposits:
            self._deposit_owner[deposit.id] = goal.id
        for deposit_id in dropped:
            self._deposit_owner.pop(deposit_id, None)

    async def _commit(self, pending: Awaitable[None], operation: str, goal_id: UUID) -> None:
        try:
            await pending
        except PersistenceFailureError:
            logger.error("commit_failed", operation=operation, goal_id=str(goal_id))
            raise
