"""
Persistent store for the goal ledger.

The ledger commits every mutation through a ``GoalStore`` before touching its
in-memory state. Each store call is one transaction: it either fully applies
or raises ``PersistenceFailureError`` with nothing written.

Usage::

    from cashsaver.core.database import AsyncSessionLocal
    from cashsaver.services.goal_ledger import GoalLedger, SqlAlchemyGoalStore

    store = SqlAlchemyGoalStore(AsyncSessionLocal)
    ledger = await GoalLedger.load(store)
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Protocol, runtime_checkable
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import selectinload

from cashsaver.core.exceptions import PersistenceFailureError
from cashsaver.core.logging_config import get_logger
from cashsaver.models.saving_goal import DepositRecord, SavingGoalRecord
from cashsaver.services.goal_ledger.entities import Deposit, SavingGoal
from cashsaver.utils.datetime_utils import utc_now

logger = get_logger(__name__)


@runtime_checkable
class GoalStore(Protocol):
    """Protocol for durable goal/deposit storage."""

    async def load_goals(self) -> List[SavingGoal]:
        """Return every committed goal with its deposits."""
        ...

    async def add_goal(self, goal: SavingGoal) -> None:
        """Insert a new goal."""
        ...

    async def save_deposit(self, goal: SavingGoal, deposit: Deposit) -> None:
        """Insert ``deposit`` and write ``goal``'s recomputed figures."""
        ...

    async def remove_deposit(self, goal: SavingGoal, deposit_id: UUID) -> None:
        """Delete a deposit and write ``goal``'s recomputed figures."""
        ...

    async def delete_goal(self, goal_id: UUID) -> None:
        """Delete a goal together with all of its deposits."""
        ...


def _deposit_from_record(record: DepositRecord) -> Deposit:
    return Deposit(
        id=record.id,
        goal_id=record.goal_id,
        amount=record.amount,
        date=record.date,
        note=record.note,
    )


def _goal_from_record(record: SavingGoalRecord) -> SavingGoal:
    return SavingGoal(
        id=record.id,
        title=record.title,
        target_amount=record.target_amount,
        current_amount=record.current_amount,
        daily_amount=record.daily_amount,
        start_date=record.start_date,
        end_date=record.end_date,
        is_completed=record.is_completed,
        reminder_enabled=record.reminder_enabled,
        reminder_time=record.reminder_time,
        created_at=record.created_at,
        deposits=tuple(_deposit_from_record(d) for d in record.deposits),
    )


class SqlAlchemyGoalStore:
    """Stores goals and deposits through an async SQLAlchemy session factory."""

    def __init__(self, session_factory: async_sessionmaker):
        self._session_factory = session_factory

    @asynccontextmanager
    async def _transaction(self, operation: str) -> AsyncIterator[AsyncSession]:
        """Run one unit of work; any database error rolls it back."""
        async with self._session_factory() as session:
            try:
                async with session.begin():
                    yield session
            except SQLAlchemyError as exc:
                logger.error("store_rolled_back", operation=operation, error=str(exc))
                raise PersistenceFailureError(f"Could not {operation}, please try again") from exc

    async def load_goals(self) -> List[SavingGoal]:
        async with self._transaction("load goals") as session:
            result = await session.execute(
                select(SavingGoalRecord)
                .options(selectinload(SavingGoalRecord.deposits))
                .order_by(SavingGoalRecord.created_at.asc())
            )
            return [_goal_from_record(record) for record in result.scalars().all()]

    async def add_goal(self, goal: SavingGoal) -> None:
        async with self._transaction("create goal") as session:
            session.add(
                SavingGoalRecord(
                    id=goal.id,
                    title=goal.title,
                    target_amount=goal.target_amount,
                    current_amount=goal.current_amount,
                    daily_amount=goal.daily_amount,
                    start_date=goal.start_date,
                    end_date=goal.end_date,
                    is_completed=goal.is_completed,
                    reminder_enabled=goal.reminder_enabled,
                    reminder_time=goal.reminder_time,
                    created_at=goal.created_at,
                )
            )

    async def save_deposit(self, goal: SavingGoal, deposit: Deposit) -> None:
        async with self._transaction("add deposit") as session:
            await self._write_figures(session, goal)
            session.add(
                DepositRecord(
                    id=deposit.id,
                    goal_id=goal.id,
                    amount=deposit.amount,
                    date=deposit.date,
                    note=deposit.note,
                )
            )

    async def remove_deposit(self, goal: SavingGoal, deposit_id: UUID) -> None:
        async with self._transaction("remove deposit") as session:
            result = await session.execute(
                delete(DepositRecord).where(
                    DepositRecord.id == deposit_id,
                    DepositRecord.goal_id == goal.id,
                )
            )
            if result.rowcount == 0:
                raise PersistenceFailureError(f"Deposit {deposit_id} is missing from the store")
            await self._write_figures(session, goal)

    async def delete_goal(self, goal_id: UUID) -> None:
        async with self._transaction("delete goal") as session:
            # Explicit so the cascade holds even where FK enforcement is off (SQLite)
            await session.execute(delete(DepositRecord).where(DepositRecord.goal_id == goal_id))
            result = await session.execute(
                delete(SavingGoalRecord).where(SavingGoalRecord.id == goal_id)
            )
            if result.rowcount == 0:
                raise PersistenceFailureError(f"Goal {goal_id} is missing from the store")

    @staticmethod
    async def _write_figures(session: AsyncSession, goal: SavingGoal) -> None:
        """Write the balance and the figures derived from it in one statement."""
        result = await session.execute(
            update(SavingGoalRecord)
            .where(SavingGoalRecord.id == goal.id)
            .values(
                current_amount=goal.current_amount,
                daily_amount=goal.daily_amount,
                is_completed=goal.is_completed,
                updated_at=utc_now(),
            )
        )
        if result.rowcount == 0:
            raise PersistenceFailureError(f"Goal {goal.id} is missing from the store")
