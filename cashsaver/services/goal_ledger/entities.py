"""In-memory goal and deposit entities owned by the ledger.

Both are frozen: the ledger never edits an entity in place. Every mutation
builds a replacement goal, commits it, then swaps it into the ledger, so any
reference a reader holds is a consistent snapshot.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time
from decimal import Decimal
from typing import Optional, Tuple
from uuid import UUID


@dataclass(frozen=True)
class Deposit:
    """A single recorded contribution toward a goal."""

    id: UUID
    goal_id: UUID
    amount: Decimal
    date: datetime
    note: Optional[str] = None


@dataclass(frozen=True)
class SavingGoal:
    """A savings objective with a target amount and a deadline.

    ``daily_amount`` and ``is_completed`` are derived from the balance and are
    only ever set by the ledger's recompute step.
    """

    id: UUID
    title: str
    target_amount: Decimal
    start_date: date
    end_date: date
    created_at: datetime
    current_amount: Decimal = Decimal("0")
    daily_amount: Decimal = Decimal("0")
    is_completed: bool = False
    reminder_enabled: bool = False
    reminder_time: Optional[time] = None
    deposits: Tuple[Deposit, ...] = field(default_factory=tuple)

    @property
    def remaining_amount(self) -> Decimal:
        return self.target_amount - self.current_amount

    def find_deposit(self, deposit_id: UUID) -> Optional[Deposit]:
        for deposit in self.deposits:
            if deposit.id == deposit_id:
                return deposit
        return None
