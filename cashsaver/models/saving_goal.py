"""Saving goal and deposit models."""

import uuid
from decimal import Decimal

from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, Index, Numeric, String, Text, Time
from sqlalchemy.orm import relationship

from cashsaver.core.database import Base
from cashsaver.core.db_types import UUID, LocalDateTime
from cashsaver.utils.datetime_utils import utc_now


class SavingGoalRecord(Base):
    """Persisted shape of a saving goal."""

    __tablename__ = "saving_goals"

    id = Column(UUID(), primary_key=True, default=uuid.uuid4)

    # Goal details
    title = Column(String(200), nullable=False)
    target_amount = Column(Numeric(15, 2), nullable=False)
    current_amount = Column(Numeric(15, 2), default=Decimal("0.00"), nullable=False)

    # Derived pacing figure; written only together with the balance it came from
    daily_amount = Column(Numeric(24, 10), default=Decimal("0"), nullable=False)

    # Dates
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)

    # Status
    is_completed = Column(Boolean, default=False, nullable=False)

    # Reminder hint for the scheduler
    reminder_enabled = Column(Boolean, default=False, nullable=False)
    reminder_time = Column(Time, nullable=True)

    # Timestamps
    created_at = Column(LocalDateTime(), nullable=False)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now, nullable=False)

    # Relationships
    deposits = relationship(
        "DepositRecord",
        back_populates="goal",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="DepositRecord.date",
    )

    __table_args__ = (Index("ix_saving_goals_completed", "is_completed"),)


class DepositRecord(Base):
    """Persisted shape of a single deposit toward a goal."""

    __tablename__ = "deposits"

    id = Column(UUID(), primary_key=True, default=uuid.uuid4)
    goal_id = Column(
        UUID(),
        ForeignKey("saving_goals.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    amount = Column(Numeric(15, 2), nullable=False)
    date = Column(LocalDateTime(), nullable=False)
    note = Column(Text, nullable=True)

    created_at = Column(DateTime, default=utc_now, nullable=False)

    goal = relationship("SavingGoalRecord", back_populates="deposits")
