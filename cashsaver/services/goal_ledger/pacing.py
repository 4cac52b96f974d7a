"""Daily pacing rules.

Two rules exist and they are not interchangeable:

- ``initial_daily_amount`` spreads the remainder over the goal's whole
  window, counted from ``start_date``. Used once, when the goal is created.
- ``ongoing_daily_amount`` re-bases on "today" and spreads the remainder over
  the days left until ``end_date``. Used after every later mutation.
"""

from datetime import date
from decimal import Decimal

from cashsaver.utils.datetime_utils import days_between
from cashsaver.utils.money import ZERO


def initial_daily_amount(
    target_amount: Decimal,
    current_amount: Decimal,
    start_date: date,
    end_date: date,
) -> Decimal:
    """
    Daily figure for a freshly created goal.

    A window of zero days (start and end on the same day) makes the whole
    remainder due at once.

    Example:
        target 1200, 2024-01-01 -> 2024-01-31 (30 days) -> 40
    """
    remaining = target_amount - current_amount
    days = days_between(start_date, end_date)
    if days > 0:
        return remaining / days
    return remaining


def ongoing_daily_amount(
    target_amount: Decimal,
    current_amount: Decimal,
    end_date: date,
    today: date,
) -> Decimal:
    """
    Daily figure for a goal that is already underway.

    Zero once the target is reached or the deadline day has arrived.

    Example:
        target 1200, saved 500, today 2024-01-11, end 2024-01-31 -> 700 / 20 = 35
    """
    remaining = target_amount - current_amount
    days = days_between(today, end_date)
    if days > 0 and remaining > 0:
        return remaining / days
    return ZERO
