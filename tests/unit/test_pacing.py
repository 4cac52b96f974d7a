"""Unit tests for the two daily pacing rules."""

from datetime import date
from decimal import Decimal

from cashsaver.services.goal_ledger.pacing import initial_daily_amount, ongoing_daily_amount


class TestInitialDailyAmount:
    def test_january_window(self):
        """1200 over 30 days → 40."""
        assert initial_daily_amount(
            Decimal("1200"), Decimal("0"), date(2024, 1, 1), date(2024, 1, 31)
        ) == Decimal("40")

    def test_zero_day_window_returns_remainder(self):
        assert initial_daily_amount(
            Decimal("250"), Decimal("0"), date(2024, 5, 1), date(2024, 5, 1)
        ) == Decimal("250")

    def test_inverted_window_returns_remainder(self):
        assert initial_daily_amount(
            Decimal("250"), Decimal("0"), date(2024, 5, 2), date(2024, 5, 1)
        ) == Decimal("250")

    def test_leap_february(self):
        """2024-02-01 → 2024-03-01 spans 29 days."""
        assert initial_daily_amount(
            Decimal("290"), Decimal("0"), date(2024, 2, 1), date(2024, 3, 1)
        ) == Decimal("10")


class TestOngoingDailyAmount:
    def test_rebases_on_today(self):
        """700 remaining, 20 days from 2024-01-11 to 2024-01-31 → 35."""
        assert ongoing_daily_amount(
            Decimal("1200"), Decimal("500"), date(2024, 1, 31), date(2024, 1, 11)
        ) == Decimal("35")

    def test_deadline_today_is_zero(self):
        assert ongoing_daily_amount(
            Decimal("1200"), Decimal("500"), date(2024, 1, 31), date(2024, 1, 31)
        ) == 0

    def test_past_deadline_is_zero(self):
        assert ongoing_daily_amount(
            Decimal("1200"), Decimal("0"), date(2024, 1, 31), date(2024, 2, 15)
        ) == 0

    def test_target_reached_is_zero(self):
        assert ongoing_daily_amount(
            Decimal("1200"), Decimal("1300"), date(2024, 1, 31), date(2024, 1, 11)
        ) == 0

    def test_rules_differ_for_the_same_goal(self):
        """Mid-window, the ongoing rule asks for more than the creation rule did."""
        initial = initial_daily_amount(
            Decimal("1200"), Decimal("0"), date(2024, 1, 1), date(2024, 1, 31)
        )
        ongoing = ongoing_daily_amount(
            Decimal("1200"), Decimal("0"), date(2024, 1, 31), date(2024, 1, 11)
        )
        assert (initial, ongoing) == (Decimal("40"), Decimal("60"))
