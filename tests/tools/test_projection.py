"""Tests for the recurrence projector."""

import copy
from datetime import date, timedelta
from decimal import Decimal

from tests.helpers import make_income, make_payment
from tools.projection import (
    DAILY,
    MONTHLY,
    WEEKLY,
    generate_periods,
    period_label,
    project,
    summarize,
    to_cents,
)


class TestGeneratePeriods:
    """Tests for generate_periods function."""

    def test_monthly_periods_start_at_anchor(self):
        """Test that monthly periods step a month at a time from the anchor."""
        periods = generate_periods(MONTHLY, 3, date(2024, 1, 15))

        assert [p.period_start for p in periods] == [
            date(2024, 1, 15),
            date(2024, 2, 15),
            date(2024, 3, 15),
        ]
        assert periods[-1].period_end == date(2024, 4, 15)
        assert [p.label for p in periods] == ["Jan 2024", "Feb 2024", "Mar 2024"]

    def test_monthly_periods_keep_month_end_anchor(self):
        """Test that a 31st anchor is not pulled back by short months."""
        periods = generate_periods(MONTHLY, 3, date(2024, 1, 31))

        assert [p.period_start for p in periods] == [
            date(2024, 1, 31),
            date(2024, 2, 29),
            date(2024, 3, 31),
        ]

    def test_monthly_periods_on_first_are_calendar_months(self):
        """Test that anchoring on the 1st gives calendar months."""
        periods = generate_periods(MONTHLY, 2, date(2024, 2, 1))

        assert periods[0].period_end == date(2024, 3, 1)
        assert periods[1].period_end == date(2024, 4, 1)

    def test_weekly_periods(self):
        """Test seven-day periods starting at the anchor date."""
        periods = generate_periods(WEEKLY, 2, date(2024, 1, 3))

        assert periods[0].period_start == date(2024, 1, 3)
        assert periods[0].period_end == date(2024, 1, 10)
        assert periods[1].period_end == date(2024, 1, 17)
        assert periods[0].label == "Jan 3, 2024"

    def test_daily_periods(self):
        """Test single-day periods."""
        periods = generate_periods(DAILY, 3, date(2024, 2, 28))

        assert [p.period_start for p in periods] == [
            date(2024, 2, 28),
            date(2024, 2, 29),
            date(2024, 3, 1),
        ]

    def test_periods_are_contiguous(self):
        """Test that each period ends where the next one starts."""
        periods = generate_periods(MONTHLY, 14, date(2024, 11, 5))

        for previous, current in zip(periods, periods[1:]):
            assert previous.period_end == current.period_start

    def test_zero_or_negative_count(self):
        """Test that a non-positive period count gives no periods."""
        assert generate_periods(MONTHLY, 0, date(2024, 1, 1)) == []
        assert generate_periods(DAILY, -3, date(2024, 1, 1)) == []

    def test_unknown_granularity_falls_back_to_monthly(self):
        """Test that an unrecognised granularity behaves as monthly."""
        periods = generate_periods("quarterly", 2, date(2024, 1, 20))

        assert periods[0].period_start == date(2024, 1, 20)
        assert periods[0].period_end == date(2024, 2, 20)

    def test_period_label(self):
        """Test label formats for months and days."""
        assert period_label(MONTHLY, date(2024, 12, 1)) == "Dec 2024"
        assert period_label(DAILY, date(2024, 12, 5)) == "Dec 5, 2024"


class TestProject:
    """Tests for project function."""

    def test_one_time_income_and_monthly_payment(self):
        """Test a one-time income and a monthly payment over three months."""
        income = make_income(amount="500.00", day=date(2024, 1, 15))
        payment = make_payment(
            amount="200.00",
            day=date(2024, 1, 1),
            recurring=True,
            frequency="monthly",
            frequency_day=1,
        )

        periods = project(
            [income], [payment], Decimal("1000"), MONTHLY, 3, date(2024, 1, 1)
        )

        assert [p.income for p in periods] == [
            Decimal("500.00"),
            Decimal("0.00"),
            Decimal("0.00"),
        ]
        assert [p.expenses for p in periods] == [Decimal("200.00")] * 3
        assert [p.running_balance for p in periods] == [
            Decimal("1300.00"),
            Decimal("1100.00"),
            Decimal("900.00"),
        ]

    def test_weekly_income_every_monday(self):
        """Test a weekly income on Mondays through January 2024."""
        income = make_income(
            amount="100.00",
            day=date(2024, 1, 1),
            recurring=True,
            frequency="weekly",
            frequency_day=1,
        )

        periods = project([income], [], Decimal("0"), MONTHLY, 1, date(2024, 1, 1))

        assert periods[0].income == Decimal("500.00")
        assert [o.occurrence_date.day for o in periods[0].income_occurrences] == [
            1,
            8,
            15,
            22,
            29,
        ]

    def test_deterministic(self):
        """Test that identical inputs give identical outputs."""
        incomes = [
            make_income(recurring=True, frequency="fortnightly", frequency_day=5),
            make_income(id=2, amount="42.10", day=date(2024, 3, 3)),
        ]
        payments = [make_payment(recurring=True, frequency="monthly", frequency_day=31)]

        first = project(incomes, payments, Decimal("10"), WEEKLY, 20, date(2024, 1, 1))
        second = project(incomes, payments, Decimal("10"), WEEKLY, 20, date(2024, 1, 1))

        assert first == second

    def test_inputs_not_mutated(self):
        """Test that the projector leaves its inputs untouched."""
        incomes = [make_income(recurring=True, frequency="monthly")]
        payments = [make_payment(end_date=date(2024, 6, 1), recurring=True)]
        incomes_before = copy.deepcopy(incomes)
        payments_before = copy.deepcopy(payments)

        project(incomes, payments, Decimal("0"), MONTHLY, 12, date(2024, 1, 1))

        assert incomes == incomes_before
        assert payments == payments_before

    def test_running_balance_continuity(self):
        """Test that each balance is the previous balance plus the net change."""
        incomes = [
            make_income(
                amount="1234.56", recurring=True, frequency="monthly", frequency_day=25
            )
        ]
        payments = [
            make_payment(
                amount="33.33", recurring=True, frequency="weekly", frequency_day=5
            ),
            make_payment(id=2, amount="899.99", day=date(2024, 4, 2)),
        ]
        start = Decimal("250.00")

        periods = project(incomes, payments, start, MONTHLY, 12, date(2024, 1, 1))

        previous = start
        for period in periods:
            assert period.net_change == period.income - period.expenses
            assert period.running_balance == previous + period.net_change
            previous = period.running_balance

    def test_one_time_transaction_counted_once(self):
        """Test that a one-time income lands in exactly one period."""
        income = make_income(amount="250.00", day=date(2024, 2, 10))

        periods = project([income], [], Decimal("0"), DAILY, 90, date(2024, 1, 1))

        assert sum(p.income for p in periods) == Decimal("250.00")
        assert [p.period_start for p in periods if p.income] == [date(2024, 2, 10)]

    def test_one_time_outside_grid_ignored(self):
        """Test that a one-time transaction outside the grid contributes nothing."""
        before = make_payment(amount="75.00", day=date(2023, 12, 31))
        after = make_payment(id=2, amount="75.00", day=date(2024, 4, 1))

        periods = project([], [before, after], Decimal("0"), MONTHLY, 3, date(2024, 1, 1))

        assert all(p.expenses == Decimal("0") for p in periods)

    def test_monthly_day_31_clamped(self):
        """Test that day 31 lands on the last day of shorter months."""
        payment = make_payment(
            amount="10.00",
            day=date(2024, 1, 31),
            recurring=True,
            frequency="monthly",
            frequency_day=31,
        )

        periods = project([], [payment], Decimal("0"), MONTHLY, 12, date(2024, 1, 1))

        dates = [o.occurrence_date for p in periods for o in p.expense_occurrences]
        assert len(dates) == 12
        assert date(2024, 2, 29) in dates
        assert date(2024, 4, 30) in dates
        assert all(p.expenses == Decimal("10.00") for p in periods)

    def test_fortnightly_every_fourteen_days(self):
        """Test that fortnightly occurrences are exactly 14 days apart."""
        income = make_income(
            day=date(2024, 1, 5),
            recurring=True,
            frequency="fortnightly",
            frequency_day=5,
        )

        periods = project([income], [], Decimal("0"), DAILY, 60, date(2024, 1, 1))

        dates = [o.occurrence_date for p in periods for o in p.income_occurrences]
        assert dates[0] == date(2024, 1, 5)
        assert len(dates) == 4
        for previous, current in zip(dates, dates[1:]):
            assert current - previous == timedelta(days=14)

    def test_end_dated_payment_stops(self):
        """Test that a payment contributes nothing after its end date."""
        payment = make_payment(
            amount="50.00",
            day=date(2024, 1, 10),
            recurring=True,
            frequency="monthly",
            frequency_day=10,
            end_date=date(2024, 3, 10),
        )

        periods = project([], [payment], Decimal("0"), MONTHLY, 6, date(2024, 1, 1))

        assert [p.expenses for p in periods] == [Decimal("50.00")] * 3 + [
            Decimal("0.00")
        ] * 3

    def test_end_date_gates_whole_period(self):
        """Test that every occurrence counts in a period starting by the end date."""
        payment = make_payment(
            amount="100.00",
            day=date(2024, 1, 1),
            recurring=True,
            frequency="weekly",
            frequency_day=1,
            end_date=date(2024, 1, 10),
        )

        periods = project([], [payment], Decimal("0"), MONTHLY, 2, date(2024, 1, 1))

        assert periods[0].expenses == Decimal("500.00")
        assert periods[1].expenses == Decimal("0.00")

    def test_end_date_day_before_period_start(self):
        """Test that a payment ending the day before a period skips it."""
        payment = make_payment(
            amount="10.00",
            day=date(2024, 1, 1),
            recurring=True,
            frequency="weekly",
            frequency_day=1,
            end_date=date(2024, 1, 14),
        )

        periods = project([], [payment], Decimal("0"), WEEKLY, 4, date(2024, 1, 1))

        assert [p.expenses for p in periods] == [
            Decimal("10.00"),
            Decimal("10.00"),
            Decimal("0.00"),
            Decimal("0.00"),
        ]

    def test_mid_month_anchor_excludes_earlier_days(self):
        """Test that a monthly grid anchored mid-month skips days before it."""
        early = make_payment(id=1, amount="40.00", day=date(2024, 3, 5))
        late = make_payment(id=2, amount="60.00", day=date(2024, 3, 20))

        periods = project([], [early, late], Decimal("0"), MONTHLY, 1, date(2024, 3, 10))

        assert periods[0].expenses == Decimal("60.00")

    def test_non_integer_frequency_day_ignored(self):
        """Test that a malformed frequency_day falls back to the start date."""
        income = make_income(
            amount="25.00",
            day=date(2024, 1, 1),
            recurring=True,
            frequency="weekly",
            frequency_day="3",
        )

        periods = project([income], [], Decimal("0"), MONTHLY, 1, date(2024, 1, 1))

        assert periods[0].income == Decimal("125.00")

    def test_recurring_not_before_start(self):
        """Test that a recurring payment contributes nothing before it starts."""
        payment = make_payment(
            day=date(2024, 3, 15),
            recurring=True,
            frequency="weekly",
            frequency_day=5,
        )

        periods = project([], [payment], Decimal("0"), MONTHLY, 4, date(2024, 1, 1))

        assert periods[0].expenses == Decimal("0")
        assert periods[1].expenses == Decimal("0")
        assert periods[2].expenses > 0
        assert all(
            o.occurrence_date >= date(2024, 3, 15)
            for p in periods
            for o in p.expense_occurrences
        )

    def test_monthly_counts_in_start_month(self):
        """Test that a monthly day earlier than the start date still counts
        in the start month."""
        payment = make_payment(
            amount="20.00",
            day=date(2024, 1, 20),
            recurring=True,
            frequency="monthly",
            frequency_day=5,
        )

        periods = project([], [payment], Decimal("0"), MONTHLY, 2, date(2024, 1, 1))

        assert periods[0].expenses == Decimal("20.00")
        assert periods[0].expense_occurrences[0].occurrence_date == date(2024, 1, 5)

    def test_malformed_transactions_skipped(self):
        """Test that records with bad dates or amounts are ignored."""
        incomes = [
            make_income(id=1, day=None),
            make_income(id=2, amount="NaN"),
            make_income(id=3, amount="-10.00"),
            make_income(id=4, amount="30.00", day=date(2024, 1, 2)),
        ]
        incomes.append(make_income(id=5))
        incomes[-1].amount = None

        periods = project(incomes, [], Decimal("0"), MONTHLY, 1, date(2024, 1, 1))

        assert periods[0].income == Decimal("30.00")
        assert [o.source_transaction_id for o in periods[0].income_occurrences] == [4]

    def test_occurrence_details(self):
        """Test the occurrence records attached to a period."""
        income = make_income(
            id=7,
            description="Wages",
            recurring=True,
            frequency="monthly",
            frequency_day=28,
        )
        one_time = make_income(id=8, description="Gift", day=date(2024, 1, 3))

        periods = project([income, one_time], [], Decimal("0"), MONTHLY, 1, date(2024, 1, 1))

        occurrences = periods[0].income_occurrences
        assert [o.description for o in occurrences] == ["Gift", "Wages"]
        assert occurrences[0].is_recurring_instance is False
        assert occurrences[1].is_recurring_instance is True
        assert occurrences[1].occurrence_date == date(2024, 1, 28)

    def test_rounding_per_period(self):
        """Test that period totals are rounded half-up to cents."""
        incomes = [
            make_income(id=1, amount="0.005", day=date(2024, 1, 2)),
            make_income(id=2, amount="0.010", day=date(2024, 1, 3)),
        ]

        periods = project(incomes, [], Decimal("0"), MONTHLY, 1, date(2024, 1, 1))

        assert periods[0].income == Decimal("0.02")

    def test_negative_start_balance(self):
        """Test that a negative start balance carries through."""
        payment = make_payment(amount="10.00", day=date(2024, 1, 5))

        periods = project([], [payment], Decimal("-5"), MONTHLY, 1, date(2024, 1, 1))

        assert periods[0].running_balance == Decimal("-15.00")

    def test_empty_grid(self):
        """Test that no periods are produced for a zero count."""
        income = make_income(recurring=True)

        assert project([income], [], Decimal("100"), MONTHLY, 0, date(2024, 1, 1)) == []


class TestSummarize:
    """Tests for summarize function."""

    def test_totals(self):
        """Test summary totals over a projection."""
        income = make_income(amount="500.00", day=date(2024, 1, 15))
        payment = make_payment(
            amount="200.00", recurring=True, frequency="monthly", frequency_day=1
        )
        periods = project([income], [payment], Decimal("1000"), MONTHLY, 3, date(2024, 1, 1))

        summary = summarize(periods, Decimal("1000"))

        assert summary.total_income == Decimal("500.00")
        assert summary.total_expenses == Decimal("600.00")
        assert summary.net_balance == Decimal("-100.00")
        assert summary.start_balance == Decimal("1000.00")
        assert summary.end_balance == Decimal("900.00")

    def test_no_periods(self):
        """Test that the end balance equals the start balance with no periods."""
        summary = summarize([], Decimal("12.345"))

        assert summary.total_income == Decimal("0")
        assert summary.end_balance == Decimal("12.35")

    def test_to_cents(self):
        """Test half-up rounding."""
        assert to_cents(Decimal("2.675")) == Decimal("2.68")
        assert to_cents(Decimal("-2.675")) == Decimal("-2.68")
