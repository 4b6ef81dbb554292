"""Tests for the aggregation functions."""

from datetime import date
from decimal import Decimal

import pytest

from finance_tracker.models.transaction import (
    Transaction,
    TransactionCategory,
    TransactionKind,
)
from finance_tracker.queries import (
    build_dashboard,
    category_expense_breakdown,
    current_month_totals,
    format_currency,
    month_bounds,
    month_label,
    monthly_expense_series,
    round_to_cents,
    trailing_months,
)


TODAY = date(2026, 10, 18)


def expense(amount, on, category=TransactionCategory.FOOD_AND_DINING) -> Transaction:
    return Transaction(
        amount=Decimal(amount),
        date=on,
        description="expense",
        kind=TransactionKind.EXPENSE,
        category=category,
    )


def income(amount, on) -> Transaction:
    return Transaction(
        amount=Decimal(amount),
        date=on,
        description="income",
        kind=TransactionKind.INCOME,
        category=TransactionCategory.INCOME,
    )


class TestMonthlyExpenseSeries:
    """Tests for monthly_expense_series."""

    def test_empty_has_twelve_zero_buckets(self):
        """Test the series shape with no transactions at all."""
        series = monthly_expense_series([], today=TODAY)
        assert len(series) == 12
        assert all(row.amount == 0 for row in series)

    def test_window_oldest_first(self):
        """Test the labels span the trailing twelve months ending now."""
        labels = [row.month for row in monthly_expense_series([], today=TODAY)]
        assert labels[0] == "Nov 2025"
        assert labels[-1] == "Oct 2026"
        assert len(set(labels)) == 12

    def test_window_crosses_year_boundary(self):
        """Test month arithmetic in January."""
        labels = [row.month for row in monthly_expense_series([], today=date(2026, 1, 31))]
        assert labels[0] == "Feb 2025"
        assert labels[-2] == "Dec 2025"
        assert labels[-1] == "Jan 2026"

    def test_sums_expenses_by_month(self):
        """Test matching expenses are summed into their month."""
        series = monthly_expense_series(
            [
                expense("10.10", date(2026, 10, 1)),
                expense("5.05", date(2026, 10, 31)),
                expense("7", date(2025, 11, 30)),
            ],
            today=TODAY,
        )
        by_month = {row.month: row.amount for row in series}
        assert by_month["Oct 2026"] == Decimal("15.15")
        assert by_month["Nov 2025"] == Decimal("7.00")
        assert by_month["Sep 2026"] == 0

    def test_income_and_out_of_window_ignored(self):
        """Test only in-window expenses count."""
        series = monthly_expense_series(
            [
                income("1000", date(2026, 10, 1)),
                expense("50", date(2025, 10, 31)),
                expense("60", date(2026, 11, 1)),
                expense("70", date(2024, 10, 5)),
            ],
            today=TODAY,
        )
        assert all(row.amount == 0 for row in series)

    def test_always_twelve_rows(self):
        """Test the row count does not depend on the data."""
        many = [expense("1", date(2026, m, 1)) for m in range(1, 11)]
        assert len(monthly_expense_series(many, today=TODAY)) == 12


class TestCategoryExpenseBreakdown:
    """Tests for category_expense_breakdown."""

    def test_empty(self):
        assert category_expense_breakdown([]) == []

    def test_groups_by_category_in_first_seen_order(self):
        """Test sums per category, ordered by first appearance."""
        rows = category_expense_breakdown([
            expense("20", date(2026, 10, 1), TransactionCategory.TRAVEL),
            expense("10", date(2025, 1, 1), TransactionCategory.FOOD_AND_DINING),
            expense("5.5", date(2026, 3, 1), TransactionCategory.TRAVEL),
        ])
        assert [(r.category, r.amount) for r in rows] == [
            (TransactionCategory.TRAVEL, Decimal("25.50")),
            (TransactionCategory.FOOD_AND_DINING, Decimal("10.00")),
        ]

    def test_categories_without_expenses_absent(self):
        """Test income-only categories never show up, not even as zero."""
        rows = category_expense_breakdown([
            income("100", date(2026, 10, 1)),
            expense("40", date(2026, 10, 5)),
        ])
        assert [r.category for r in rows] == [TransactionCategory.FOOD_AND_DINING]
        assert all(r.amount != 0 for r in rows)

    def test_not_limited_to_a_time_window(self):
        """Test all expenses count regardless of date."""
        rows = category_expense_breakdown([expense("3", date(2001, 1, 1))])
        assert rows[0].amount == Decimal("3.00")


class TestCurrentMonthTotals:
    """Tests for current_month_totals."""

    def test_example_scenario(self):
        """Test income 100 and expense 40 give net 60."""
        totals = current_month_totals(
            [
                income("100", date(2026, 10, 1)),
                expense("40", date(2026, 10, 5)),
            ],
            today=TODAY,
        )
        assert totals.total_income == Decimal("100")
        assert totals.total_expenses == Decimal("40")
        assert totals.net_income == Decimal("60")

    def test_month_edges_inclusive(self):
        """Test first and last day count, neighbours don't."""
        totals = current_month_totals(
            [
                expense("1", date(2026, 10, 1)),
                expense("2", date(2026, 10, 31)),
                expense("4", date(2026, 9, 30)),
                expense("8", date(2026, 11, 1)),
                expense("16", date(2025, 10, 15)),
            ],
            today=TODAY,
        )
        assert totals.total_expenses == Decimal("3")

    def test_full_precision(self):
        """Test the totals are not rounded."""
        totals = current_month_totals(
            [expense("50.005", date(2026, 10, 2)), expense("0.001", date(2026, 10, 3))],
            today=TODAY,
        )
        assert totals.total_expenses == Decimal("50.006")

    def test_negative_net(self):
        totals = current_month_totals([expense("12.34", TODAY)], today=TODAY)
        assert totals.net_income == Decimal("-12.34")

    def test_february_leap_year(self):
        """Test the month end for a leap February."""
        assert month_bounds(date(2028, 2, 10)) == (date(2028, 2, 1), date(2028, 2, 29))


class TestRounding:
    """Tests that one rounding rule applies to every rounded aggregate."""

    def test_half_rounds_up(self):
        assert round_to_cents(Decimal("50.005")) == Decimal("50.01")
        assert round_to_cents(Decimal("50.004")) == Decimal("50.00")

    def test_rule_is_uniform_across_aggregates(self):
        """Test 50.005 rounds the same in the monthly and category views."""
        transactions = [expense("50.005", date(2026, 10, 3))]
        monthly = {r.month: r.amount for r in monthly_expense_series(transactions, today=TODAY)}
        [category] = category_expense_breakdown(transactions)
        assert monthly["Oct 2026"] == Decimal("50.01")
        assert category.amount == Decimal("50.01")

    def test_rounding_applies_to_the_sum(self):
        """Test buckets round after summing, not per transaction."""
        transactions = [
            expense("0.004", date(2026, 10, 1)),
            expense("0.004", date(2026, 10, 2)),
        ]
        [category] = category_expense_breakdown(transactions)
        assert category.amount == Decimal("0.01")


class TestHelpers:
    """Tests for the smaller helpers."""

    def test_trailing_months(self):
        months = trailing_months(date(2026, 3, 15), count=4)
        assert months == [(2025, 12), (2026, 1), (2026, 2), (2026, 3)]

    @pytest.mark.parametrize("amount, expected", [
        (Decimal("0"), "$0.00"),
        (Decimal("1234.5"), "$1,234.50"),
        (Decimal("-60"), "-$60.00"),
        (Decimal("50.005"), "$50.01"),
    ])
    def test_format_currency(self, amount, expected):
        assert format_currency(amount) == expected

    def test_build_dashboard(self):
        """Test the dashboard bundles all three views."""
        summary = build_dashboard(
            [income("100", date(2026, 10, 1)), expense("40", date(2026, 10, 5))],
            today=TODAY,
        )
        assert len(summary.monthly_expenses) == 12
        assert summary.monthly_expenses[-1].amount == Decimal("40.00")
        assert [r.category for r in summary.category_expenses] == [
            TransactionCategory.FOOD_AND_DINING,
        ]
        assert summary.current_month.net_income == Decimal("60")

    def test_month_labels_are_fixed_english(self):
        """Test every month gets its English three-letter label."""
        labels = [month_label(2026, m) for m in range(1, 13)]
        assert labels == [
            "Jan 2026", "Feb 2026", "Mar 2026", "Apr 2026", "May 2026", "Jun 2026",
            "Jul 2026", "Aug 2026", "Sep 2026", "Oct 2026", "Nov 2026", "Dec 2026",
        ]
