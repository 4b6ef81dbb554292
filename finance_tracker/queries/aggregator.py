"""
Aggregation Engine

DESIGN DECISION: Every summary is a pure function of the full transaction
list. Nothing is cached or updated incrementally; callers recompute after
each change to the store.

Rounding: the monthly series and the category breakdown round each bucket
to cents, half away from zero (ROUND_HALF_UP on positive sums). The
current-month totals keep full precision and are only rounded when
formatted for display.
"""

import calendar
from collections.abc import Iterable
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from finance_tracker.models.transaction import (
    CategoryExpense,
    DashboardSummary,
    MonthlyExpense,
    MonthlyTotals,
    Transaction,
    TransactionCategory,
)


CENTS = Decimal("0.01")
MONTHS_IN_SERIES = 12

# Labels stay English whatever the process locale
MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def round_to_cents(amount: Decimal) -> Decimal:
    """Round to two decimal places, halves away from zero."""
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def month_label(year: int, month: int) -> str:
    """Bucket label such as 'Oct 2026'."""
    return f"{MONTH_ABBREVIATIONS[month - 1]} {year}"


def month_bounds(today: date) -> tuple[date, date]:
    """First and last day of the month containing `today`."""
    last_day = calendar.monthrange(today.year, today.month)[1]
    return today.replace(day=1), today.replace(day=last_day)


def trailing_months(today: date, count: int = MONTHS_IN_SERIES) -> list[tuple[int, int]]:
    """
    (year, month) pairs for the `count` months ending at today's month.

    Oldest first; the current month is last.
    """
    months = []
    for offset in range(count - 1, -1, -1):
        index = today.year * 12 + (today.month - 1) - offset
        months.append((index // 12, index % 12 + 1))
    return months


def monthly_expense_series(
    transactions: Iterable[Transaction],
    today: Optional[date] = None,
) -> list[MonthlyExpense]:
    """
    Expense totals for each of the last twelve calendar months.

    Always twelve rows, oldest first. Expenses outside the window are
    ignored; months without expenses report 0.
    """
    today = today or date.today()
    buckets: dict[tuple[int, int], Decimal] = {
        month: Decimal("0") for month in trailing_months(today)
    }

    for transaction in transactions:
        if not transaction.is_expense:
            continue
        key = (transaction.date.year, transaction.date.month)
        if key in buckets:
            buckets[key] += transaction.amount

    return [
        MonthlyExpense(month=month_label(year, month), amount=round_to_cents(total))
        for (year, month), total in buckets.items()
    ]


def category_expense_breakdown(
    transactions: Iterable[Transaction],
) -> list[CategoryExpense]:
    """
    Expense totals per category.

    Only categories with at least one expense appear, in the order they
    are first seen.
    """
    totals: dict[TransactionCategory, Decimal] = {}

    for transaction in transactions:
        if not transaction.is_expense:
            continue
        totals[transaction.category] = (
            totals.get(transaction.category, Decimal("0")) + transaction.amount
        )

    return [
        CategoryExpense(category=category, amount=round_to_cents(total))
        for category, total in totals.items()
    ]


def current_month_totals(
    transactions: Iterable[Transaction],
    today: Optional[date] = None,
) -> MonthlyTotals:
    """Income, expenses and net for the calendar month containing today."""
    today = today or date.today()
    start, end = month_bounds(today)

    totals = MonthlyTotals()
    for transaction in transactions:
        if not (start <= transaction.date <= end):
            continue
        if transaction.is_income:
            totals.total_income += transaction.amount
        elif transaction.is_expense:
            totals.total_expenses += transaction.amount

    return totals


def build_dashboard(
    transactions: Iterable[Transaction],
    today: Optional[date] = None,
) -> DashboardSummary:
    """All three summaries over the same snapshot of transactions."""
    snapshot = list(transactions)
    today = today or date.today()
    return DashboardSummary(
        monthly_expenses=monthly_expense_series(snapshot, today),
        category_expenses=category_expense_breakdown(snapshot),
        current_month=current_month_totals(snapshot, today),
    )


def format_currency(amount: Decimal, symbol: str = "$") -> str:
    """
    Render an amount for display, e.g. '$1,234.50' or '-$60.00'.

    This is the only place the full-precision totals get rounded.
    """
    rounded = round_to_cents(amount)
    sign = "-" if rounded < 0 else ""
    return f"{sign}{symbol}{abs(rounded):,.2f}"
