"""Aggregation package."""

from finance_tracker.queries.aggregator import (
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

__all__ = [
    "build_dashboard",
    "category_expense_breakdown",
    "current_month_totals",
    "format_currency",
    "month_bounds",
    "month_label",
    "monthly_expense_series",
    "round_to_cents",
    "trailing_months",
]
