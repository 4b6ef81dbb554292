"""Form validation package."""

from finance_tracker.validation.validator import (
    AMOUNT_ERROR,
    AMOUNT_PRECISION_ERROR,
    CATEGORY_ERROR,
    DATE_INVALID_ERROR,
    DATE_REQUIRED_ERROR,
    DESCRIPTION_ERROR,
    parse_amount,
    parse_date,
    validate_transaction_form,
)

__all__ = [
    "AMOUNT_ERROR",
    "AMOUNT_PRECISION_ERROR",
    "CATEGORY_ERROR",
    "DATE_INVALID_ERROR",
    "DATE_REQUIRED_ERROR",
    "DESCRIPTION_ERROR",
    "parse_amount",
    "parse_date",
    "validate_transaction_form",
]
