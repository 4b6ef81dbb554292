"""
Transaction Form Validation

DESIGN DECISION: Every rule is checked independently and all errors come
back together, keyed by form field, so the form can show every problem
at once. Nothing here raises for bad input: errors are returned as data.

IMPORTANT: Validation NEVER silently fixes input. Trimming the description
happens when the Transaction is built, not here.
"""

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Optional

from finance_tracker.models.transaction import TransactionForm, is_storable_amount


AMOUNT_ERROR = "Amount must be greater than 0"
AMOUNT_PRECISION_ERROR = "Amount is too large or has too many digits"
DATE_REQUIRED_ERROR = "Date is required"
DATE_INVALID_ERROR = "Date must be a valid date"
DESCRIPTION_ERROR = "Description is required"
CATEGORY_ERROR = "Category is required"


def parse_amount(raw: str) -> Optional[Decimal]:
    """
    Parse a user-typed amount.

    Returns None for anything that is not a finite number.
    """
    text = (raw or "").strip()
    if not text:
        return None
    try:
        amount = Decimal(text)
    except InvalidOperation:
        return None
    if not amount.is_finite():
        return None
    return amount


def parse_date(raw: str) -> Optional[date]:
    """Parse an ISO YYYY-MM-DD date, None if it isn't one."""
    text = (raw or "").strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        return None


def validate_transaction_form(form: TransactionForm) -> dict[str, str]:
    """
    Check a submitted form.

    Returns a mapping of field name to error message.
    An empty mapping means the form can be turned into a Transaction.
    """
    errors: dict[str, str] = {}

    amount = parse_amount(form.amount)
    if amount is None or amount <= 0:
        errors["amount"] = AMOUNT_ERROR
    elif not is_storable_amount(amount):
        errors["amount"] = AMOUNT_PRECISION_ERROR

    if not form.date.strip():
        errors["date"] = DATE_REQUIRED_ERROR
    elif parse_date(form.date) is None:
        errors["date"] = DATE_INVALID_ERROR

    if not form.description.strip():
        errors["description"] = DESCRIPTION_ERROR

    if form.category is None:
        errors["category"] = CATEGORY_ERROR

    return errors
