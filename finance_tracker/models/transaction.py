"""
Core Data Models for the Finance Tracker

These models define the schemas for every transaction flowing through the system.
They are designed to:
1. Make invalid kinds and categories unrepresentable
2. Serialize to the exact persisted JSON shape
3. Keep form input (raw strings) separate from stored records

DESIGN DECISION: The form payload is its own model. Form fields arrive as
strings and are only converted into a Transaction after validation passes.
"""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import uuid4

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class TransactionKind(str, Enum):
    """Whether money came in or went out."""
    INCOME = "income"
    EXPENSE = "expense"


class TransactionCategory(str, Enum):
    """
    Supported transaction categories.

    The values are the labels shown to the user and stored verbatim.
    """
    FOOD_AND_DINING = "Food & Dining"
    TRANSPORTATION = "Transportation"
    SHOPPING = "Shopping"
    ENTERTAINMENT = "Entertainment"
    BILLS_AND_UTILITIES = "Bills & Utilities"
    HEALTHCARE = "Healthcare"
    EDUCATION = "Education"
    TRAVEL = "Travel"
    INCOME = "Income"
    OTHER = "Other"


def new_transaction_id() -> str:
    """Fresh unique token for a new transaction."""
    return uuid4().hex


def is_storable_amount(amount: Decimal) -> bool:
    """
    True if the amount survives being written as a JSON number.

    Amounts are persisted as floats, so only values that a float
    reproduces exactly (through its shortest repr) read back unchanged.
    Tiny values would collapse to 0, huge ones overflow to null, and long
    ones lose digits.
    """
    if not amount.is_finite():
        return False
    return Decimal(repr(float(amount))) == amount


# =============================================================================
# CORE TRANSACTION MODEL
# =============================================================================

class Transaction(BaseModel):
    """
    A recorded income or expense.

    CRITICAL: `id` and `created_at` are assigned once at creation.
    Edits replace every other field but never these two.
    """
    model_config = ConfigDict(
        str_strip_whitespace=True,
        populate_by_name=True,
    )

    # Identity
    id: str = Field(
        default_factory=new_transaction_id,
        min_length=1,
        description="Unique transaction ID"
    )

    amount: Decimal = Field(
        ...,
        gt=0,
        description="Amount in currency units"
    )
    date: date
    description: str = Field(
        ...,
        min_length=1,
        description="Free-text label"
    )
    # Older saved data used "type" for this field
    kind: TransactionKind = Field(
        ...,
        validation_alias=AliasChoices("kind", "type"),
        description="Income or expense"
    )
    category: TransactionCategory = Field(
        ...,
        description="Transaction category"
    )

    # Provenance only, not used for ordering
    created_at: datetime = Field(
        default_factory=datetime.now,
        validation_alias=AliasChoices("createdAt", "created_at"),
        serialization_alias="createdAt",
        description="When the transaction was first recorded"
    )

    @field_validator("amount")
    @classmethod
    def check_amount_storable(cls, v: Decimal) -> Decimal:
        if not is_storable_amount(v):
            raise ValueError("Amount cannot be stored exactly as a JSON number")
        return v

    @field_serializer("amount", when_used="json")
    def serialize_amount(self, amount: Decimal) -> float:
        """Store amounts as JSON numbers."""
        return float(amount)

    @property
    def is_expense(self) -> bool:
        return self.kind == TransactionKind.EXPENSE

    @property
    def is_income(self) -> bool:
        return self.kind == TransactionKind.INCOME

    def to_storage_dict(self) -> dict:
        """Convert to the persisted JSON-compatible shape."""
        return self.model_dump(mode="json", by_alias=True)


class TransactionForm(BaseModel):
    """
    Raw form payload submitted on create or edit.

    Everything the user types stays a string here; `kind` and
    `category` are chosen from fixed options so they are already typed.
    """

    amount: str = ""
    date: str = ""
    description: str = ""
    kind: TransactionKind = TransactionKind.EXPENSE
    category: Optional[TransactionCategory] = None

    @classmethod
    def from_transaction(cls, transaction: Transaction) -> "TransactionForm":
        """Pre-fill the form from an existing record (the Edit flow)."""
        return cls(
            amount=format(transaction.amount, "f"),
            date=transaction.date.isoformat(),
            description=transaction.description,
            kind=transaction.kind,
            category=transaction.category,
        )


# =============================================================================
# AGGREGATION MODELS
# =============================================================================

class MonthlyExpense(BaseModel):
    """One bucket of the trailing twelve-month expense series."""

    month: str = Field(
        ...,
        description="Month label, e.g. 'Oct 2026'"
    )
    amount: Decimal = Field(
        default=Decimal("0"),
        description="Expense total rounded to cents"
    )


class CategoryExpense(BaseModel):
    """Expense total for one category."""

    category: TransactionCategory
    amount: Decimal = Field(
        ...,
        description="Expense total rounded to cents"
    )


class MonthlyTotals(BaseModel):
    """
    Income and expense totals for the current calendar month.

    Values keep full precision; rounding happens only when displayed.
    """

    total_income: Decimal = Decimal("0")
    total_expenses: Decimal = Decimal("0")

    @property
    def net_income(self) -> Decimal:
        return self.total_income - self.total_expenses


class DashboardSummary(BaseModel):
    """Everything the dashboard needs, computed in one pass over the store."""

    monthly_expenses: list[MonthlyExpense] = Field(default_factory=list)
    category_expenses: list[CategoryExpense] = Field(default_factory=list)
    current_month: MonthlyTotals = Field(default_factory=MonthlyTotals)


class SubmitResult(BaseModel):
    """Outcome of submitting the add/edit form."""

    transaction: Optional[Transaction] = None
    errors: dict[str, str] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors
