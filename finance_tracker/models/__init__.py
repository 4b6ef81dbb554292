"""
Data Models Package

This package contains all Pydantic models used in the Finance Tracker.
All data flowing through the system must conform to these schemas.
"""

from finance_tracker.models.transaction import (
    CategoryExpense,
    DashboardSummary,
    MonthlyExpense,
    MonthlyTotals,
    SubmitResult,
    Transaction,
    TransactionCategory,
    TransactionForm,
    TransactionKind,
    is_storable_amount,
    new_transaction_id,
)
from finance_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Transaction models
    "CategoryExpense",
    "DashboardSummary",
    "MonthlyExpense",
    "MonthlyTotals",
    "SubmitResult",
    "Transaction",
    "TransactionCategory",
    "TransactionForm",
    "TransactionKind",
    "is_storable_amount",
    "new_transaction_id",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
