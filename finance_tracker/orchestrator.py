"""
Main Orchestrator for the Finance Tracker

This module ties the components together and defines the flows the
presentation layer calls:
1. Submit (form → validate → build transaction → add or update → save)
2. Edit prefill (existing transaction → form)
3. Delete (id → remove → save)
4. Dashboard (store snapshot → aggregates)

DESIGN DECISION: The presentation layer never touches the store or the
validator directly. Everything it needs goes through TransactionFlow, so
the rules live in exactly one place.
"""

from datetime import date, datetime
from typing import Optional

from finance_tracker.audit import AuditLogger, configure_logging
from finance_tracker.config import Settings, get_settings
from finance_tracker.models.transaction import (
    DashboardSummary,
    SubmitResult,
    Transaction,
    TransactionForm,
)
from finance_tracker.queries import build_dashboard
from finance_tracker.services.storage import JsonFileStorage
from finance_tracker.store import TransactionStore
from finance_tracker.validation import (
    parse_amount,
    parse_date,
    validate_transaction_form,
)


class TransactionFlow:
    """
    Orchestrates the add / edit / delete flows.

    Flow:
    1. Form submitted → validate every field
    2. Errors → return them for inline display, change nothing
    3. Valid → build a Transaction and add it, or update the one being edited
    """

    def __init__(
        self,
        store: TransactionStore,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._store = store
        self._audit_logger = audit_logger

    @property
    def store(self) -> TransactionStore:
        return self._store

    def build_transaction(
        self,
        form: TransactionForm,
        existing: Optional[Transaction] = None,
    ) -> Transaction:
        """
        Turn a validated form into a Transaction.

        When editing, the existing record's id and created_at carry over.
        The form must already have passed validation.
        """
        fields = dict(
            amount=parse_amount(form.amount),
            date=parse_date(form.date),
            description=form.description.strip(),
            kind=form.kind,
            category=form.category,
        )
        if existing is not None:
            return Transaction(id=existing.id, created_at=existing.created_at, **fields)
        return Transaction(created_at=datetime.now(), **fields)

    def submit(
        self,
        form: TransactionForm,
        editing_id: Optional[str] = None,
    ) -> SubmitResult:
        """
        Handle the add/edit form.

        Args:
            form: The submitted payload
            editing_id: Id of the transaction being edited, None when adding

        Returns:
            SubmitResult with either the stored transaction or the field errors.
            Editing an id that no longer exists stores nothing.
        """
        errors = validate_transaction_form(form)
        if errors:
            if self._audit_logger:
                self._audit_logger.log_validation_failed(errors, editing_id)
            return SubmitResult(errors=errors)

        if editing_id is None:
            transaction = self._store.add(self.build_transaction(form))
            return SubmitResult(transaction=transaction)

        existing = self._store.get(editing_id)
        if existing is None:
            # Same as the store: a missing id is a no-op
            self._store.update(editing_id, self.build_transaction(form))
            return SubmitResult()

        updated = self._store.update(
            editing_id, self.build_transaction(form, existing=existing)
        )
        return SubmitResult(transaction=updated)

    def prefill(self, transaction_id: str) -> Optional[TransactionForm]:
        """Form values for editing an existing transaction."""
        transaction = self._store.get(transaction_id)
        if transaction is None:
            return None
        return TransactionForm.from_transaction(transaction)

    def delete(self, transaction_id: str) -> bool:
        return self._store.remove(transaction_id)

    def list_transactions(self) -> list[Transaction]:
        """Transactions in display order (newest date first)."""
        return self._store.sorted_for_display()

    def dashboard(self, today: Optional[date] = None) -> DashboardSummary:
        return build_dashboard(self._store.all(), today)


def create_app_components(
    settings: Optional[Settings] = None,
) -> tuple[TransactionFlow, TransactionStore]:
    """
    Factory function to create all application components.

    Configures logging, opens the JSON file storage and loads the
    saved transactions.

    Returns:
        (transaction_flow, transaction_store)
    """
    settings = settings or get_settings()
    app_settings = settings.app
    storage_settings = settings.storage

    configure_logging(
        level="DEBUG" if app_settings.debug_mode else app_settings.log_level,
        json_logs=app_settings.log_json,
    )

    audit_logger = AuditLogger()
    store = TransactionStore(
        storage=JsonFileStorage(storage_settings.path),
        key=storage_settings.key,
        audit_logger=audit_logger,
    )
    store.load()

    flow = TransactionFlow(store=store, audit_logger=audit_logger)
    return flow, store
