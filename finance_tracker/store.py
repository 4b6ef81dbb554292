"""
Transaction Store

Owns the in-memory transaction collection and mirrors it to a single slot
of local key/value storage.

DESIGN DECISION: Persistence is an explicit `save()` call at the end of each
mutation, not a hidden change hook. The whole collection is rewritten every
time; there are no partial writes.

GUARANTEES:
- Loading never fails: missing or unreadable data means an empty collection
- Saving never raises: failures are logged and reported as False
- The in-memory collection stays the source of truth for the session
"""

from typing import Optional

from pydantic import TypeAdapter, ValidationError

from finance_tracker.audit import AuditLogger
from finance_tracker.config import DEFAULT_STORAGE_KEY
from finance_tracker.models.transaction import Transaction
from finance_tracker.services.storage import KeyValueStorageInterface, StorageError


_TRANSACTION_LIST = TypeAdapter(list[Transaction])

# Fields an edit may change
EDITABLE_FIELDS = ("amount", "date", "description", "kind", "category")


class DuplicateTransactionError(Exception):
    """A transaction with this id is already in the store."""
    pass


class TransactionStore:
    """
    In-memory transaction collection backed by key/value storage.

    Insertion order is kept; callers sort for display.
    """

    def __init__(
        self,
        storage: KeyValueStorageInterface,
        key: str = DEFAULT_STORAGE_KEY,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._key = key
        self._audit_logger = audit_logger or AuditLogger()
        self._transactions: list[Transaction] = []

    @property
    def key(self) -> str:
        return self._key

    def __len__(self) -> int:
        return len(self._transactions)

    # =========================================================================
    # PERSISTENCE
    # =========================================================================

    def load(self) -> list[Transaction]:
        """
        Replace the in-memory collection with what storage holds.

        Anything unreadable is treated as "no data".
        """
        self._transactions = self._read()
        return self.all()

    def _read(self) -> list[Transaction]:
        try:
            raw = self._storage.get_item(self._key)
        except StorageError as e:
            self._audit_logger.log_load_failed(self._key, str(e))
            return []

        if raw is None:
            return []

        try:
            loaded = _TRANSACTION_LIST.validate_json(raw)
        except ValidationError as e:
            self._audit_logger.log_load_failed(
                self._key, f"{e.error_count()} validation errors"
            )
            return []

        transactions = []
        seen = set()
        for transaction in loaded:
            if transaction.id in seen:
                continue
            seen.add(transaction.id)
            transactions.append(transaction)

        if len(transactions) != len(loaded):
            self._audit_logger.log_load_failed(
                self._key,
                f"dropped {len(loaded) - len(transactions)} records with repeated ids",
            )

        self._audit_logger.log_transactions_loaded(self._key, len(transactions))
        return transactions

    def save(self) -> bool:
        """
        Write the whole collection to storage.

        Returns True if the write reached storage.
        """
        payload = _TRANSACTION_LIST.dump_json(
            self._transactions, by_alias=True
        ).decode("utf-8")
        try:
            self._storage.set_item(self._key, payload)
        except StorageError as e:
            self._audit_logger.log_save_failed(self._key, str(e))
            return False
        return True

    # =========================================================================
    # QUERIES
    # =========================================================================

    def all(self) -> list[Transaction]:
        """Every transaction, in insertion order."""
        return list(self._transactions)

    def get(self, transaction_id: str) -> Optional[Transaction]:
        for transaction in self._transactions:
            if transaction.id == transaction_id:
                return transaction
        return None

    def sorted_for_display(self) -> list[Transaction]:
        """Newest date first; same-date records keep insertion order."""
        return sorted(self._transactions, key=lambda t: t.date, reverse=True)

    # =========================================================================
    # MUTATIONS
    # =========================================================================

    def add(self, transaction: Transaction) -> Transaction:
        """Append a new transaction and persist."""
        if self.get(transaction.id) is not None:
            raise DuplicateTransactionError(
                f"Transaction already exists: {transaction.id}"
            )

        self._transactions.append(transaction)
        self._audit_logger.log_transaction_added(
            transaction_id=transaction.id,
            kind=transaction.kind.value,
            amount=str(transaction.amount),
        )
        self.save()
        return transaction

    def update(
        self,
        transaction_id: str,
        transaction: Transaction,
    ) -> Optional[Transaction]:
        """
        Replace the transaction with this id, keeping its id and created_at.

        Returns the stored record, or None if no transaction has this id.
        """
        for index, existing in enumerate(self._transactions):
            if existing.id != transaction_id:
                continue

            changes = {field: getattr(transaction, field) for field in EDITABLE_FIELDS}
            updated = existing.model_copy(update=changes)
            self._transactions[index] = updated

            self._audit_logger.log_transaction_updated(
                transaction_id=transaction_id,
                changed_fields=[
                    field for field in EDITABLE_FIELDS
                    if getattr(existing, field) != getattr(updated, field)
                ],
            )
            self.save()
            return updated

        self.save()
        return None

    def remove(self, transaction_id: str) -> bool:
        """
        Delete the transaction with this id.

        Removing an id that isn't there is a no-op.
        """
        remaining = [t for t in self._transactions if t.id != transaction_id]
        removed = len(remaining) != len(self._transactions)

        self._transactions = remaining
        if removed:
            self._audit_logger.log_transaction_deleted(transaction_id)
        self.save()
        return removed
