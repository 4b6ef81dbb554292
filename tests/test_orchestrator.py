"""Tests for the add / edit / delete flows and the app factory."""

from datetime import date
from decimal import Decimal

import pytest

from finance_tracker.config import Settings, get_settings, validate_all_settings
from finance_tracker.models.transaction import (
    TransactionCategory,
    TransactionForm,
    TransactionKind,
)
from finance_tracker.orchestrator import TransactionFlow, create_app_components
from finance_tracker.services.storage import InMemoryStorage
from finance_tracker.store import TransactionStore
from finance_tracker.validation import (
    AMOUNT_ERROR,
    AMOUNT_PRECISION_ERROR,
    DESCRIPTION_ERROR,
)


def make_form(**overrides) -> TransactionForm:
    fields = dict(
        amount="40",
        date="2026-10-05",
        description="  Groceries  ",
        kind=TransactionKind.EXPENSE,
        category=TransactionCategory.FOOD_AND_DINING,
    )
    fields.update(overrides)
    return TransactionForm(**fields)


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def flow(storage):
    return TransactionFlow(TransactionStore(storage))


class TestSubmit:
    """Tests for TransactionFlow.submit."""

    def test_add(self, flow):
        """Test a valid form becomes a stored transaction."""
        result = flow.submit(make_form())

        assert result.ok
        transaction = result.transaction
        assert transaction.amount == Decimal("40")
        assert transaction.date == date(2026, 10, 5)
        assert transaction.description == "Groceries"
        assert transaction.category == TransactionCategory.FOOD_AND_DINING
        assert flow.store.all() == [transaction]

    def test_invalid_form_changes_nothing(self, storage, flow):
        """Test errors come back as data and nothing is stored."""
        result = flow.submit(make_form(amount="0", description=" "))

        assert not result.ok
        assert result.transaction is None
        assert result.errors == {
            "amount": AMOUNT_ERROR,
            "description": DESCRIPTION_ERROR,
        }
        assert flow.store.all() == []
        assert storage.write_count == 0

    def test_edit_keeps_identity(self, flow):
        """Test editing replaces fields but keeps id and created_at."""
        original = flow.submit(make_form()).transaction

        result = flow.submit(
            make_form(
                amount="1500",
                description="Salary",
                kind=TransactionKind.INCOME,
                category=TransactionCategory.INCOME,
            ),
            editing_id=original.id,
        )

        edited = result.transaction
        assert edited.id == original.id
        assert edited.created_at == original.created_at
        assert edited.amount == Decimal("1500")
        assert edited.kind == TransactionKind.INCOME
        assert flow.store.all() == [edited]

    def test_edit_missing_id_is_noop(self, flow):
        """Test editing a transaction that was deleted stores nothing."""
        result = flow.submit(make_form(), editing_id="gone")
        assert result.ok
        assert result.transaction is None
        assert flow.store.all() == []

    @pytest.mark.parametrize("amount", ["1e-400", "1e400", "12345678901234567890.12"])
    def test_unstorable_amount_keeps_saved_data(self, storage, flow, amount):
        """Test an amount JSON can't hold is rejected and earlier records still load."""
        kept = flow.submit(make_form()).transaction

        result = flow.submit(make_form(amount=amount))

        assert result.errors == {"amount": AMOUNT_PRECISION_ERROR}
        reloaded = TransactionStore(storage).load()
        assert [t.id for t in reloaded] == [kept.id]

    @pytest.mark.parametrize("amount", ["0.0001", "99999999999.99", "123456.789"])
    def test_edge_amounts_round_trip(self, storage, flow, amount):
        """Test accepted amounts come back from storage exactly as typed."""
        flow.submit(make_form(amount=amount))
        [reloaded] = TransactionStore(storage).load()
        assert reloaded.amount == Decimal(amount)

    def test_invalid_edit_leaves_record(self, flow):
        original = flow.submit(make_form()).transaction
        result = flow.submit(make_form(amount="abc"), editing_id=original.id)
        assert result.errors == {"amount": AMOUNT_ERROR}
        assert flow.store.get(original.id) == original


class TestPrefillAndDelete:
    """Tests for the edit prefill and delete flows."""

    def test_prefill(self, flow):
        """Test the edit form is filled from the stored record."""
        original = flow.submit(make_form(amount="12.50")).transaction
        form = flow.prefill(original.id)
        assert form == TransactionForm(
            amount="12.50",
            date="2026-10-05",
            description="Groceries",
            kind=TransactionKind.EXPENSE,
            category=TransactionCategory.FOOD_AND_DINING,
        )

    def test_prefill_resubmits_unchanged(self, flow):
        """Test submitting a prefilled form leaves the record as it was."""
        original = flow.submit(make_form(amount="12.5")).transaction
        edited = flow.submit(flow.prefill(original.id), editing_id=original.id).transaction
        assert edited == original

    def test_prefill_missing(self, flow):
        assert flow.prefill("nope") is None

    def test_delete(self, flow):
        """Test delete removes once and is a no-op after."""
        transaction = flow.submit(make_form()).transaction
        assert flow.delete(transaction.id) is True
        assert flow.delete(transaction.id) is False
        assert flow.list_transactions() == []


class TestListingAndDashboard:
    """Tests for list_transactions and dashboard."""

    def test_listing_newest_first(self, flow):
        flow.submit(make_form(date="2026-01-01", description="old"))
        flow.submit(make_form(date="2026-10-01", description="new"))
        assert [t.description for t in flow.list_transactions()] == ["new", "old"]

    def test_dashboard(self, flow):
        """Test the dashboard reflects the store after each change."""
        flow.submit(make_form(
            amount="100", date="2026-10-01", description="Pay",
            kind=TransactionKind.INCOME, category=TransactionCategory.INCOME,
        ))
        expense = flow.submit(make_form(date="2026-10-05")).transaction

        summary = flow.dashboard(today=date(2026, 10, 18))
        assert summary.current_month.net_income == Decimal("60")

        flow.delete(expense.id)
        summary = flow.dashboard(today=date(2026, 10, 18))
        assert summary.current_month.net_income == Decimal("100")
        assert summary.category_expenses == []


class TestCreateAppComponents:
    """Tests for the application factory."""

    def test_builds_and_loads_from_configured_file(self, tmp_path, monkeypatch):
        """Test the factory wires file storage and loads saved data."""
        monkeypatch.setenv("FINANCE_TRACKER_STORAGE_PATH", str(tmp_path / "ls.json"))
        monkeypatch.setenv("FINANCE_TRACKER_LOG_JSON", "false")

        flow, _ = create_app_components(Settings())
        flow.submit(make_form())

        _, reloaded = create_app_components(Settings())
        assert [t.description for t in reloaded.all()] == ["Groceries"]
        assert reloaded.key == "finance-transactions"

    def test_get_settings_is_cached(self):
        get_settings.cache_clear()
        assert get_settings() is get_settings()
        get_settings.cache_clear()

    def test_validate_all_settings_reports_bad_values(self, monkeypatch):
        """Test the startup check flags an invalid log level."""
        monkeypatch.setenv("FINANCE_TRACKER_LOG_LEVEL", "chatty")
        get_settings.cache_clear()

        status = validate_all_settings()

        assert status["storage"] is True
        assert status["app"] is False
        assert "Unknown log level" in status["app_error"]
        get_settings.cache_clear()
