"""
Streamlit Frontend for the Finance Tracker

This is the page users interact with daily: summary cards, the last
twelve months of spending, spending by category, and the transaction list
with add / edit / delete.

DESIGN PRINCIPLES:
1. The page holds no rules; TransactionFlow does
2. Validation errors show next to the form, never as crashes
3. Every change is saved before the page re-renders
"""

from datetime import date
from typing import Optional

import streamlit as st

from finance_tracker.config import get_settings, validate_all_settings
from finance_tracker.models.transaction import (
    DashboardSummary,
    TransactionCategory,
    TransactionForm,
    TransactionKind,
)
from finance_tracker.orchestrator import TransactionFlow, create_app_components
from finance_tracker.queries import format_currency


# Page configuration
st.set_page_config(
    page_title="Personal Finance Tracker",
    page_icon="💰",
    layout="wide",
)


@st.cache_resource
def get_flow() -> TransactionFlow:
    """Create the flow once per server process (loads saved data)."""
    flow, _ = create_app_components()
    return flow


def main():
    """Main application entry point."""
    flow = get_flow()
    symbol = get_settings().app.currency_symbol

    if "editing_id" not in st.session_state:
        st.session_state.editing_id = None
    if "form_version" not in st.session_state:
        st.session_state.form_version = 0
    if "form_errors" not in st.session_state:
        st.session_state.form_errors = {}

    render_settings_status()

    st.title("💰 Personal Finance Tracker")
    st.markdown("Track your expenses and manage your budget with ease")

    summary = flow.dashboard()
    render_summary(summary, symbol)
    st.markdown("---")
    render_charts(summary)
    st.markdown("---")

    col1, col2 = st.columns([1, 2])
    with col1:
        render_form(flow)
    with col2:
        render_transactions(flow, symbol)


def render_settings_status():
    """Configuration status in the sidebar."""
    st.sidebar.title("⚙️ Settings")

    status = validate_all_settings()
    for name, key in [("Storage", "storage"), ("Application", "app")]:
        if status.get(key, False):
            st.sidebar.success(f"✅ {name} - OK")
        else:
            error = status.get(f"{key}_error", "Not configured")
            st.sidebar.error(f"❌ {name} - {error}")


def render_summary(summary: DashboardSummary, symbol: str):
    """Current-month income, expenses and net."""
    totals = summary.current_month

    col1, col2, col3 = st.columns(3)
    col1.metric("Total Income", format_currency(totals.total_income, symbol))
    col2.metric("Total Expenses", format_currency(totals.total_expenses, symbol))
    col3.metric("Net Income", format_currency(totals.net_income, symbol))


def render_charts(summary: DashboardSummary):
    """Monthly series and category breakdown."""
    col1, col2 = st.columns(2)
    with col1:
        st.subheader("Monthly Expenses")
        st.bar_chart(
            {
                "month": [row.month for row in summary.monthly_expenses],
                "amount": [float(row.amount) for row in summary.monthly_expenses],
            },
            x="month",
            y="amount",
        )
    with col2:
        st.subheader("Expenses by Category")
        if not summary.category_expenses:
            st.info("No expenses recorded yet.")
        else:
            st.table([
                {"Category": row.category.value, "Amount": float(row.amount)}
                for row in summary.category_expenses
            ])


def render_form(flow: TransactionFlow):
    """Add form, or edit form when a transaction is selected."""
    editing_id: Optional[str] = st.session_state.editing_id
    prefill = flow.prefill(editing_id) if editing_id else None
    if editing_id and prefill is None:
        # Deleted while being edited
        st.session_state.editing_id = editing_id = None
    form_values = prefill or TransactionForm()
    errors = st.session_state.form_errors

    st.subheader("Edit Transaction" if editing_id else "Add Transaction")

    # Widgets keep what was typed until a submit succeeds
    prefix = f"{editing_id or 'new'}-{st.session_state.form_version}"

    with st.form("transaction_form"):
        amount = st.text_input(
            "Amount", value=form_values.amount, key=f"{prefix}-amount"
        )
        if "amount" in errors:
            st.error(errors["amount"])

        date_value = st.text_input(
            "Date (YYYY-MM-DD)",
            value=form_values.date or date.today().isoformat(),
            key=f"{prefix}-date",
        )
        if "date" in errors:
            st.error(errors["date"])

        description = st.text_area(
            "Description", value=form_values.description, key=f"{prefix}-description"
        )
        if "description" in errors:
            st.error(errors["description"])

        kinds = list(TransactionKind)
        kind = st.selectbox(
            "Type",
            options=kinds,
            index=kinds.index(form_values.kind),
            format_func=lambda k: k.value.title(),
            key=f"{prefix}-kind",
        )

        categories: list[Optional[TransactionCategory]] = [None, *TransactionCategory]
        category = st.selectbox(
            "Category",
            options=categories,
            index=categories.index(form_values.category),
            format_func=lambda c: "Select a category" if c is None else c.value,
            key=f"{prefix}-category",
        )
        if "category" in errors:
            st.error(errors["category"])

        submitted = st.form_submit_button(
            "Update Transaction" if editing_id else "Add Transaction",
            type="primary",
        )

    if editing_id and st.button("Cancel edit"):
        st.session_state.editing_id = None
        st.session_state.form_errors = {}
        st.rerun()

    if submitted:
        result = flow.submit(
            TransactionForm(
                amount=amount,
                date=date_value,
                description=description,
                kind=kind,
                category=category,
            ),
            editing_id=editing_id,
        )
        st.session_state.form_errors = result.errors
        if result.ok:
            st.session_state.editing_id = None
            st.session_state.form_version += 1
        st.rerun()


def render_transactions(flow: TransactionFlow, symbol: str):
    """Transaction list, newest first."""
    st.subheader("Recent Transactions")

    transactions = flow.list_transactions()
    if not transactions:
        st.info("No transactions yet. Add your first transaction to get started!")
        return

    for transaction in transactions:
        sign = "+" if transaction.is_income else "-"
        col1, col2, col3, col4 = st.columns([4, 2, 1, 1])
        col1.markdown(
            f"**{transaction.description}**  \n"
            f"{transaction.category.value} · {transaction.date.strftime('%b %d, %Y')}"
        )
        col2.markdown(f"{sign}{format_currency(transaction.amount, symbol)}")
        if col3.button("✏️", key=f"edit-{transaction.id}", help="Edit"):
            st.session_state.editing_id = transaction.id
            st.session_state.form_errors = {}
            st.rerun()
        if col4.button("🗑️", key=f"delete-{transaction.id}", help="Delete"):
            flow.delete(transaction.id)
            if st.session_state.editing_id == transaction.id:
                st.session_state.editing_id = None
            st.rerun()


if __name__ == "__main__":
    main()
