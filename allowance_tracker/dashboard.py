"""Allowance Tracker dashboard - Streamlit entry point.

Run with::

    streamlit run allowance_tracker/dashboard.py

The ledger store is created once per browser session and kept in
``st.session_state``; every widget callback goes through it so the slot file
is updated before the page reruns.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Callable, Optional

import streamlit as st

# Handle both package and direct (streamlit run) execution
try:
    from . import config
    from .exceptions import InvalidAmount, InvalidDate
    from .expense_filter import FILTER_LABELS, FILTER_MODES, filter_expenses
    from .formatting import (
        category_icon,
        category_label,
        format_currency,
        format_date,
        format_long_date,
        format_percentage,
        rounded_percentage,
    )
    from .ledger_analytics import category_breakdown, daily_spending
    from .ledger_storage import LedgerStorage
    from .ledger_store import LedgerStore
    from .metrics import DashboardMetrics, compute_metrics
    from .models import CATEGORIES, DEFAULT_CATEGORY
    from .visualization import create_category_pie, create_daily_spending_chart
except ImportError:
    import sys
    from pathlib import Path
    project_root = Path(__file__).resolve().parent.parent
    if str(project_root) not in sys.path:
        sys.path.insert(0, str(project_root))
    from allowance_tracker import config
    from allowance_tracker.exceptions import InvalidAmount, InvalidDate
    from allowance_tracker.expense_filter import FILTER_LABELS, FILTER_MODES, filter_expenses
    from allowance_tracker.formatting import (
        category_icon,
        category_label,
        format_currency,
        format_date,
        format_long_date,
        format_percentage,
        rounded_percentage,
    )
    from allowance_tracker.ledger_analytics import category_breakdown, daily_spending
    from allowance_tracker.ledger_storage import LedgerStorage
    from allowance_tracker.ledger_store import LedgerStore
    from allowance_tracker.metrics import DashboardMetrics, compute_metrics
    from allowance_tracker.models import CATEGORIES, DEFAULT_CATEGORY
    from allowance_tracker.visualization import create_category_pie, create_daily_spending_chart

STORE_KEY = 'ledger_store'
STORAGE_KEY = 'ledger_storage'
PENDING_DELETE_KEY = 'pending_delete_id'
FILTER_KEY = 'expense_filter'


def _storage_factory() -> LedgerStorage:
    return LedgerStorage()


def _get_store() -> LedgerStore:
    """Return the session's store, opening it from storage on first use."""
    if STORE_KEY not in st.session_state:
        storage = _storage_factory()
        st.session_state[STORAGE_KEY] = storage
        st.session_state[STORE_KEY] = LedgerStore.open(storage)
    return st.session_state[STORE_KEY]


def _reset_store() -> None:
    """Clear the persisted slot and start the session from an empty ledger."""
    storage = st.session_state.get(STORAGE_KEY) or _storage_factory()
    storage.clear()
    st.session_state[STORAGE_KEY] = storage
    st.session_state[STORE_KEY] = LedgerStore.open(storage)
    st.session_state.pop(PENDING_DELETE_KEY, None)


def _apply(action: Callable[..., Any], *args: Any) -> Optional[str]:
    """Run a store mutation; return a user-facing message if it was rejected."""
    try:
        action(*args)
    except InvalidAmount:
        return "Please enter an amount greater than zero."
    except InvalidDate:
        return "Please pick a date for the expense."
    return None


def _request_delete(expense_id: int) -> None:
    st.session_state[PENDING_DELETE_KEY] = expense_id


def _cancel_delete() -> None:
    st.session_state.pop(PENDING_DELETE_KEY, None)


def _confirm_delete(store: LedgerStore) -> bool:
    expense_id = st.session_state.pop(PENDING_DELETE_KEY, None)
    if expense_id is None:
        return False
    return store.remove_expense(expense_id)


def _rerun() -> None:
    rerun = getattr(st, 'rerun', None) or getattr(st, 'experimental_rerun', None)
    if rerun is not None:
        rerun()


def render_header(today: date) -> None:
    """Render the page title and today's date."""
    col1, col2 = st.columns([3, 2])
    with col1:
        st.title("💰 Allowance Tracker")
        st.caption("Keep your monthly allowance on track")
    with col2:
        st.markdown(f"#### {format_long_date(today)}")


def render_health_indicator(metrics: DashboardMetrics) -> None:
    color = metrics.health.color
    st.markdown(
        f"<div style='display:flex;align-items:center;gap:0.5rem;'>"
        f"<span style='width:12px;height:12px;border-radius:50%;background:{color};"
        f"box-shadow:0 0 10px {color};display:inline-block;'></span>"
        f"<span>{metrics.health.text}</span></div>",
        unsafe_allow_html=True,
    )


def render_summary(metrics: DashboardMetrics) -> None:
    """Render balance, allowance, spent and days-left metrics."""
    st.subheader("📊 This Month")
    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("Current Balance", format_currency(metrics.balance))
    with col2:
        st.metric("Total Allowance", format_currency(metrics.total_allowance))
    with col3:
        st.metric("Total Spent", format_currency(metrics.total_spent))
    with col4:
        st.metric(
            "Days Left",
            metrics.remaining_days,
            help=f"Daily budget: {format_currency(metrics.daily_budget)}",
        )
    render_health_indicator(metrics)


def render_savings(metrics: DashboardMetrics) -> None:
    """Render the savings goal progress bar."""
    st.subheader("🎯 Savings Goal")
    savings = metrics.savings
    col1, col2 = st.columns([4, 1])
    with col1:
        st.markdown(savings.text)
    with col2:
        st.markdown(f"**{format_percentage(savings.percentage)}**")
    st.progress(rounded_percentage(savings.percentage))


def render_settings(store: LedgerStore) -> None:
    """Sidebar forms for the allowance and the savings goal."""
    record = store.snapshot()
    st.sidebar.subheader("⚙️ Settings")

    with st.sidebar.form('allowance-form', clear_on_submit=False):
        allowance = st.number_input(
            "Monthly allowance",
            min_value=0.0,
            value=float(record.allowance),
            step=100.0,
        )
        if st.form_submit_button("Save allowance"):
            error = _apply(store.set_allowance, allowance)
            if error:
                st.error(error)
            else:
                _rerun()

    with st.sidebar.form('goal-form', clear_on_submit=False):
        goal = st.number_input(
            "Savings goal",
            min_value=0.0,
            value=float(record.goal),
            step=100.0,
        )
        if st.form_submit_button("Save goal"):
            error = _apply(store.set_goal, goal)
            if error:
                st.error(error)
            else:
                _rerun()

    with st.sidebar.expander("Danger zone"):
        confirm = st.checkbox("I understand all data will be erased")
        if st.button("🗑️ Reset all data", disabled=not confirm):
            _reset_store()
            _rerun()


def render_expense_form(store: LedgerStore, today: date) -> None:
    """Form to log a new expense; the date defaults to today."""
    st.subheader("➕ Add Expense")
    with st.form('expense-form', clear_on_submit=True):
        col1, col2 = st.columns(2)
        with col1:
            amount = st.number_input("Amount", min_value=0.0, step=10.0)
            category = st.selectbox(
                "Category",
                CATEGORIES,
                index=CATEGORIES.index(DEFAULT_CATEGORY),
                format_func=lambda c: f"{category_icon(c)} {category_label(c)}",
            )
        with col2:
            expense_date = st.date_input("Date", value=today)
            note = st.text_input("Note (optional)")
        if st.form_submit_button("Add expense"):
            error = _apply(store.add_expense, amount, category, expense_date, note)
            if error:
                st.error(error)
            else:
                _rerun()


def render_transactions(store: LedgerStore, today: date) -> None:
    """Filtered, newest-first transaction list with per-row delete."""
    st.subheader("🧾 Recent Transactions")
    mode = st.radio(
        "Show",
        FILTER_MODES,
        format_func=FILTER_LABELS.get,
        horizontal=True,
        key=FILTER_KEY,
        label_visibility='collapsed',
    )
    expenses = filter_expenses(store.expenses, mode, today)
    if not expenses:
        st.info("🧾 No expenses found.")
        return

    pending = st.session_state.get(PENDING_DELETE_KEY)
    for expense in expenses:
        col1, col2, col3 = st.columns([6, 2, 1])
        with col1:
            details = format_date(expense.date)
            if expense.note:
                details = f"{details} • {expense.note}"
            st.markdown(f"{category_icon(expense.category)} **{category_label(expense.category)}**  \n{details}")
        with col2:
            st.markdown(f"**-{format_currency(expense.amount)}**")
        with col3:
            st.button(
                "🗑️",
                key=f"delete_{expense.id}",
                help="Delete this expense",
                on_click=_request_delete,
                args=(expense.id,),
            )

        if pending == expense.id:
            st.warning("Are you sure you want to delete this expense?")
            yes_col, no_col = st.columns(2)
            with yes_col:
                if st.button("Yes, delete", key=f"confirm_{expense.id}"):
                    _confirm_delete(store)
                    _rerun()
            with no_col:
                st.button("Cancel", key=f"cancel_{expense.id}", on_click=_cancel_delete)


def render_charts(store: LedgerStore, metrics: DashboardMetrics, today: date) -> None:
    expenses = store.expenses
    if not expenses:
        return
    st.subheader("📈 Spending Insights")
    col1, col2 = st.columns(2)
    with col1:
        st.plotly_chart(create_category_pie(category_breakdown(expenses)), use_container_width=True)
    with col2:
        st.plotly_chart(
            create_daily_spending_chart(daily_spending(expenses, today), metrics.ideal_daily),
            use_container_width=True,
        )


def main() -> None:
    """Render the whole dashboard."""
    st.set_page_config(
        page_title="Allowance Tracker",
        page_icon="💰",
        layout="wide",
        initial_sidebar_state="expanded",
    )
    config.configure_logging()
    config.ensure_data_directories()

    store = _get_store()
    today = date.today()

    render_settings(store)
    render_header(today)

    metrics = compute_metrics(store.snapshot(), today)
    render_summary(metrics)
    render_savings(metrics)

    left, right = st.columns([2, 3])
    with left:
        render_expense_form(store, today)
    with right:
        render_transactions(store, today)

    render_charts(store, metrics, today)


# Streamlit executes this file as __main__
if __name__ == "__main__":
    main()
