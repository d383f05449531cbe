import contextlib
import types
from datetime import date

import pytest

from allowance_tracker import dashboard
from allowance_tracker.ledger_storage import LedgerStorage


@pytest.fixture
def session(monkeypatch, tmp_path):
    state = {}
    monkeypatch.setattr(dashboard, 'st', types.SimpleNamespace(session_state=state))
    monkeypatch.setattr(dashboard, '_storage_factory', lambda: LedgerStorage(data_dir=tmp_path))
    return state


def test_store_is_created_once_per_session(session, tmp_path):
    store = dashboard._get_store()
    assert dashboard._get_store() is store
    assert session[dashboard.STORE_KEY] is store
    assert session[dashboard.STORAGE_KEY].data_dir == tmp_path


def test_store_opens_saved_ledger(session, tmp_path):
    first = dashboard._get_store()
    first.set_allowance(1000)
    session.clear()
    assert dashboard._get_store().snapshot().allowance == 1000.0


def test_apply_reports_rejected_mutations(session):
    store = dashboard._get_store()
    assert dashboard._apply(store.set_allowance, 0) == "Please enter an amount greater than zero."
    assert dashboard._apply(store.add_expense, 10, 'food', None, '') == "Please pick a date for the expense."
    assert dashboard._apply(store.set_goal, 500) is None
    assert store.snapshot().goal == 500.0


def test_delete_needs_confirmation(session):
    store = dashboard._get_store()
    expense = store.add_expense(25, 'food', date(2026, 10, 19))

    dashboard._request_delete(expense.id)
    assert session[dashboard.PENDING_DELETE_KEY] == expense.id
    assert dashboard._confirm_delete(store) is True
    assert store.snapshot().expenses == []
    assert dashboard.PENDING_DELETE_KEY not in session
    assert dashboard._confirm_delete(store) is False


def test_cancel_delete_keeps_expense(session):
    store = dashboard._get_store()
    expense = store.add_expense(25, 'food', date(2026, 10, 19))
    dashboard._request_delete(expense.id)
    dashboard._cancel_delete()
    assert dashboard._confirm_delete(store) is False
    assert store.snapshot().expenses == [expense]


def test_reset_store_erases_saved_data(session):
    store = dashboard._get_store()
    store.set_allowance(1000)
    storage = session[dashboard.STORAGE_KEY]

    dashboard._reset_store()

    assert not storage.path.exists()
    assert dashboard._get_store() is not store
    assert dashboard._get_store().snapshot().allowance == 0.0


def test_rerun_prefers_streamlit_rerun(monkeypatch):
    called = {}
    st_mock = types.SimpleNamespace(rerun=lambda: called.setdefault('method', 'rerun'))
    monkeypatch.setattr(dashboard, 'st', st_mock)
    dashboard._rerun()
    assert called['method'] == 'rerun'


def test_rerun_falls_back_to_experimental(monkeypatch):
    called = {}
    st_mock = types.SimpleNamespace(experimental_rerun=lambda: called.setdefault('method', 'experimental'))
    monkeypatch.setattr(dashboard, 'st', st_mock)
    dashboard._rerun()
    assert called['method'] == 'experimental'


def test_savings_bar_rounds_like_the_percentage_label(monkeypatch):
    shown = {}
    st_mock = types.SimpleNamespace(
        subheader=lambda text: None,
        columns=lambda spec: [contextlib.nullcontext() for _ in spec],
        markdown=lambda text: shown.setdefault('markdown', []).append(text),
        progress=lambda value: shown.setdefault('progress', value),
    )
    monkeypatch.setattr(dashboard, 'st', st_mock)
    savings = types.SimpleNamespace(text='Rs. 996 of Rs. 1,000 goal', percentage=99.6)

    dashboard.render_savings(types.SimpleNamespace(savings=savings))

    assert shown['progress'] == 100
    assert '**100%**' in shown['markdown']
