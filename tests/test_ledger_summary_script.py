import importlib.util
from datetime import date
from pathlib import Path

import pandas as pd

from allowance_tracker.ledger_storage import LedgerStorage
from allowance_tracker.models import Expense, LedgerRecord

SCRIPT_PATH = Path(__file__).resolve().parents[1] / 'scripts' / 'ledger_summary.py'


def _load_script():
    spec = importlib.util.spec_from_file_location('ledger_summary_test', SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _seed(tmp_path):
    LedgerStorage(data_dir=tmp_path).save(LedgerRecord(
        allowance=1000.0,
        goal=500.0,
        expenses=[
            Expense(id=1, amount=120.0, category='food', date=date(2026, 10, 19), note='lunch'),
            Expense(id=2, amount=80.0, category='transport', date=date(2026, 10, 2)),
        ],
    ))


def test_summary_prints_dashboard(tmp_path, capsys):
    _seed(tmp_path)
    module = _load_script()

    assert module.main(['--data-dir', str(tmp_path), '--today', '2026-10-19']) == 0

    out = capsys.readouterr().out
    assert 'Balance:         Rs. 800' in out
    assert 'Days left:       12' in out
    assert 'Health: ' in out
    assert 'All expenses: 2' in out
    assert 'Rs. 800 of Rs. 500 goal (100%)' in out


def test_summary_filters_and_exports(tmp_path, capsys):
    _seed(tmp_path)
    module = _load_script()
    target = tmp_path / 'today.csv'

    module.main(['--data-dir', str(tmp_path), '--today', '2026-10-19', '--filter', 'today', '--export', str(target)])

    out = capsys.readouterr().out
    assert 'Today expenses: 1' in out
    assert 'lunch' in out
    exported = pd.read_csv(target)
    assert list(exported['id']) == [1]


def test_summary_with_empty_ledger(tmp_path, capsys):
    module = _load_script()
    module.main(['--data-dir', str(tmp_path), '--today', '2026-10-19'])
    out = capsys.readouterr().out
    assert 'Set Allowance' in out
    assert 'No expenses found.' in out
