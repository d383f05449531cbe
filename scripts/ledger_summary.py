#!/usr/bin/env python3
"""Print the dashboard summary of the saved ledger, optionally exporting expenses."""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from typing import List, Optional

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from allowance_tracker import config
from allowance_tracker.expense_filter import FILTER_LABELS, FILTER_MODES, filter_expenses
from allowance_tracker.formatting import (
    category_label,
    format_currency,
    format_date,
    format_long_date,
    format_percentage,
)
from allowance_tracker.ledger_analytics import export_expenses_csv
from allowance_tracker.ledger_storage import LedgerStorage
from allowance_tracker.metrics import compute_metrics

logger = logging.getLogger(__name__)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description='Show the allowance tracker summary.')
    parser.add_argument('--data-dir', type=Path, default=None, help='Directory holding the ledger slot')
    parser.add_argument('--slot', default=None, help='Ledger slot name')
    parser.add_argument('--filter', choices=FILTER_MODES, default='all', help='Which expenses to list')
    parser.add_argument('--export', type=Path, default=None, help='Write the listed expenses to this CSV file')
    parser.add_argument('--today', type=date.fromisoformat, default=None, help='Evaluate as of this YYYY-MM-DD date')
    args = parser.parse_args(argv)

    config.configure_logging()
    today = args.today or date.today()
    storage = LedgerStorage(slot=args.slot, data_dir=args.data_dir)
    record = storage.load()
    metrics = compute_metrics(record, today)

    print(format_long_date(today))
    print(f"Balance:         {format_currency(metrics.balance)}")
    print(f"Total allowance: {format_currency(metrics.total_allowance)}")
    print(f"Total spent:     {format_currency(metrics.total_spent)}")
    print(f"Days left:       {metrics.remaining_days}")
    print(f"Daily budget:    {format_currency(metrics.daily_budget)}")
    print(metrics.health.text)
    print(f"Savings:         {metrics.savings.text} ({format_percentage(metrics.savings.percentage)})")

    expenses = filter_expenses(record.expenses, args.filter, today)
    print(f"\n{FILTER_LABELS[args.filter]} expenses: {len(expenses)}")
    if not expenses:
        print("No expenses found.")
    for expense in expenses:
        note = f" • {expense.note}" if expense.note else ''
        print(f"  {format_date(expense.date):<7} {category_label(expense.category):<14} "
              f"-{format_currency(expense.amount)}{note}")

    if args.export:
        path = export_expenses_csv(expenses, args.export)
        logger.info("Exported %d expenses to %s", len(expenses), path)
        print(f"\nExported to {path}")
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
