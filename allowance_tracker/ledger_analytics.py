"""Tabular views of the expense list.

These helpers turn the ledger's expenses into pandas DataFrames for the
dashboard tables and charts, and for CSV export.
"""

from __future__ import annotations

from datetime import date, datetime
from pathlib import Path
from typing import Iterable, Optional, Union

import pandas as pd

from .metrics import days_in_month
from .models import Expense

EXPENSE_COLUMNS = ['id', 'date', 'amount', 'category', 'note']
BREAKDOWN_COLUMNS = ['Total_Spent', 'Transaction_Count', 'Share_Pct']


def expenses_frame(expenses: Iterable[Expense]) -> pd.DataFrame:
    """Return one row per expense with ``EXPENSE_COLUMNS``.

    ``date`` is a datetime64 column so it can be grouped and plotted directly.
    """
    rows = [expense.to_dict() for expense in expenses]
    if not rows:
        frame = pd.DataFrame(columns=EXPENSE_COLUMNS)
        frame['date'] = pd.to_datetime(frame['date'])
        frame['amount'] = frame['amount'].astype(float)
        return frame
    frame = pd.DataFrame(rows, columns=EXPENSE_COLUMNS)
    frame['date'] = pd.to_datetime(frame['date'])
    frame['amount'] = pd.to_numeric(frame['amount'], errors='coerce').fillna(0.0)
    return frame


def category_breakdown(expenses: Iterable[Expense]) -> pd.DataFrame:
    """Spending per category, largest first.

    Returns a DataFrame indexed by category with ``Total_Spent``,
    ``Transaction_Count`` and ``Share_Pct`` (share of all spending).
    """
    frame = expenses_frame(expenses)
    if frame.empty:
        return pd.DataFrame(columns=BREAKDOWN_COLUMNS)

    frame['category'] = frame['category'].str.lower()
    breakdown = frame.groupby('category').agg(
        Total_Spent=('amount', 'sum'),
        Transaction_Count=('amount', 'count'),
    )
    total = breakdown['Total_Spent'].sum()
    breakdown['Share_Pct'] = (breakdown['Total_Spent'] / total * 100) if total > 0 else 0.0
    breakdown = breakdown.round(2).sort_values('Total_Spent', ascending=False)
    breakdown.index.name = 'category'
    return breakdown


def daily_spending(expenses: Iterable[Expense], today: Optional[date] = None) -> pd.DataFrame:
    """Spending for every day of ``today``'s month.

    Days without expenses are present with zero so the chart has no gaps.
    Returns a DataFrame with ``date`` and ``amount`` columns.
    """
    if today is None:
        today = date.today()
    month_start = today.replace(day=1)
    days = pd.date_range(month_start, periods=days_in_month(today), freq='D')

    frame = expenses_frame(expenses)
    in_month = frame[(frame['date'] >= days[0]) & (frame['date'] <= days[-1])]
    totals = in_month.groupby('date')['amount'].sum()
    totals = totals.reindex(days, fill_value=0.0)
    result = totals.rename_axis('date').reset_index(name='amount')
    result['amount'] = result['amount'].astype(float)
    return result


def export_expenses_csv(expenses: Iterable[Expense], filename: Optional[Union[str, Path]] = None) -> str:
    """Write expenses to a CSV file and return its path."""
    if filename is None:
        filename = f"expenses_{datetime.now().strftime('%Y%m%d_%H%M%S')}.csv"
    target = Path(filename)
    target.parent.mkdir(parents=True, exist_ok=True)

    frame = expenses_frame(expenses)
    frame['date'] = frame['date'].dt.strftime('%Y-%m-%d')
    frame.to_csv(target, index=False)
    return str(target)
