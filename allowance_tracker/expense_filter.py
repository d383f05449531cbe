"""Expense list filtering for the transaction view."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable, List, Optional

from .models import Expense

FILTER_ALL = 'all'
FILTER_TODAY = 'today'
FILTER_WEEK = 'week'
FILTER_MODES = (FILTER_ALL, FILTER_TODAY, FILTER_WEEK)
FILTER_LABELS = {
    FILTER_ALL: 'All',
    FILTER_TODAY: 'Today',
    FILTER_WEEK: 'This Week',
}

WEEK_WINDOW_DAYS = 7


def filter_expenses(expenses: Iterable[Expense], mode: str = FILTER_ALL, today: Optional[date] = None) -> List[Expense]:
    """Return the expenses matching ``mode``, newest first.

    ``today`` keeps only expenses dated today. ``week`` keeps expenses dated
    on or after seven days before today; there is no upper bound, so
    future-dated expenses are included. Expenses sharing a date keep their
    original relative order.

    Raises:
        ValueError: If ``mode`` is not one of ``FILTER_MODES``
    """
    if mode not in FILTER_MODES:
        raise ValueError(f"Unknown expense filter {mode!r}; expected one of {', '.join(FILTER_MODES)}")
    if today is None:
        today = date.today()

    selected = list(expenses)
    if mode == FILTER_TODAY:
        selected = [e for e in selected if e.date == today]
    elif mode == FILTER_WEEK:
        cutoff = today - timedelta(days=WEEK_WINDOW_DAYS)
        selected = [e for e in selected if e.date >= cutoff]

    return sorted(selected, key=lambda e: e.date, reverse=True)
