"""Dashboard metrics derived from the ledger record.

Everything here is a pure function of a :class:`LedgerRecord` and "today".
Totals are lifetime totals: spending from earlier months still counts
against the allowance.
"""

from __future__ import annotations

import calendar
from dataclasses import asdict, dataclass
from datetime import date
from typing import Any, Dict, Optional

from .formatting import format_currency
from .models import LedgerRecord

SET_ALLOWANCE = 'Set Allowance'
CRITICAL = 'Critical'
TIGHT = 'Tight'
HEALTHY = 'Healthy'
CAREFUL = 'Careful'
HEALTH_LABELS = (SET_ALLOWANCE, CRITICAL, TIGHT, HEALTHY, CAREFUL)

NEUTRAL_COLOR = '#94a3b8'
RED = '#ef4444'
ORANGE = '#f59e0b'
GREEN = '#10b981'

# Daily budget below this share of the ideal daily rate counts as tight.
TIGHT_RATIO = 0.5

NO_GOAL_TEXT = 'No goal set'


@dataclass(frozen=True)
class HealthStatus:
    label: str
    color: str

    @property
    def is_neutral(self) -> bool:
        return self.label == SET_ALLOWANCE

    @property
    def text(self) -> str:
        """Indicator text, e.g. ``'Health: Tight'``."""
        return self.label if self.is_neutral else f"Health: {self.label}"


@dataclass(frozen=True)
class SavingsProgress:
    goal: float
    saved: float
    percentage: float
    text: str

    @property
    def has_goal(self) -> bool:
        return self.goal > 0


@dataclass(frozen=True)
class DashboardMetrics:
    total_allowance: float
    total_spent: float
    balance: float
    days_in_month: int
    remaining_days: int
    daily_budget: float
    ideal_daily: float
    health: HealthStatus
    savings: SavingsProgress

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


def days_in_month(today: date) -> int:
    return calendar.monthrange(today.year, today.month)[1]


def remaining_days(today: date) -> int:
    """Days left in the month after ``today``; zero on the last day."""
    return days_in_month(today) - today.day


def daily_budget(balance: float, days_left: int) -> float:
    """Balance spread over the remaining days, counting at least one day."""
    return balance / max(days_left, 1)


def health_status(allowance: float, balance: float, budget_per_day: float, ideal_daily: float) -> HealthStatus:
    """Classify spending pace. The first matching rule wins."""
    if allowance == 0:
        return HealthStatus(SET_ALLOWANCE, NEUTRAL_COLOR)
    if balance < 0:
        return HealthStatus(CRITICAL, RED)
    if budget_per_day < ideal_daily * TIGHT_RATIO:
        return HealthStatus(TIGHT, ORANGE)
    if budget_per_day >= ideal_daily:
        return HealthStatus(HEALTHY, GREEN)
    return HealthStatus(CAREFUL, ORANGE)


def savings_progress(balance: float, goal: float) -> SavingsProgress:
    """Progress towards ``goal`` using the current balance as the saved amount.

    There is no separate savings pool, so any spending lowers progress
    straight away.
    """
    if goal <= 0:
        return SavingsProgress(goal=0.0, saved=0.0, percentage=0.0, text=NO_GOAL_TEXT)
    percentage = min(100.0, max(0.0, balance / goal * 100))
    saved = max(balance, 0.0)
    text = f"{format_currency(saved)} of {format_currency(goal)} goal"
    return SavingsProgress(goal=goal, saved=saved, percentage=percentage, text=text)


def compute_metrics(record: LedgerRecord, today: Optional[date] = None) -> DashboardMetrics:
    """Compute every dashboard value for ``record`` as of ``today``."""
    if today is None:
        today = date.today()

    total_spent = record.total_spent
    balance = record.allowance - total_spent
    month_days = days_in_month(today)
    days_left = remaining_days(today)
    budget_per_day = daily_budget(balance, days_left)
    ideal_daily = record.allowance / month_days

    return DashboardMetrics(
        total_allowance=record.allowance,
        total_spent=total_spent,
        balance=balance,
        days_in_month=month_days,
        remaining_days=days_left,
        daily_budget=budget_per_day,
        ideal_daily=ideal_daily,
        health=health_status(record.allowance, balance, budget_per_day, ideal_daily),
        savings=savings_progress(balance, record.goal),
    )
