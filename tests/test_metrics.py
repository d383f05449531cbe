from datetime import date

import pytest

from allowance_tracker import metrics as m
from allowance_tracker.models import Expense, LedgerRecord

SEPTEMBER_FIRST = date(2026, 9, 1)  # 30-day month


def _expense(amount, day=date(2026, 9, 1), expense_id=None):
    return Expense(id=expense_id or int(amount * 100), amount=float(amount), category='food', date=day)


def _record(allowance=0.0, goal=0.0, spent=()):
    expenses = [_expense(amount, expense_id=i + 1) for i, amount in enumerate(spent)]
    return LedgerRecord(allowance=float(allowance), goal=float(goal), expenses=expenses)


def test_fresh_month_with_full_allowance_is_healthy():
    result = m.compute_metrics(_record(allowance=1000, goal=500), SEPTEMBER_FIRST)

    assert result.balance == 1000
    assert result.days_in_month == 30
    assert result.remaining_days == 29
    assert result.daily_budget == pytest.approx(34.48, abs=0.01)
    assert result.ideal_daily == pytest.approx(33.33, abs=0.01)
    assert result.health.label == m.HEALTHY
    assert result.health.color == m.GREEN
    assert result.savings.percentage == 100.0
    assert result.savings.saved == 1000


@pytest.mark.parametrize('today', [date(2026, 9, 1), date(2026, 9, 15), date(2026, 9, 30)])
def test_overspending_is_critical_regardless_of_days_left(today):
    result = m.compute_metrics(_record(allowance=1000, spent=[1200]), today)
    assert result.balance == -200
    assert result.health.label == m.CRITICAL
    assert result.health.color == m.RED


def test_missing_allowance_wins_over_everything():
    result = m.compute_metrics(_record(allowance=0, spent=[50, 75]), SEPTEMBER_FIRST)
    assert result.health.label == m.SET_ALLOWANCE
    assert result.health.color == m.NEUTRAL_COLOR
    assert result.health.text == 'Set Allowance'
    assert result.total_spent == 125


def test_tight_when_daily_budget_below_half_of_ideal():
    # ideal 100/day, 1400 left over 29 days is ~48/day
    result = m.compute_metrics(_record(allowance=3000, spent=[1600]), SEPTEMBER_FIRST)
    assert result.health.label == m.TIGHT
    assert result.health.color == m.ORANGE
    assert result.health.text == 'Health: Tight'


def test_careful_between_half_and_full_ideal():
    # ideal 100/day, 2000 left over 29 days is ~69/day
    result = m.compute_metrics(_record(allowance=3000, spent=[1000]), SEPTEMBER_FIRST)
    assert result.health.label == m.CAREFUL
    assert result.health.color == m.ORANGE


def test_last_day_of_month_divides_by_one():
    result = m.compute_metrics(_record(allowance=3000, spent=[2950]), date(2026, 9, 30))
    assert result.remaining_days == 0
    assert result.daily_budget == 50


def test_daily_budget_spreads_balance_over_remaining_days(monkeypatch):
    monkeypatch.setattr(m, 'remaining_days', lambda today: 4)
    result = m.compute_metrics(_record(allowance=3000, spent=[1000]), date(2026, 9, 10))
    assert result.remaining_days == 4
    assert result.daily_budget == 500


def test_days_in_month_handles_february():
    assert m.days_in_month(date(2024, 2, 10)) == 29
    assert m.days_in_month(date(2026, 2, 10)) == 28
    assert m.remaining_days(date(2026, 2, 10)) == 18


def test_spending_from_earlier_months_still_counts():
    record = LedgerRecord(
        allowance=1000.0,
        expenses=[_expense(300, day=date(2026, 8, 20), expense_id=1)],
    )
    result = m.compute_metrics(record, SEPTEMBER_FIRST)
    assert result.total_spent == 300
    assert result.balance == 700


def test_no_goal_reports_zero_progress():
    savings = m.compute_metrics(_record(allowance=1000), SEPTEMBER_FIRST).savings
    assert not savings.has_goal
    assert savings.percentage == 0
    assert savings.text == 'No goal set'


def test_partial_goal_progress_uses_balance():
    savings = m.compute_metrics(_record(allowance=1000, goal=500, spent=[750]), SEPTEMBER_FIRST).savings
    assert savings.percentage == 50
    assert savings.saved == 250
    assert savings.text == 'Rs. 250 of Rs. 500 goal'


def test_negative_balance_shows_nothing_saved():
    savings = m.savings_progress(balance=-200.0, goal=500.0)
    assert savings.percentage == 0
    assert savings.saved == 0
    assert savings.text == 'Rs. 0 of Rs. 500 goal'


@pytest.mark.parametrize('allowance', [0, 1, 300, 1000, 15000])
@pytest.mark.parametrize('spent', [(), (1,), (250, 250), (999, 2), (20000,)])
@pytest.mark.parametrize('goal', [0, 1, 500, 100000])
@pytest.mark.parametrize('day', [1, 14, 28, 31])
def test_health_and_progress_stay_in_range(allowance, spent, goal, day):
    result = m.compute_metrics(_record(allowance=allowance, goal=goal, spent=spent), date(2026, 10, day))
    assert result.health.label in m.HEALTH_LABELS
    assert 0 <= result.savings.percentage <= 100


def test_as_dict_exposes_plain_values():
    values = m.compute_metrics(_record(allowance=1000, goal=500), SEPTEMBER_FIRST).as_dict()
    assert values['total_allowance'] == 1000
    assert values['remaining_days'] == 29
    assert values['health'] == {'label': m.HEALTHY, 'color': m.GREEN}
    assert values['savings']['percentage'] == 100.0


def test_defaults_to_today():
    result = m.compute_metrics(_record(allowance=1000))
    assert result.days_in_month == m.days_in_month(date.today())
