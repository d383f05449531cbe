"""Ledger data shapes and their JSON-friendly representations."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Any, Dict, List

from .exceptions import InvalidAmount, InvalidDate, MalformedPersistedData

logger = logging.getLogger(__name__)

CATEGORIES = (
    'food',
    'transport',
    'entertainment',
    'stationary',
    'bills',
    'shopping',
    'other',
)
DEFAULT_CATEGORY = 'other'
DATE_FORMAT = '%Y-%m-%d'


def coerce_amount(value: Any) -> float:
    """Return ``value`` as a positive float or raise :class:`InvalidAmount`.

    Strings are parsed, so form input can be passed straight through.
    Booleans, NaN and infinities are rejected.
    """
    if value is None or isinstance(value, bool):
        raise InvalidAmount(f"Amount must be a positive number, got {value!r}")
    try:
        amount = float(str(value).strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError, OverflowError) as exc:
        raise InvalidAmount(f"Amount must be a positive number, got {value!r}") from exc
    if not math.isfinite(amount) or amount <= 0:
        raise InvalidAmount(f"Amount must be a positive number, got {value!r}")
    return amount


def parse_expense_date(value: Any) -> date:
    """Return ``value`` as a calendar date or raise :class:`InvalidDate`.

    Accepts ``date``/``datetime`` objects (time of day is dropped) and
    ``YYYY-MM-DD`` strings.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return datetime.strptime(value.strip(), DATE_FORMAT).date()
        except ValueError as exc:
            raise InvalidDate(f"Expected a YYYY-MM-DD date, got {value!r}") from exc
    raise InvalidDate("An expense needs a date")


def normalize_category(value: Any) -> str:
    """Strip surrounding whitespace; blank values become ``other``.

    Categories are otherwise kept exactly as given so they survive a save and
    reload unchanged. Only the presentation layer folds case and maps unknown
    values onto the ``other`` label and icon.
    """
    text = str(value).strip() if value is not None else ''
    return text or DEFAULT_CATEGORY


def _coerce_total(value: Any, name: str) -> float:
    """Lenient reader for persisted allowance/goal values."""
    if value is None:
        return 0.0
    try:
        total = float(value)
    except (TypeError, ValueError, OverflowError):
        logger.warning("Ignoring non-numeric persisted %s: %r", name, value)
        return 0.0
    if not math.isfinite(total) or total < 0:
        logger.warning("Ignoring out-of-range persisted %s: %r", name, value)
        return 0.0
    return total


@dataclass(frozen=True)
class Expense:
    """A single dated expense. Never mutated after creation."""

    id: int
    amount: float
    category: str
    date: date
    note: str = ''

    @property
    def is_known_category(self) -> bool:
        return self.category.lower() in CATEGORIES

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Expense":
        """Build an expense from its persisted mapping.

        Raises:
            MalformedPersistedData: if a required field is missing or invalid
        """
        if not isinstance(data, dict):
            raise MalformedPersistedData(f"Expense entry must be an object, got {type(data).__name__}")
        raw_id = data.get('id')
        if raw_id is None or isinstance(raw_id, bool):
            raise MalformedPersistedData("Expense entry is missing an id")
        try:
            expense_id = int(raw_id)
        except (TypeError, ValueError, OverflowError) as exc:
            raise MalformedPersistedData(f"Invalid expense id: {raw_id!r}") from exc
        try:
            amount = coerce_amount(data.get('amount'))
            expense_date = parse_expense_date(data.get('date'))
        except (InvalidAmount, InvalidDate) as exc:
            raise MalformedPersistedData(f"Invalid expense {expense_id}: {exc}") from exc
        note = data.get('note')
        return cls(
            id=expense_id,
            amount=amount,
            category=normalize_category(data.get('category')),
            date=expense_date,
            note='' if note is None else str(note),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'amount': self.amount,
            'category': self.category,
            'date': self.date.strftime(DATE_FORMAT),
            'note': self.note,
        }


@dataclass
class LedgerRecord:
    """The whole persisted state: allowance, goal and the expense list.

    The expense list carries no meaningful order; sorting happens at display
    time.
    """

    allowance: float = 0.0
    goal: float = 0.0
    expenses: List[Expense] = field(default_factory=list)

    @classmethod
    def default(cls) -> "LedgerRecord":
        return cls()

    @property
    def total_spent(self) -> float:
        return sum(expense.amount for expense in self.expenses)

    def copy(self) -> "LedgerRecord":
        # Expenses are frozen, so a new list is enough to isolate the copy.
        return replace(self, expenses=list(self.expenses))

    @classmethod
    def from_dict(cls, data: Any) -> "LedgerRecord":
        """Build a record from the persisted mapping.

        Missing or invalid totals fall back to zero. Expense entries that
        cannot be read, or that repeat an id, are skipped with a warning.

        Raises:
            MalformedPersistedData: if ``data`` is not a mapping
        """
        if not isinstance(data, dict):
            raise MalformedPersistedData(f"Ledger record must be an object, got {type(data).__name__}")

        raw_expenses = data.get('expenses') or []
        if not isinstance(raw_expenses, list):
            logger.warning("Ignoring persisted expenses of type %s", type(raw_expenses).__name__)
            raw_expenses = []

        expenses: List[Expense] = []
        seen_ids = set()
        for entry in raw_expenses:
            try:
                expense = Expense.from_dict(entry)
            except MalformedPersistedData as exc:
                logger.warning("Skipping unreadable expense entry: %s", exc)
                continue
            if expense.id in seen_ids:
                logger.warning("Skipping expense with duplicate id %s", expense.id)
                continue
            seen_ids.add(expense.id)
            expenses.append(expense)

        return cls(
            allowance=_coerce_total(data.get('allowance'), 'allowance'),
            goal=_coerce_total(data.get('goal'), 'goal'),
            expenses=expenses,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'allowance': self.allowance,
            'goal': self.goal,
            'expenses': [expense.to_dict() for expense in self.expenses],
        }
