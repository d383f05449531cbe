"""The ledger store: owner of the in-memory record and its mutations.

A store is built explicitly (usually via :meth:`LedgerStore.open`) and handed
to whoever needs it. Every successful mutation is saved through the storage
adapter straight away. Rejected mutations raise and leave both the record
and the stored slot untouched.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Any, Callable, Optional, Protocol

from .models import (
    Expense,
    LedgerRecord,
    coerce_amount,
    normalize_category,
    parse_expense_date,
)

logger = logging.getLogger(__name__)


class RecordStorage(Protocol):
    def load(self) -> LedgerRecord: ...

    def save(self, record: LedgerRecord) -> None: ...


class MonotonicIdGenerator:
    """Issue strictly increasing integer ids.

    Ids follow the wall clock in milliseconds, like the ids already found in
    saved ledgers, but two calls inside the same millisecond (or after the
    clock steps back) still get distinct, increasing values.
    """

    def __init__(self, start_after: int = 0, clock: Callable[[], float] = time.time):
        self._last = int(start_after)
        self._clock = clock
        self._lock = threading.Lock()

    def advance_past(self, value: int) -> None:
        """Make sure every later id is greater than ``value``."""
        with self._lock:
            self._last = max(self._last, int(value))

    def __call__(self) -> int:
        with self._lock:
            now_ms = int(self._clock() * 1000)
            self._last = max(now_ms, self._last + 1)
            return self._last


class LedgerStore:
    """Owns a :class:`LedgerRecord` and persists it after every change."""

    def __init__(
        self,
        storage: RecordStorage,
        record: Optional[LedgerRecord] = None,
        id_generator: Optional[Callable[[], int]] = None,
    ):
        """Initialize the store.

        Args:
            storage: Adapter with ``load()``/``save(record)``
            record: Initial state. Defaults to the zero record.
            id_generator: Callable returning a fresh expense id. Defaults to a
                :class:`MonotonicIdGenerator` seeded past the record's ids.
        """
        self._storage = storage
        self._record = record.copy() if record is not None else LedgerRecord.default()
        if id_generator is None:
            id_generator = MonotonicIdGenerator()
        if isinstance(id_generator, MonotonicIdGenerator) and self._record.expenses:
            id_generator.advance_past(max(e.id for e in self._record.expenses))
        self._next_id = id_generator

    @classmethod
    def open(cls, storage: RecordStorage, id_generator: Optional[Callable[[], int]] = None) -> "LedgerStore":
        """Build a store from whatever ``storage`` currently holds."""
        return cls(storage, storage.load(), id_generator=id_generator)

    def snapshot(self) -> LedgerRecord:
        """Return a copy of the current record; changing it does not affect the store."""
        return self._record.copy()

    @property
    def expenses(self) -> tuple:
        return tuple(self._record.expenses)

    def set_allowance(self, amount: Any) -> float:
        """Replace the monthly allowance.

        Raises:
            InvalidAmount: if ``amount`` is not a positive number
        """
        value = self._validated_amount(amount, 'allowance')
        updated = self._record.copy()
        updated.allowance = value
        self._commit(updated)
        logger.info("Allowance set to %s", value)
        return value

    def set_goal(self, amount: Any) -> float:
        """Replace the savings goal.

        Raises:
            InvalidAmount: if ``amount`` is not a positive number
        """
        value = self._validated_amount(amount, 'goal')
        updated = self._record.copy()
        updated.goal = value
        self._commit(updated)
        logger.info("Savings goal set to %s", value)
        return value

    def add_expense(self, amount: Any, category: Any, expense_date: Any, note: Any = '') -> Expense:
        """Record a new expense and return it.

        Raises:
            InvalidAmount: if ``amount`` is not a positive number
            InvalidDate: if ``expense_date`` is missing or not ``YYYY-MM-DD``
        """
        value = self._validated_amount(amount, 'expense')
        try:
            when = parse_expense_date(expense_date)
        except ValueError:
            logger.warning("Rejected expense with date %r", expense_date)
            raise

        expense = Expense(
            id=self._fresh_id(),
            amount=value,
            category=normalize_category(category),
            date=when,
            note='' if note is None else str(note).strip(),
        )
        updated = self._record.copy()
        updated.expenses.append(expense)
        self._commit(updated)
        logger.info("Added %s expense %s of %s on %s", expense.category, expense.id, value, when)
        return expense

    def remove_expense(self, expense_id: int) -> bool:
        """Remove the expense with ``expense_id``.

        Returns:
            True when an expense was removed, False when the id was unknown
            (nothing is saved in that case).
        """
        remaining = [e for e in self._record.expenses if e.id != expense_id]
        if len(remaining) == len(self._record.expenses):
            logger.debug("No expense with id %s to remove", expense_id)
            return False
        updated = self._record.copy()
        updated.expenses = remaining
        self._commit(updated)
        logger.info("Removed expense %s", expense_id)
        return True

    def _validated_amount(self, amount: Any, field_name: str) -> float:
        try:
            return coerce_amount(amount)
        except ValueError:
            logger.warning("Rejected %s amount %r", field_name, amount)
            raise

    def _fresh_id(self) -> int:
        taken = {e.id for e in self._record.expenses}
        candidate = int(self._next_id())
        while candidate in taken:
            candidate = int(self._next_id())
        return candidate

    def _commit(self, updated: LedgerRecord) -> None:
        # Swap the record in only after the save went through.
        self._storage.save(updated.copy())
        self._record = updated
