"""Top‑level package for the Allowance Tracker.

A single-user monthly allowance tracker: set an allowance and a savings
goal, log dated expenses, and read a dashboard of balance, spending health
and savings progress.  The primary modules are:

* ``ledger_store`` – the store that owns the ledger record and its mutations
* ``ledger_storage`` – loading and saving the record in a local JSON slot
* ``metrics`` – balance, daily budget, health status and savings progress
* ``expense_filter`` – the all / today / this-week transaction views
* ``dashboard`` – a Streamlit app that ties everything together

To run the dashboard from the command line you can execute:

```bash
streamlit run allowance_tracker/dashboard.py
```
"""

from .exceptions import InvalidAmount, InvalidDate, MalformedPersistedData  # noqa: F401
from .ledger_storage import LedgerStorage  # noqa: F401
from .ledger_store import LedgerStore, MonotonicIdGenerator  # noqa: F401
from .metrics import compute_metrics  # noqa: F401
from .expense_filter import filter_expenses  # noqa: F401
from .models import Expense, LedgerRecord  # noqa: F401
# Import dashboard lazily.  Streamlit may not be installed in all
# environments (e.g. a headless script using only the ledger).  If the
# import fails, assign ``None``.
try:
    from . import dashboard  # type: ignore  # noqa: F401
except ModuleNotFoundError:
    dashboard = None  # type: ignore


__version__ = "0.1.0"

__all__ = [
    "Expense",
    "InvalidAmount",
    "InvalidDate",
    "LedgerRecord",
    "LedgerStorage",
    "LedgerStore",
    "MalformedPersistedData",
    "MonotonicIdGenerator",
    "compute_metrics",
    "dashboard",
    "filter_expenses",
]
