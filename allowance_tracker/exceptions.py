"""Error types raised by the ledger."""


class InvalidAmount(ValueError):
    """Raised when an allowance, goal or expense amount is not a positive number."""


class InvalidDate(ValueError):
    """Raised when an expense is added without a usable calendar date."""


class MalformedPersistedData(ValueError):
    """Raised when the stored ledger blob cannot be turned into a record.

    ``LedgerStorage.load`` recovers from it by returning the default record.
    """
