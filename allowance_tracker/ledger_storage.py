"""Persistence for the ledger record.

The whole record lives in one JSON file (the "slot"). Every save overwrites
the slot completely; there is no merging and no versioning.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

from . import config
from .exceptions import MalformedPersistedData
from .file_operations import ensure_directory, slot_filename, write_json_atomic
from .models import LedgerRecord

logger = logging.getLogger(__name__)


class LedgerStorage:
    """Loads and saves the ledger record in a named local slot."""

    def __init__(self, slot: Optional[str] = None, data_dir: Optional[Path] = None):
        """Initialize ledger storage.

        Args:
            slot: Slot name. Defaults to ``config.LEDGER_SLOT``.
            data_dir: Directory holding the slot file. Defaults to
                ``config.DATA_DIR``.
        """
        self.slot = slot or config.LEDGER_SLOT
        self.data_dir = Path(data_dir) if data_dir is not None else config.DATA_DIR

    @property
    def path(self) -> Path:
        """File path backing the slot."""
        return self.data_dir / slot_filename(self.slot)

    def load(self) -> LedgerRecord:
        """Return the last saved record.

        A missing slot yields the zero-default record. So does a slot whose
        content is not valid JSON or not a JSON object: that is treated as
        "no data" and logged, never raised.
        """
        target = self.path
        if not target.exists():
            return LedgerRecord.default()
        try:
            with target.open('r', encoding='utf-8') as handle:
                data = json.load(handle)
            return LedgerRecord.from_dict(data)
        except (
            json.JSONDecodeError,
            UnicodeDecodeError,
            RecursionError,
            OverflowError,
            MalformedPersistedData,
        ) as e:
            logger.warning("Discarding malformed ledger data in %s: %s", target, e)
            return LedgerRecord.default()
        except OSError as e:
            logger.warning("Could not read ledger slot %s: %s", target, e)
            return LedgerRecord.default()

    def save(self, record: LedgerRecord) -> None:
        """Serialize ``record`` and overwrite the slot with it.

        Raises:
            OSError: If the slot file cannot be written
        """
        ensure_directory(self.data_dir)
        write_json_atomic(self.path, record.to_dict())
        logger.debug("Saved ledger with %d expenses to %s", len(record.expenses), self.path)

    def clear(self) -> None:
        """Delete the slot file; the next load returns the default record."""
        target = self.path
        if not target.exists():
            return  # Silently ignore a missing slot
        try:
            target.unlink()
        except OSError as e:
            raise OSError(f"Failed to delete ledger slot {target}: {e}") from e
