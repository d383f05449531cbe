"""File helpers for the ledger slot: names, directories and atomic writes."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def slot_filename(slot: str, default: str = 'ledger') -> str:
    """Turn a storage slot name into a JSON file name.

    Keeps alphanumeric characters, underscores and hyphens; spaces become
    underscores.

    Example:
        >>> slot_filename("hostelFinanceData")
        'hostelFinanceData.json'
        >>> slot_filename("my ledger!")
        'my_ledger.json'
        >>> slot_filename("")
        'ledger.json'
    """
    cleaned = ''.join(c for c in (slot or '') if c.isalnum() or c in {' ', '_', '-'})
    cleaned = cleaned.strip().replace(' ', '_')
    while '__' in cleaned:
        cleaned = cleaned.replace('__', '_')
    cleaned = cleaned.strip('_')
    return f"{cleaned or default}.json"


def ensure_directory(path: Path) -> Path:
    """Ensure a directory exists, creating it if necessary.

    Returns:
        The path object (for chaining)
    """
    path.mkdir(parents=True, exist_ok=True)
    return path


def write_json_atomic(target: Path, payload: Any) -> None:
    """Serialize ``payload`` and atomically replace ``target`` with it.

    The JSON is written to a temporary file next to ``target`` and moved into
    place with ``os.replace``, so readers see either the old or the new
    content and never a partial file.

    Raises:
        OSError: If the file cannot be written or renamed
    """
    ensure_directory(target.parent)
    content = json.dumps(payload, indent=2, sort_keys=True)
    temp_name = None
    try:
        with tempfile.NamedTemporaryFile(
            mode='w',
            encoding='utf-8',
            prefix=f"{target.name}-",
            suffix='.tmp',
            dir=target.parent,
            delete=False,
        ) as handle:
            temp_name = handle.name
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(temp_name, target)
    except OSError as e:
        if temp_name and os.path.exists(temp_name):
            try:
                os.unlink(temp_name)
            except OSError:
                logger.exception("Failed to remove temporary file %s", temp_name)
        raise OSError(f"Failed to write {target}: {e}") from e
    logger.debug("Wrote %s", target)
