"""Configuration management for the allowance tracker.

This module centralizes all configuration values including paths,
the storage slot name, display defaults, and environment variable overrides.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

# Base project root - assumes this file is in allowance_tracker/
_PROJECT_ROOT = Path(__file__).parent.parent.resolve()

# Data directory holding the persisted ledger slot
DATA_DIR = Path(os.getenv("ALLOWANCE_TRACKER_DATA_DIR", _PROJECT_ROOT / "data"))

# Name of the single slot the ledger record is stored under
LEDGER_SLOT = os.getenv("ALLOWANCE_TRACKER_SLOT", "hostelFinanceData")

# Label placed in front of every formatted amount
CURRENCY_LABEL = os.getenv("ALLOWANCE_TRACKER_CURRENCY", "Rs.")

LOG_LEVEL = os.getenv("ALLOWANCE_TRACKER_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def ensure_data_directories() -> None:
    """Create the data directory if it doesn't exist."""
    DATA_DIR.mkdir(parents=True, exist_ok=True)


def configure_logging(level: str | int | None = None) -> None:
    """Install a console handler on the root logger.

    Safe to call on every Streamlit rerun: ``basicConfig`` is a no-op once
    the root logger has handlers.
    """
    resolved = level if level is not None else LOG_LEVEL
    if isinstance(resolved, str):
        resolved = logging.getLevelName(resolved)
        if not isinstance(resolved, int):
            resolved = logging.INFO
    logging.basicConfig(level=resolved, format=LOG_FORMAT)
