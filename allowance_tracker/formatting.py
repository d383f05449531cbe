"""Formatting utilities for amounts, dates and categories."""

from __future__ import annotations

import math
from datetime import date
from typing import Optional, Union

from . import config
from .models import DEFAULT_CATEGORY

CATEGORY_ICONS = {
    'food': '🍔',
    'transport': '🚌',
    'entertainment': '🎬',
    'stationary': '✏️',
    'bills': '💡',
    'shopping': '🛍️',
    'other': '📦',
}


def format_currency(amount: Union[float, int], label: Optional[str] = None) -> str:
    """Format an amount with thousands separators and the currency label.

    At most two decimals are shown and trailing zeros are dropped.

    Example:
        >>> format_currency(1234.5)
        'Rs. 1,234.5'
        >>> format_currency(-200)
        '-Rs. 200'
    """
    label = config.CURRENCY_LABEL if label is None else label
    text = f"{abs(amount):,.2f}".rstrip('0').rstrip('.')
    sign = '-' if round(amount, 2) < 0 else ''
    return f"{sign}{label} {text}" if label else f"{sign}{text}"


def rounded_percentage(value: float) -> int:
    """Round a percentage to a whole number, halves up."""
    return math.floor(value + 0.5)


def format_percentage(value: float) -> str:
    """Whole-number percentage with halves rounded up, e.g. ``'42%'``."""
    return f"{rounded_percentage(value)}%"


def format_date(value: date) -> str:
    """Short display date, e.g. ``'Oct 19'``."""
    return f"{value.strftime('%b')} {value.day}"


def format_long_date(value: date) -> str:
    """Header date, e.g. ``'Monday, October 19, 2026'``."""
    return f"{value.strftime('%A, %B')} {value.day}, {value.year}"


def category_label(category: str) -> str:
    """Capitalised category name; empty categories read as ``Other``."""
    text = (category or DEFAULT_CATEGORY).strip() or DEFAULT_CATEGORY
    return text[:1].upper() + text[1:]


def category_icon(category: str) -> str:
    """Icon for ``category``; unknown categories get the ``other`` icon."""
    return CATEGORY_ICONS.get((category or '').lower(), CATEGORY_ICONS[DEFAULT_CATEGORY])
