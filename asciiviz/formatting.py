"""Turn raw labels, keys and values into display strings."""

from __future__ import annotations

import datetime as dt
from collections.abc import Callable
from decimal import Decimal
from typing import Any

Formatter = Callable[[Any], str]


def format_number(val: float | int | Decimal) -> str:
    """Format a number with thousands separators.

    Integral values print without decimals; anything else keeps two
    decimal places below 1,000 and none above.
    """
    if isinstance(val, int):
        return f"{val:,}"
    val = float(val)
    if val.is_integer() or abs(val) >= 1000:
        return f"{val:,.0f}"
    return f"{val:,.2f}"


def format_date(val: dt.date) -> str:
    return val.strftime("%Y-%m-%d")


def format_label(val: Any) -> str:
    """Default formatter for bar labels, which may be of any type."""
    if isinstance(val, dt.date):
        return format_date(val)
    if isinstance(val, (int, float, Decimal)) and not isinstance(val, bool):
        return format_number(val)
    return str(val)


def default_formatter(kind: str) -> Formatter:
    """Pick the formatter for an axis of the given kind."""
    match kind:
        case "date":
            return format_date
        case "number":
            return format_number
        case _:
            return format_label
