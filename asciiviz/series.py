"""Resolve open-ended records into typed series.

Records are plain mappings (CSV rows, query results, hand-written dicts).
Field access and validation happen once here; the renderers only ever
see :class:`Series` and :class:`Bars`, whose numeric contents are
guaranteed to be finite floats.
"""

from __future__ import annotations

import datetime as dt
import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Literal

from asciiviz.errors import ConfigurationError, InvalidDataError

AxisKind = Literal["number", "date"]
Record = Mapping[str, Any]

_EPOCH = dt.datetime(1970, 1, 1, tzinfo=dt.timezone.utc)


@dataclass(frozen=True, slots=True)
class Series:
    """Ordered ``(key, value)`` pairs, keys as numbers (epoch ms for dates)."""

    keys: tuple[float, ...]
    values: tuple[float, ...]
    key_kind: AxisKind = "number"

    def __len__(self) -> int:
        return len(self.keys)


@dataclass(frozen=True, slots=True)
class Bars:
    """Labels and their values for a bar chart.

    ``values`` are floats for geometry; ``raw`` keeps the record values
    as given, for formatting.
    """

    labels: tuple[Any, ...]
    values: tuple[float, ...]
    raw: tuple[Any, ...] = ()

    def total(self) -> Any:
        """Sum of the raw values, or of the floats when their types mix."""
        if len({type(v) for v in self.raw}) == 1:
            return sum(self.raw)
        return sum(self.values)


# ── Validation ────────────────────────────────────────────────────


def require_fields(records: Sequence[Record], *fields: str) -> None:
    """Check that every field is present in the first record."""
    if not records:
        raise ConfigurationError("No data to chart: the record list is empty.")
    first = records[0]
    missing = [f for f in fields if f not in first]
    if missing:
        available = ", ".join(map(str, first)) or "none"
        raise ConfigurationError(
            f"Field(s) {', '.join(map(repr, missing))} not found in the first "
            f"record (available: {available})."
        )


def infer_kind(value: Any, field: str) -> AxisKind:
    """Decide whether an axis holds numbers or dates from a sample value."""
    if isinstance(value, dt.date):
        return "date"
    if _is_number(value):
        return "number"
    raise InvalidDataError(
        f"Expected a number or a date, got {type(value).__name__}", field, 0
    )


def to_number(value: Any, kind: AxisKind, field: str, index: int) -> float:
    """Convert one cell to a float, failing on anything out of contract."""
    if value is None:
        raise InvalidDataError("Missing value", field, index)
    if kind == "date":
        if not isinstance(value, dt.date):
            raise InvalidDataError(
                f"Expected a date, got {type(value).__name__}", field, index
            )
        return to_epoch_ms(value)
    if not _is_number(value):
        raise InvalidDataError(
            f"Expected a number, got {type(value).__name__}", field, index
        )
    num = float(value)
    if not math.isfinite(num):
        raise InvalidDataError(f"Non-finite value {value!r}", field, index)
    return num


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


# ── Dates ─────────────────────────────────────────────────────────


def to_epoch_ms(value: dt.date) -> float:
    """Milliseconds since the epoch; naive datetimes and plain dates are UTC."""
    if isinstance(value, dt.datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=dt.timezone.utc)
    else:
        value = dt.datetime(value.year, value.month, value.day, tzinfo=dt.timezone.utc)
    return (value - _EPOCH).total_seconds() * 1000


def from_epoch_ms(ms: float) -> dt.datetime:
    return _EPOCH + dt.timedelta(milliseconds=ms)


def restore(num: float, kind: AxisKind) -> Any:
    """Give formatters back a date for date axes, the number otherwise."""
    return from_epoch_ms(num) if kind == "date" else num


# ── Extraction ────────────────────────────────────────────────────


def extract_series(
    records: Sequence[Record],
    x: str,
    y: str,
    x_type: AxisKind | None = None,
) -> Series:
    """Build a :class:`Series` from records, keyed on *x* with values from *y*.

    The key type comes from *x_type* when given, otherwise from the first
    record. Every row must then agree with it.
    """
    require_fields(records, x, y)
    if x_type is None:
        if records[0][x] is None:
            raise InvalidDataError("Missing value", x, 0)
        x_type = infer_kind(records[0][x], x)
    elif x_type not in ("number", "date"):
        raise ConfigurationError(f"x_type must be 'number' or 'date', not {x_type!r}.")

    keys = []
    values = []
    for i, rec in enumerate(records):
        keys.append(to_number(rec.get(x), x_type, x, i))
        values.append(to_number(rec.get(y), "number", y, i))
    return Series(tuple(keys), tuple(values), x_type)


def extract_bars(records: Sequence[Record], label: str, value: str) -> Bars:
    require_fields(records, label, value)
    labels = []
    values = []
    for i, rec in enumerate(records):
        if label not in rec:
            raise InvalidDataError("Missing label", label, i)
        labels.append(rec[label])
        values.append(to_number(rec.get(value), "number", value, i))
    return Bars(tuple(labels), tuple(values), tuple(rec[value] for rec in records))
