"""Bar, dot and line charts printed as plain text.

Each ``log_*`` function validates its input, builds the whole chart in
memory and prints it with a single write, so a failing call never
leaves half a chart on the stream::

    log_bar_chart(rows, "region", "revenue", title="Revenue", total_label="Total")
    log_line_chart(rows, "day", "visits", small_multiples="site", fixed_scales=True)
"""

from __future__ import annotations

import sys
from collections.abc import Sequence
from typing import IO

from asciiviz.downsample import downsample
from asciiviz.errors import ConfigurationError, InvalidDataError
from asciiviz.formatting import Formatter, default_formatter, format_label, format_number
from asciiviz.grid import render_bars, render_plot
from asciiviz.layout import group_records, tile_blocks, titled_block
from asciiviz.scales import resolve_domains
from asciiviz.series import AxisKind, Record, extract_bars, extract_series, infer_kind, require_fields

DEFAULT_BAR_WIDTH = 50
DEFAULT_WIDTH = 60
DEFAULT_HEIGHT = 20
DEFAULT_PER_ROW = 3


def log_bar_chart(
    data: Sequence[Record],
    label: str,
    value: str,
    *,
    format_labels: Formatter | None = None,
    format_values: Formatter | None = None,
    width: int = DEFAULT_BAR_WIDTH,
    title: str | None = None,
    total_label: str | None = None,
    compact: bool = False,
    stream: IO[str] | None = None,
) -> None:
    """Print one horizontal bar per record, scaled to the largest value.

    Bars keep the input order. A blank line separates bars unless
    *compact* is set. With *total_label*, the sum of all values is
    printed under the bars.

    *format_values* receives each value exactly as it appears in the
    record (an int stays an int), and the total as their sum.
    """
    _check_int("width", width, 1)
    bars = extract_bars(data, label, value)
    format_labels = format_labels or format_label
    format_values = format_values or format_number

    total = None
    if total_label is not None:
        total = (total_label, format_values(bars.total()))

    lines = [title] if title else []
    lines += render_bars(
        [format_labels(lbl) for lbl in bars.labels],
        bars.values,
        [format_values(v) for v in bars.raw],
        width,
        compact=compact,
        total=total,
    )
    _emit(lines, stream)


def log_dot_chart(
    data: Sequence[Record],
    x: str,
    y: str,
    *,
    format_x: Formatter | None = None,
    format_y: Formatter | None = None,
    width: int = DEFAULT_WIDTH,
    height: int = DEFAULT_HEIGHT,
    title: str | None = None,
    small_multiples: str | None = None,
    fixed_scales: bool = False,
    small_multiples_per_row: int = DEFAULT_PER_ROW,
    x_type: AxisKind | None = None,
    stream: IO[str] | None = None,
) -> None:
    """Print one marker per record on a *width* x *height* grid.

    *format_y* receives tick positions on the y scale as floats.
    *format_x* receives numbers, or UTC datetimes on date axes.
    """
    _plot_chart(**locals(), connect=False)


def log_line_chart(
    data: Sequence[Record],
    x: str,
    y: str,
    *,
    format_x: Formatter | None = None,
    format_y: Formatter | None = None,
    width: int = DEFAULT_WIDTH,
    height: int = DEFAULT_HEIGHT,
    title: str | None = None,
    small_multiples: str | None = None,
    fixed_scales: bool = False,
    small_multiples_per_row: int = DEFAULT_PER_ROW,
    x_type: AxisKind | None = None,
    stream: IO[str] | None = None,
) -> None:
    """Print records as a connected line.

    Series with more points than *width* are bucket-averaged down to
    *width* points first. Formatters get the same values as in
    :func:`log_dot_chart`.
    """
    _plot_chart(**locals(), connect=True)


# ── Shared plumbing ───────────────────────────────────────────────


def _plot_chart(
    data: Sequence[Record],
    x: str,
    y: str,
    *,
    connect: bool,
    format_x: Formatter | None,
    format_y: Formatter | None,
    width: int,
    height: int,
    title: str | None,
    small_multiples: str | None,
    fixed_scales: bool,
    small_multiples_per_row: int,
    x_type: AxisKind | None,
    stream: IO[str] | None,
) -> None:
    _check_int("width", width, 1)
    _check_int("height", height, 2)
    _check_int("small_multiples_per_row", small_multiples_per_row, 1)

    require_fields(data, x, y, *([small_multiples] if small_multiples else []))
    if x_type is None:
        if data[0][x] is None:
            raise InvalidDataError("Missing value", x, 0)
        x_type = infer_kind(data[0][x], x)

    if small_multiples:
        groups = group_records(data, small_multiples).items()
        names = [format_label(name) for name, _ in groups]
        series = [extract_series(rows, x, y, x_type) for _, rows in groups]
    else:
        names = []
        series = [extract_series(data, x, y, x_type)]

    x_domains = resolve_domains(series, "x", fixed_scales)
    y_domains = resolve_domains(series, "y", fixed_scales)
    format_x = format_x or default_formatter(x_type)
    format_y = format_y or format_number

    blocks = []
    for s, xd, yd in zip(series, x_domains, y_domains):
        if connect:
            s = downsample(s, width)
        blocks.append(render_plot(s, xd, yd, width, height, format_x, format_y, connect))

    lines = [title or f"x: {x} | y: {y}"]
    if small_multiples:
        blocks = [titled_block(name, body) for name, body in zip(names, blocks)]
        lines += tile_blocks(blocks, small_multiples_per_row)
    else:
        lines += blocks[0]
    _emit(lines, stream)


def _check_int(name: str, value: int, minimum: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
        raise ConfigurationError(f"{name} must be an integer >= {minimum}, got {value!r}.")


def _emit(lines: list[str], stream: IO[str] | None) -> None:
    _print("\n".join(line.rstrip() for line in lines), stream)


def _print(msg: str = "", stream: IO[str] | None = None) -> None:
    print(msg, file=stream or sys.stdout)
