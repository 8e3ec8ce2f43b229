"""Rasterize series onto a character grid and draw the chart body.

Bar charts use one text row per category. Dot and line charts map keys
to columns and values to rows (row 0 is the top, i.e. the domain max)
and frame the grid with a y axis on the left and an x axis underneath.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from asciiviz.formatting import Formatter
from asciiviz.scales import Domain
from asciiviz.series import Series, restore

BAR_CHAR = "█"
MARKER = "•"
_MAX_LABEL_LEN = 25


def round_half_up(x: float) -> int:
    return math.floor(x + 0.5)


def scale(value: float, domain: Domain, size: int) -> int:
    """Map *value* onto ``0 .. size - 1``, clamped to the grid."""
    return _position(value - domain.min, domain.span, size)


def _position(offset: float, span: float, size: int) -> int:
    if size <= 1 or span <= 0:
        return 0
    idx = round_half_up(offset / span * (size - 1))
    return max(0, min(size - 1, idx))


class Grid:
    """A ``height`` x ``width`` buffer of single characters."""

    def __init__(self, width: int, height: int, fill: str = " "):
        self.width = width
        self.height = height
        self._cells = [[fill] * width for _ in range(height)]
        self._fill = fill

    def plot(self, col: int, row: int, char: str = MARKER) -> None:
        if 0 <= row < self.height and 0 <= col < self.width:
            self._cells[row][col] = char

    def line(self, c0: int, r0: int, c1: int, r1: int, char: str = MARKER) -> None:
        """Draw a straight segment between two cells, both ends included.

        Integer Bresenham stepping; consecutive cells always touch, so the
        line never skips a row or a column.
        """
        dc = abs(c1 - c0)
        dr = -abs(r1 - r0)
        sc = 1 if c0 < c1 else -1
        sr = 1 if r0 < r1 else -1
        err = dc + dr
        while True:
            self.plot(c0, r0, char)
            if c0 == c1 and r0 == r1:
                break
            e2 = 2 * err
            if e2 >= dr:
                err += dr
                c0 += sc
            if e2 <= dc:
                err += dc
                r0 += sr

    def marked(self) -> list[tuple[int, int]]:
        """Return ``(row, col)`` of every non-blank cell, top to bottom."""
        return [
            (r, c)
            for r, row in enumerate(self._cells)
            for c, ch in enumerate(row)
            if ch != self._fill
        ]

    def rows(self) -> list[str]:
        return ["".join(row) for row in self._cells]


# ── Bars ──────────────────────────────────────────────────────────


def bar_length(value: float, max_value: float, width: int) -> int:
    """Characters for one bar; zero and negative values get none."""
    if value <= 0 or max_value <= 0:
        return 0
    return min(width, round_half_up(value / max_value * width))


def clip_label(label: str) -> str:
    if len(label) > _MAX_LABEL_LEN:
        return label[: _MAX_LABEL_LEN - 3] + "..."
    return label


def render_bars(
    labels: Sequence[str],
    values: Sequence[float],
    formatted: Sequence[str],
    width: int,
    compact: bool = False,
    total: tuple[str, str] | None = None,
) -> list[str]:
    """Render one row per bar, in input order.

    *formatted* holds the display string for each value. *total* is an
    optional ``(label, formatted_sum)`` pair appended below the bars.
    """
    max_value = max(values, default=0)
    labels = [clip_label(lbl) for lbl in labels]
    label_w = max((len(lbl) for lbl in labels), default=0)
    if total:
        total = (clip_label(total[0]), total[1])
        label_w = max(label_w, len(total[0]))

    lines = []
    for i, (label, val, text) in enumerate(zip(labels, values, formatted)):
        if i and not compact:
            lines.append("")
        bar = BAR_CHAR * bar_length(val, max_value, width)
        lines.append(f"{label.rjust(label_w)} │{bar} {text}")

    if total:
        lines.append(f"{'':>{label_w}} └{'─' * width}")
        lines.append(f"{total[0].rjust(label_w)}  {total[1]}")
    return lines


# ── Dots and lines ────────────────────────────────────────────────


def project(
    series: Series, x: Domain, y: Domain, width: int, height: int
) -> list[tuple[int, int]]:
    """Return the ``(col, row)`` cell of every point in *series*.

    Rows count down from the top, so row 0 holds the domain max.
    """
    cells = []
    for key, val in zip(series.keys, series.values):
        col = scale(key, x, width)
        row = _position(y.max - val, y.span, height)
        cells.append((col, row))
    return cells


def rasterize(
    series: Series, x: Domain, y: Domain, width: int, height: int, connect: bool
) -> Grid:
    grid = Grid(width, height)
    cells = project(series, x, y, width, height)
    for col, row in cells:
        grid.plot(col, row)
    if connect:
        for (c0, r0), (c1, r1) in zip(cells, cells[1:]):
            grid.line(c0, r0, c1, r1)
    return grid


def render_plot(
    series: Series,
    x: Domain,
    y: Domain,
    width: int,
    height: int,
    format_x: Formatter,
    format_y: Formatter,
    connect: bool = False,
) -> list[str]:
    """Draw *series* with y tick labels at top, middle and bottom and the
    x range underneath. Every returned line has the same length."""
    grid = rasterize(series, x, y, width, height, connect)

    middle = y.origin if y.padded else y.min + y.span / 2
    ticks = {
        height // 2: format_y(middle),
        0: format_y(y.max),
        height - 1: format_y(y.min),
    }
    label_w = max(len(t) for t in ticks.values())

    lines = []
    for r, row in enumerate(grid.rows()):
        lines.append(f"{ticks.get(r, '').rjust(label_w)} │{row}")
    lines.append(f"{'':>{label_w}} └{'─' * width}")

    if x.padded:
        # every point shares one key: label it under its own column
        label = format_x(restore(x.origin, series.key_kind))
        indent = " " * max(0, scale(x.origin, x, width) - len(label) // 2)
        lines.append(f"{'':>{label_w}}  {indent}{label}")
    else:
        first = format_x(restore(x.min, series.key_kind))
        last = format_x(restore(x.max, series.key_kind))
        gap = " " * max(1, width - len(first) - len(last))
        lines.append(f"{'':>{label_w}}  {first}{gap}{last}")

    block_w = max(len(line) for line in lines)
    return [line.ljust(block_w) for line in lines]
