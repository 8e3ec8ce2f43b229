"""Bucket-average dense series down to the available column count."""

from __future__ import annotations

from asciiviz.series import Series


def bucket_bounds(length: int, width: int) -> list[tuple[int, int]]:
    """Split ``range(length)`` into *width* contiguous index ranges.

    Bucket sizes differ by at most one. Boundaries depend on positions
    only, not on key spacing.
    """
    return [(i * length // width, (i + 1) * length // width) for i in range(width)]


def downsample(series: Series, width: int) -> Series:
    """Reduce *series* to at most *width* points.

    Series that already fit are returned unchanged. Longer ones are cut
    into *width* buckets and each bucket becomes the mean of its keys and
    the mean of its values.
    """
    if width < 1:
        raise ValueError("width must be at least 1")
    if len(series) <= width:
        return series

    keys = []
    values = []
    for start, end in bucket_bounds(len(series), width):
        n = end - start
        keys.append(sum(series.keys[start:end]) / n)
        values.append(sum(series.values[start:end]) / n)
    return Series(tuple(keys), tuple(values), series.key_kind)
