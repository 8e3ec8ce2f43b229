"""Small multiples: split records into groups and tile their chart blocks."""

from __future__ import annotations

from collections.abc import Hashable, Sequence
from dataclasses import dataclass, field
from typing import Any

from asciiviz.errors import ConfigurationError, InvalidDataError
from asciiviz.series import Record

BLOCK_GAP = 4


@dataclass
class Groups:
    """Records grouped by a key, remembering the order keys first appeared."""

    key: str
    order: list[Any] = field(default_factory=list)
    members: dict[Hashable, list[Record]] = field(default_factory=dict)

    def add(self, value: Any, record: Record) -> None:
        if value not in self.members:
            self.order.append(value)
            self.members[value] = []
        self.members[value].append(record)

    def items(self) -> list[tuple[Any, list[Record]]]:
        return [(value, self.members[value]) for value in self.order]

    def __len__(self) -> int:
        return len(self.order)


def group_records(records: Sequence[Record], key: str) -> Groups:
    """Partition *records* by the value of *key*, in first-seen order."""
    if not records:
        raise ConfigurationError("No data to chart: the record list is empty.")
    if key not in records[0]:
        raise ConfigurationError(f"Small-multiples key {key!r} not found in the first record.")

    groups = Groups(key)
    for i, rec in enumerate(records):
        if key not in rec:
            raise InvalidDataError("Missing group value", key, i)
        value = rec[key]
        try:
            hash(value)
        except TypeError:
            raise InvalidDataError(
                f"Unhashable group value of type {type(value).__name__}", key, i
            ) from None
        groups.add(value, rec)
    return groups


def titled_block(title: str, body: Sequence[str]) -> list[str]:
    """Put *title* on top of *body* and pad every line to one width."""
    lines = [title, *body]
    width = max(len(line) for line in lines)
    return [line.ljust(width) for line in lines]


def tile_blocks(blocks: Sequence[Sequence[str]], per_row: int, gap: int = BLOCK_GAP) -> list[str]:
    """Lay blocks out left to right, *per_row* at a time.

    Blocks in the same row are padded to the tallest one. Rows of blocks
    are separated by a blank line.
    """
    if per_row < 1:
        raise ConfigurationError("small_multiples_per_row must be at least 1.")

    lines: list[str] = []
    for start in range(0, len(blocks), per_row):
        row = blocks[start : start + per_row]
        height = max(len(b) for b in row)
        widths = [max((len(line) for line in b), default=0) for b in row]
        if start:
            lines.append("")
        for i in range(height):
            cells = [
                (b[i] if i < len(b) else "").ljust(w) for b, w in zip(row, widths)
            ]
            lines.append((" " * gap).join(cells).rstrip())
    return lines
