"""springs.unfold
==================

The unfolding transformation used by the scaled variant of the puzzle: the
record is repeated ``factor`` times with a single unknown cell between copies,
and the group list is repeated ``factor`` times as-is.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

from .constants import MAX_UNFOLDED_CELLS, MAX_UNFOLDED_GROUPS
from .errors import InputTooLargeError
from .parser import RecordLike, parse_cells
from .types import Cell, Cells, ConditionRecord, Groups


def unfolded_size(record_length: int, group_count: int, factor: int) -> Tuple[int, int]:
    """Return ``(cells, groups)`` lengths after unfolding by ``factor``."""

    if factor < 1:
        raise ValueError(f"unfold factor must be at least 1, got {factor}")
    return record_length * factor + (factor - 1), group_count * factor


def check_unfold_capacity(
    record: Sequence[object],
    groups: Sequence[int],
    factor: int,
    max_cells: int = MAX_UNFOLDED_CELLS,
    max_groups: int = MAX_UNFOLDED_GROUPS,
) -> None:
    """Raise :class:`InputTooLargeError` before unfolding an oversized record."""

    cells, group_count = unfolded_size(len(record), len(groups), factor)
    if cells > max_cells:
        raise InputTooLargeError("unfolded record length", cells, max_cells)
    if group_count > max_groups:
        raise InputTooLargeError("unfolded group count", group_count, max_groups)


def unfold(record: RecordLike, groups: Sequence[int], factor: int) -> Tuple[Cells, Groups]:
    """Replicate ``record`` and ``groups`` ``factor`` times.

    Copies of the record are joined by exactly one :attr:`Cell.UNKNOWN`; no
    separator is added before the first or after the last copy. The function
    is pure: repeated calls with the same arguments return equal tuples.
    """

    if factor < 1:
        raise ValueError(f"unfold factor must be at least 1, got {factor}")
    cells = parse_cells(record)
    unfolded: List[Cell] = []
    for copy in range(factor):
        if copy:
            unfolded.append(Cell.UNKNOWN)
        unfolded.extend(cells)
    return tuple(unfolded), tuple(int(group) for group in groups) * factor


def unfold_record(record: ConditionRecord, factor: int) -> ConditionRecord:
    """Unfold a whole :class:`ConditionRecord`, keeping its source metadata."""

    cells, groups = unfold(record.cells, record.groups, factor)
    return ConditionRecord(cells=cells, groups=groups, line_no=record.line_no, text=record.text)


__all__ = ["unfolded_size", "check_unfold_capacity", "unfold", "unfold_record"]
