"""springs.counter
===================

Memoised arrangement counting for condition records.

The search shrinks the record and the group list from the front: for the
current group it tries every start offset where the run fits, skips the run
and its mandatory separator, and recurses on what is left. Sub-problems are
identified by ``(record_offset, group_offset)`` and cached in a
:class:`~springs.memo.MemoCache` that lives only as long as one counting call.

Range tests ("does this slice contain a blocked cell?") use prefix sums built
with numpy, so each placement check is constant time regardless of run length.
"""

from __future__ import annotations

from itertools import groupby, product
from typing import List, Sequence

import numpy as np

from .constants import BRUTE_FORCE_MAX_UNKNOWNS
from .errors import InputTooLargeError
from .memo import MemoCache
from .parser import RecordLike, parse_cells
from .types import Cell, Cells, Groups


def _prefix_counts(cells: Cells, kind: Cell) -> List[int]:
    """Return ``counts`` where ``counts[j]`` is the number of ``kind`` cells in ``cells[:j]``."""

    mask = np.array([cell is kind for cell in cells], dtype=np.int64)
    return np.concatenate(([0], np.cumsum(mask))).astype(np.int64).tolist()


def _normalise_groups(groups: Sequence[int]) -> Groups:
    normalised = tuple(int(group) for group in groups)
    for group in normalised:
        if group < 1:
            raise ValueError(f"group lengths must be positive, got {group}")
    return normalised


class ArrangementCounter:
    """Count the arrangements of one ``(record, groups)`` pair.

    Parameters
    ----------
    record:
        A string over ``.#?`` or a sequence of :class:`Cell`.
    groups:
        Required blocked-run lengths, in order.

    Notes
    -----
    The instance owns its :class:`MemoCache`; it is exposed as ``cache`` so
    callers can report memo statistics after :meth:`count` returns. Counts are
    Python integers and therefore never overflow.
    """

    def __init__(self, record: RecordLike, groups: Sequence[int]) -> None:
        self.cells: Cells = parse_cells(record)
        self.groups: Groups = _normalise_groups(groups)
        self.cache = MemoCache()
        self._blocked = _prefix_counts(self.cells, Cell.BLOCKED)
        self._clear = _prefix_counts(self.cells, Cell.CLEAR)
        # _room[k]: cells needed by groups[k:], each followed by one separator.
        self._room = [0] * (len(self.groups) + 1)
        for index in range(len(self.groups) - 1, -1, -1):
            self._room[index] = self._room[index + 1] + self.groups[index] + 1

    def count(self) -> int:
        return self._count(0, 0)

    def _count(self, offset: int, group_index: int) -> int:
        key = (offset, group_index)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        size = len(self.cells)
        if group_index == len(self.groups):
            result = 1 if self._blocked[size] == self._blocked[offset] else 0
            self.cache.put(key, result)
            return result

        run = self.groups[group_index]
        last_start = size - offset - (self._room[group_index + 1] + run)
        result = 0
        for shift in range(last_start + 1):
            start = offset + shift
            # A blocked cell before the run can never become clear.
            if shift and self.cells[start - 1] is Cell.BLOCKED:
                break
            end = start + run
            if self._clear[end] != self._clear[start]:
                continue
            if end < size and self.cells[end] is Cell.BLOCKED:
                continue
            result += self._count(min(end + 1, size), group_index + 1)

        self.cache.put(key, result)
        return result


def count_arrangements(record: RecordLike, groups: Sequence[int]) -> int:
    """Return the number of ways ``record`` can resolve to match ``groups``.

    Examples
    --------
    >>> count_arrangements("???.###", [1, 1, 3])
    1
    >>> count_arrangements("?###????????", [3, 2, 1])
    10
    """

    return ArrangementCounter(record, groups).count()


def run_lengths(record: RecordLike) -> Groups:
    """Lengths of the maximal blocked runs of a fully known record."""

    cells = parse_cells(record)
    if Cell.UNKNOWN in cells:
        raise ValueError("run_lengths requires a record without unknown cells")
    return tuple(len(list(run)) for cell, run in groupby(cells) if cell is Cell.BLOCKED)


def count_arrangements_bruteforce(record: RecordLike, groups: Sequence[int]) -> int:
    """Count arrangements by enumerating every resolution of the unknown cells.

    Exponential in the number of unknown cells; intended for cross-checking
    :func:`count_arrangements` on small inputs only.
    """

    cells = list(parse_cells(record))
    target = _normalise_groups(groups)
    unknown = [index for index, cell in enumerate(cells) if cell is Cell.UNKNOWN]
    if len(unknown) > BRUTE_FORCE_MAX_UNKNOWNS:
        raise InputTooLargeError("unknown cells", len(unknown), BRUTE_FORCE_MAX_UNKNOWNS)

    total = 0
    for choice in product((Cell.CLEAR, Cell.BLOCKED), repeat=len(unknown)):
        for index, cell in zip(unknown, choice):
            cells[index] = cell
        if run_lengths(cells) == target:
            total += 1
    return total


__all__ = [
    "ArrangementCounter",
    "count_arrangements",
    "count_arrangements_bruteforce",
    "run_lengths",
]
