"""springs.types
=================

Foundational type aliases and lightweight data structures used throughout the
counting engine. Every module imports its canonical representations from here
so that a condition record means exactly the same thing in the parser, the
counter, the unfolder and the batch driver.

The module stays definitions-only: importing it never triggers runtime side
effects.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


class Cell(str, Enum):
    """Tri-state value of a single position in a condition record."""

    CLEAR = "."
    BLOCKED = "#"
    UNKNOWN = "?"


# ---------------------------------------------------------------------------
# Core representations
# ---------------------------------------------------------------------------
Cells = Tuple[Cell, ...]
Groups = Tuple[int, ...]
MemoKey = Tuple[int, int]


@dataclass(frozen=True)
class ConditionRecord:
    """A parsed ``<record> <spec>`` pair.

    Parameters
    ----------
    cells:
        The tri-state cell sequence, possibly empty.
    groups:
        Required lengths of the contiguous blocked runs, in order. Every
        element is at least ``1``.
    line_no:
        1-based line number in the batch the record came from, when known.
    text:
        The raw input line, kept for reporting.

    Notes
    -----
    Records are frozen: the counter and the unfolder only ever read them,
    and derived (unfolded) records are fresh instances.
    """

    cells: Cells
    groups: Groups
    line_no: Optional[int] = None
    text: Optional[str] = None

    def cells_text(self) -> str:
        return "".join(cell.value for cell in self.cells)

    def groups_text(self) -> str:
        return ",".join(str(group) for group in self.groups)


@dataclass
class RecordResult:
    """Outcome of counting a single record in both variants.

    ``unfolded`` is ``None`` when the unfolded record exceeded the capacity
    bounds; ``unfolded_error`` then says why.
    """

    line_no: Optional[int]
    text: str
    plain: int
    unfolded: Optional[int]
    elapsed: float = 0.0
    plain_memo_entries: int = 0
    unfolded_memo_entries: int = 0
    unfolded_error: Optional[str] = None


@dataclass
class RecordFailure:
    """A line that did not contribute to the totals.

    ``kind`` is ``"parse"`` for malformed input and ``"too_large"`` for
    records rejected by the capacity guard.
    """

    line_no: Optional[int]
    line: str
    kind: str
    message: str


@dataclass
class BatchSummary:
    """Totals for a batch plus the bookkeeping needed to report on it."""

    total_plain: int = 0
    total_unfolded: int = 0
    parsed: int = 0
    results: List[RecordResult] = field(default_factory=list)
    failures: List[RecordFailure] = field(default_factory=list)

    @property
    def counted(self) -> int:
        return len(self.results)

    @property
    def failed(self) -> int:
        return len(self.failures)


__all__ = [
    "Cell",
    "Cells",
    "Groups",
    "MemoKey",
    "ConditionRecord",
    "RecordResult",
    "RecordFailure",
    "BatchSummary",
]
