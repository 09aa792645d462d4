"""springs.parser
==================

Turns ``<record> <spec>`` text lines into :class:`~springs.types.ConditionRecord`
instances. Each line is parsed independently; batch parsing collects failures
instead of stopping at the first malformed line.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple, Union

from .errors import RecordParseError
from .types import Cell, Cells, ConditionRecord, Groups, RecordFailure

RecordLike = Union[str, Sequence[Cell]]


def parse_cells(record: RecordLike) -> Cells:
    """Coerce ``record`` into a tuple of :class:`Cell`.

    Strings over ``.#?`` and sequences that already hold cells are both
    accepted; anything else raises :class:`RecordParseError`.
    """

    cells: List[Cell] = []
    for index, symbol in enumerate(record):
        try:
            cells.append(Cell(symbol))
        except ValueError:
            raise RecordParseError(f"illegal cell {symbol!r} at column {index + 1}") from None
    return tuple(cells)


def parse_groups(spec: str) -> Groups:
    """Parse a comma-separated list of positive run lengths."""

    groups: List[int] = []
    for part in spec.split(","):
        token = part.strip()
        if not (token.isascii() and token.isdigit()):
            raise RecordParseError(f"group length {token!r} is not a positive integer")
        value = int(token)
        if value < 1:
            raise RecordParseError(f"group length {value} must be at least 1")
        groups.append(value)
    return tuple(groups)


def parse_line(line: str, line_no: Optional[int] = None) -> ConditionRecord:
    """Parse one input line into a :class:`ConditionRecord`."""

    text = line.strip()
    parts = text.split()
    if len(parts) != 2:
        raise RecordParseError(
            f"expected '<record> <spec>', found {len(parts)} field(s)", line_no=line_no, line=text
        )
    try:
        cells = parse_cells(parts[0])
        groups = parse_groups(parts[1])
    except RecordParseError as exc:
        raise RecordParseError(exc.reason, line_no=line_no, line=text) from None
    return ConditionRecord(cells=cells, groups=groups, line_no=line_no, text=text)


def parse_lines(lines: Iterable[str]) -> Tuple[List[ConditionRecord], List[RecordFailure]]:
    """Parse a batch of lines, skipping blanks.

    Returns
    -------
    tuple[list[ConditionRecord], list[RecordFailure]]
        Successfully parsed records in input order, and one failure entry per
        malformed line. Line numbers are 1-based and count blank lines too.
    """

    records: List[ConditionRecord] = []
    failures: List[RecordFailure] = []
    for line_no, raw in enumerate(lines, start=1):
        if not raw.strip():
            continue
        try:
            records.append(parse_line(raw, line_no=line_no))
        except RecordParseError as exc:
            failures.append(RecordFailure(line_no=line_no, line=raw.strip(), kind="parse", message=exc.reason))
    return records, failures


__all__ = ["RecordLike", "parse_cells", "parse_groups", "parse_line", "parse_lines"]
