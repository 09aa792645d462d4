"""springs.aggregate
=====================

Batch driver: counts every record in both variants and sums the results.

Each record's plain and unfolded counts are independent calls with their own
memo caches, so records can be farmed out to worker processes and the totals
combined by plain summation. Failures are collected per line rather than
aborting the batch; a record too large to unfold still contributes its plain
count.
"""

from __future__ import annotations

import sys
from concurrent.futures import ProcessPoolExecutor, as_completed
from time import time as now
from typing import Iterable, List, Optional, Sequence, Tuple

from .config import CountConfig
from .constants import RECURSION_MARGIN
from .counter import ArrangementCounter
from .errors import InputTooLargeError
from .parser import parse_lines
from .types import BatchSummary, Cell, ConditionRecord, RecordFailure, RecordResult
from .unfold import check_unfold_capacity, unfold


def _run_counter(cells: Sequence[Cell], groups: Sequence[int]) -> Tuple[int, int]:
    """Return ``(count, memo_entries)`` for one counting call."""

    counter = ArrangementCounter(cells, groups)
    try:
        total = counter.count()
    except RecursionError:
        limit = max(0, sys.getrecursionlimit() - RECURSION_MARGIN)
        raise InputTooLargeError("group count", len(counter.groups), limit) from None
    return total, len(counter.cache)


def count_record(record: ConditionRecord, config: CountConfig) -> RecordResult:
    """Count ``record`` as written and unfolded. Executed in worker processes.

    Raises :class:`InputTooLargeError` only when the record is too large to
    count as written; an oversized unfolded record leaves ``unfolded`` unset.
    """

    start_time = now()
    check_unfold_capacity(
        record.cells,
        record.groups,
        1,
        max_cells=config.max_unfolded_cells,
        max_groups=config.max_unfolded_groups,
    )
    plain, plain_entries = _run_counter(record.cells, record.groups)

    unfolded: Optional[int] = None
    unfolded_entries = 0
    unfolded_error: Optional[str] = None
    try:
        check_unfold_capacity(
            record.cells,
            record.groups,
            config.unfold_factor,
            max_cells=config.max_unfolded_cells,
            max_groups=config.max_unfolded_groups,
        )
        cells, groups = unfold(record.cells, record.groups, config.unfold_factor)
        unfolded, unfolded_entries = _run_counter(cells, groups)
    except InputTooLargeError as exc:
        unfolded_error = str(exc)

    return RecordResult(
        line_no=record.line_no,
        text=_record_text(record),
        plain=plain,
        unfolded=unfolded,
        elapsed=now() - start_time,
        plain_memo_entries=plain_entries,
        unfolded_memo_entries=unfolded_entries,
        unfolded_error=unfolded_error,
    )


def _record_text(record: ConditionRecord) -> str:
    return record.text or f"{record.cells_text()} {record.groups_text()}"


def _too_large(record: ConditionRecord, message: str) -> RecordFailure:
    return RecordFailure(line_no=record.line_no, line=_record_text(record), kind="too_large", message=message)


def _sort_key(line_no: Optional[int]) -> int:
    return line_no if line_no is not None else -1


def aggregate(
    records: Iterable[ConditionRecord],
    config: CountConfig | None = None,
    summary: BatchSummary | None = None,
) -> BatchSummary:
    """Sum plain and unfolded counts over ``records``.

    Parameters
    ----------
    records:
        Parsed condition records.
    config:
        Counting configuration; defaults to :class:`CountConfig`.
    summary:
        Optional summary to extend, used by :func:`aggregate_lines` to keep
        parse failures alongside counting results.

    Returns
    -------
    BatchSummary
        Totals plus per-record results and failures, both ordered by line.
    """

    cfg = config or CountConfig()
    batch = summary if summary is not None else BatchSummary()
    pending: List[ConditionRecord] = list(records)
    batch.parsed += len(pending)

    def _reject(record: ConditionRecord, message: str) -> None:
        failure = _too_large(record, message)
        batch.failures.append(failure)
        if cfg.verbose:
            print(f"[WARN] line {failure.line_no}: {failure.message}")

    def _collect(record: ConditionRecord, result: RecordResult) -> None:
        batch.results.append(result)
        batch.total_plain += result.plain
        if result.unfolded is None:
            _reject(record, f"unfolded count skipped: {result.unfolded_error}")
        else:
            batch.total_unfolded += result.unfolded

    if cfg.max_workers <= 1 or len(pending) <= 1:
        for record in pending:
            try:
                result = count_record(record, cfg)
            except InputTooLargeError as exc:
                _reject(record, str(exc))
                continue
            _collect(record, result)
    else:
        with ProcessPoolExecutor(max_workers=cfg.max_workers) as executor:
            futures = {executor.submit(count_record, record, cfg): record for record in pending}
            for future in as_completed(futures):
                record = futures[future]
                try:
                    result = future.result()
                except InputTooLargeError as exc:
                    _reject(record, str(exc))
                    continue
                _collect(record, result)

    batch.results.sort(key=lambda item: _sort_key(item.line_no))
    batch.failures.sort(key=lambda item: _sort_key(item.line_no))
    return batch


def aggregate_lines(lines: Iterable[str], config: CountConfig | None = None) -> BatchSummary:
    """Parse ``lines`` and aggregate the records that parsed cleanly."""

    cfg = config or CountConfig()
    records, failures = parse_lines(lines)
    if cfg.verbose:
        for failure in failures:
            print(f"[WARN] line {failure.line_no}: {failure.message} ({failure.line!r})")
    return aggregate(records, cfg, summary=BatchSummary(failures=list(failures)))


__all__ = ["count_record", "aggregate", "aggregate_lines"]
