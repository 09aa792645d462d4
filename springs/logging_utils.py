"""springs.logging_utils
=========================

Simple reporting utilities: a JSON-lines log of records that did not count
towards the totals, and the text summary printed at the end of a batch.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import List

from .constants import FAIL_LOG
from .types import BatchSummary, RecordFailure


def log_failure(failure: RecordFailure, path: str = FAIL_LOG) -> None:
    """Append a JSON line describing ``failure`` to ``path``."""

    entry = {
        "line_no": failure.line_no,
        "line": failure.line,
        "kind": failure.kind,
        "message": failure.message,
    }
    with Path(path).open("a") as handle:
        handle.write(json.dumps(entry) + "\n")


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


def format_summary(summary: BatchSummary) -> List[str]:
    """Render the totals and the parsed/failed counts of a batch."""

    lines = [
        f"Total possible failures: {summary.total_plain}",
        f"Total possible failures (unfolded): {summary.total_unfolded}",
        f"{_plural(summary.parsed, 'line')} parsed, {summary.counted} counted, "
        f"{summary.total_plain} total arrangements ({summary.total_unfolded} unfolded)",
    ]
    parse_failures = sum(1 for failure in summary.failures if failure.kind == "parse")
    too_large = summary.failed - parse_failures
    if parse_failures:
        lines.append(f"{_plural(parse_failures, 'line')} failed to parse")
    if too_large:
        lines.append(f"{_plural(too_large, 'record')} too large to count in full")
    return lines


__all__ = ["log_failure", "format_summary"]
