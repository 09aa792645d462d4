"""springs.cli
==============

Command-line entry point: reads a batch of condition records, prints the plain
and unfolded totals, and optionally writes a JSON summary and a per-record
stats CSV.
"""

from __future__ import annotations

import argparse
import csv
import json
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict

from .aggregate import aggregate_lines
from .config import CountConfig
from .constants import FAIL_LOG, MAX_UNFOLDED_CELLS, MAX_UNFOLDED_GROUPS, UNFOLD_FACTOR
from .logging_utils import format_summary, log_failure
from .types import BatchSummary


def _summary_payload(summary: BatchSummary) -> Dict[str, Any]:
    return {
        "total_plain": summary.total_plain,
        "total_unfolded": summary.total_unfolded,
        "parsed": summary.parsed,
        "counted": summary.counted,
        "failed": summary.failed,
        "failures": [asdict(failure) for failure in summary.failures],
        "records": [asdict(result) for result in summary.results],
    }


def _write_stats_csv(path: Path, summary: BatchSummary) -> None:
    with path.open("w", newline="") as csv_file:
        writer = csv.writer(csv_file)
        writer.writerow([
            "line_no",
            "record",
            "plain",
            "unfolded",
            "elapsed",
            "plain_memo_entries",
            "unfolded_memo_entries",
        ])
        for result in summary.results:
            writer.writerow([
                result.line_no,
                result.text,
                result.plain,
                result.unfolded,
                f"{result.elapsed:.6f}",
                result.plain_memo_entries,
                result.unfolded_memo_entries,
            ])


def count_file(path: str, config: CountConfig) -> BatchSummary:
    """Count every record in the file at ``path``."""

    return aggregate_lines(Path(path).read_text().splitlines(), config)


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments, count the batch and report the totals."""

    parser = argparse.ArgumentParser("springs", description="Count condition record arrangements")
    parser.add_argument("--infile", required=True, help="Newline-delimited '<record> <spec>' input")
    parser.add_argument("--outfile", default=None, help="Optional JSON summary output")
    parser.add_argument("--stats-csv", default=None, help="Optional per-record stats CSV")
    parser.add_argument("--factor", type=int, default=UNFOLD_FACTOR, help="Unfold factor for the scaled variant")
    parser.add_argument("--max-workers", type=int, default=1, help="Number of worker processes (0 = all CPUs)")
    parser.add_argument("--max-cells", type=int, default=MAX_UNFOLDED_CELLS, help="Largest unfolded record accepted")
    parser.add_argument("--max-groups", type=int, default=MAX_UNFOLDED_GROUPS, help="Largest unfolded group list accepted")
    parser.add_argument("--fail-log", default=FAIL_LOG, help="JSON-lines log of lines that were not counted")
    parser.add_argument("--quiet", action="store_true", help="Suppress per-line warnings")
    args = parser.parse_args(argv)

    if args.factor < 1:
        parser.error("--factor must be at least 1")

    config = CountConfig(
        unfold_factor=args.factor,
        max_unfolded_cells=args.max_cells,
        max_unfolded_groups=args.max_groups,
        max_workers=args.max_workers,
        verbose=not args.quiet,
    )
    summary = count_file(args.infile, config)

    for line in format_summary(summary):
        print(line)

    if summary.failures:
        for failure in summary.failures:
            log_failure(failure, args.fail_log)
        print(f"Failed lines logged to {args.fail_log}")
    if args.stats_csv:
        _write_stats_csv(Path(args.stats_csv), summary)
        print(f"Per-record stats saved to {args.stats_csv}")
    if args.outfile:
        Path(args.outfile).write_text(json.dumps(_summary_payload(summary), indent=2))
        print(f"Summary saved to {args.outfile}")


__all__ = ["main", "count_file"]
