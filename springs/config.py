"""springs.config
==================

Configuration knobs for batch counting. Values are normalised in
``__post_init__`` so the CLI and library callers share the same defaults.
"""

from __future__ import annotations

import multiprocessing
import sys
from dataclasses import dataclass

from .constants import MAX_UNFOLDED_CELLS, MAX_UNFOLDED_GROUPS, RECURSION_MARGIN, UNFOLD_FACTOR


@dataclass
class CountConfig:
    """Configuration for :func:`springs.aggregate.aggregate`."""

    unfold_factor: int = UNFOLD_FACTOR
    max_unfolded_cells: int = MAX_UNFOLDED_CELLS
    max_unfolded_groups: int = MAX_UNFOLDED_GROUPS
    max_workers: int = 1
    verbose: bool = True

    def __post_init__(self) -> None:
        self.unfold_factor = max(1, int(self.unfold_factor))
        self.max_unfolded_cells = max(0, int(self.max_unfolded_cells))
        # The counter recurses once per group.
        depth_cap = max(0, sys.getrecursionlimit() - RECURSION_MARGIN)
        self.max_unfolded_groups = max(0, min(int(self.max_unfolded_groups), depth_cap))
        if self.max_workers <= 0:
            self.max_workers = multiprocessing.cpu_count()


__all__ = ["CountConfig"]
