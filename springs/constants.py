"""springs.constants
====================

Global constants used across the counting engine. Keeping them here avoids
import cycles between modules and makes the default bounds easy to discover.
"""

from __future__ import annotations

UNFOLD_FACTOR = 5

# Capacity bounds checked before a record is unfolded. The group bound also
# caps recursion depth in the counter (one frame per group).
MAX_UNFOLDED_CELLS = 20_000
MAX_UNFOLDED_GROUPS = 600

# Frames kept free below sys.getrecursionlimit() when bounding group counts.
RECURSION_MARGIN = 200

BRUTE_FORCE_MAX_UNKNOWNS = 22

FAIL_LOG = "failed_records.jsonl"

__all__ = [
    "UNFOLD_FACTOR",
    "MAX_UNFOLDED_CELLS",
    "MAX_UNFOLDED_GROUPS",
    "RECURSION_MARGIN",
    "BRUTE_FORCE_MAX_UNKNOWNS",
    "FAIL_LOG",
]
