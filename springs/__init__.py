"""Public package interface for springs."""

from .aggregate import aggregate, aggregate_lines
from .cli import main
from .counter import count_arrangements
from .unfold import unfold

__all__ = ["main", "aggregate", "aggregate_lines", "count_arrangements", "unfold"]
