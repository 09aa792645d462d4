"""springs.memo
===============

Memo cache used by the arrangement counter. Keys are ``(record_offset,
group_offset)`` pairs into the immutable record and group tuples owned by a
single counting call, so lookups never hash sequence contents.
"""

from __future__ import annotations

from typing import Dict, Optional

from .types import MemoKey


class MemoCache:
    """Per-call mapping from a sub-problem key to its arrangement count.

    A fresh instance belongs to exactly one top-level counting call and is
    discarded with it. Entries are never evicted.
    """

    def __init__(self) -> None:
        self._entries: Dict[MemoKey, int] = {}
        self.hits = 0
        self.misses = 0

    def get(self, key: MemoKey) -> Optional[int]:
        value = self._entries.get(key)
        if value is None:
            self.misses += 1
        else:
            self.hits += 1
        return value

    def put(self, key: MemoKey, count: int) -> None:
        self._entries[key] = count

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"MemoCache(entries={len(self)}, hits={self.hits}, misses={self.misses})"


__all__ = ["MemoCache"]
