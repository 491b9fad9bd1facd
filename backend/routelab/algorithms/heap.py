"""
Binary min-heap used as the frontier of the priority-ordered searches.
"""

from __future__ import annotations

import heapq
from typing import List, Tuple


class MinHeap:
    """
    Min-ordered queue of ``(key, node)`` entries.

    Entries compare as tuples, so equal keys pop the lowest node index
    first. There is no decrease-key: callers push a fresh entry on every
    improvement and drop stale ones when they pop them.
    """

    __slots__ = ("_items",)

    def __init__(self):
        self._items: List[Tuple[float, int]] = []

    def push(self, node: int, key: float) -> None:
        heapq.heappush(self._items, (float(key), int(node)))

    def pop(self) -> Tuple[int, float]:
        """Remove and return ``(node, key)`` with the smallest key.

        Raises IndexError on an empty heap; check ``len`` first.
        """
        key, node = heapq.heappop(self._items)
        return node, key

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)
