"""Variable-height ledger backed by a Fenwick (binary indexed) tree."""

from __future__ import annotations

import math

from vscroll.api.window import HeightEntry, HeightSource
from vscroll.ledger.base import check_boundary, check_removal, check_row, require_count, require_height


class FenwickHeightLedger:
    """Prefix-sum ledger for lists whose rows report their own heights.

    Complexity, n = row count:

    - `get_offset`, `total_height`, `locate`: O(log n) on a built tree.
      `locate` is checked against `get_offset` so both agree on boundaries.
    - `set_height`: O(log n) point update.
    - `insert_rows`/`remove_rows`/`reset`: O(n) list splice. The tree is only
      marked stale from the splice point; the first query afterwards rebuilds
      the stale suffix in O(n), so bursts of mutations cost one rebuild.

    `_tree` is 1-based: node k holds the height sum of rows
    `(k - lowbit(k), k]` in 1-based numbering.
    """

    def __init__(self, estimated_height: float, row_count: int = 0) -> None:
        self._estimated_height = require_height(estimated_height)
        self._heights: list[float] = []
        self._measured: list[bool] = []
        self._tree: list[float] = [0.0]
        self._stale_from: int | None = None
        self._top_step = 0
        self.reset(row_count)

    @property
    def row_count(self) -> int:
        return len(self._heights)

    @property
    def estimated_height(self) -> float:
        return self._estimated_height

    @property
    def measured_count(self) -> int:
        return sum(self._measured)

    def get_offset(self, index: int) -> float:
        check_boundary(index, len(self._heights), "get_offset")
        self._sync()
        return self._prefix(index)

    def total_height(self) -> float:
        self._sync()
        return self._prefix(len(self._heights))

    def locate(self, y: float) -> int:
        row_count = len(self._heights)
        if row_count == 0 or not y > 0.0:
            return 0
        if math.isinf(y) or y >= self.total_height():
            return row_count
        tree = self._tree
        position = 0
        remaining = y
        step = self._top_step
        while step:
            candidate = position + step
            if candidate <= row_count and tree[candidate] <= remaining:
                position = candidate
                remaining -= tree[candidate]
            step >>= 1
        # The descent sums nodes in a different order than `_prefix`; settle
        # rounding ties so `locate(get_offset(i)) == i`.
        while position > 0 and self._prefix(position) > y:
            position -= 1
        while position + 1 < row_count and self._prefix(position + 1) <= y:
            position += 1
        return position

    def height(self, index: int) -> float:
        check_row(index, len(self._heights), "height")
        return self._heights[index]

    def entry(self, index: int) -> HeightEntry:
        check_row(index, len(self._heights), "entry")
        source = HeightSource.MEASURED if self._measured[index] else HeightSource.ESTIMATED
        return HeightEntry(index=index, height=self._heights[index], source=source)

    def set_height(self, index: int, height: float) -> bool:
        check_row(index, len(self._heights), "set_height")
        value = require_height(height)
        self._measured[index] = True
        delta = value - self._heights[index]
        if delta == 0.0:
            return False
        self._heights[index] = value
        # Nodes at or past the stale boundary are rebuilt from `_heights` anyway.
        limit = len(self._heights) if self._stale_from is None else self._stale_from
        tree = self._tree
        node = index + 1
        while node <= limit:
            tree[node] += delta
            node += node & -node
        return True

    def insert_rows(self, at: int, count: int) -> None:
        check_boundary(at, len(self._heights), "insert_rows")
        if require_count(count) == 0:
            return
        self._heights[at:at] = [self._estimated_height] * count
        self._measured[at:at] = [False] * count
        self._tree.extend([0.0] * count)
        self._invalidate_from(at)

    def remove_rows(self, at: int, count: int) -> None:
        check_removal(at, count, len(self._heights))
        if count == 0:
            return
        del self._heights[at : at + count]
        del self._measured[at : at + count]
        del self._tree[-count:]
        self._invalidate_from(at)

    def reset(self, row_count: int) -> None:
        count = require_count(row_count)
        self._heights = [self._estimated_height] * count
        self._measured = [False] * count
        self._tree = [0.0] * (count + 1)
        self._stale_from = None
        self._invalidate_from(0)

    def _invalidate_from(self, index: int) -> None:
        if self._stale_from is None or index < self._stale_from:
            self._stale_from = index
        row_count = len(self._heights)
        self._top_step = 1 << (row_count.bit_length() - 1) if row_count else 0

    def _sync(self) -> None:
        start = self._stale_from
        if start is None:
            return
        tree = self._tree
        heights = self._heights
        row_count = len(heights)
        for node in range(start + 1, row_count + 1):
            tree[node] = heights[node - 1]
        # Nodes below the boundary are intact; push every child into a stale parent.
        for node in range(1, row_count + 1):
            parent = node + (node & -node)
            if start < parent <= row_count:
                tree[parent] += tree[node]
        self._stale_from = None

    def _prefix(self, index: int) -> float:
        tree = self._tree
        total = 0.0
        node = index
        while node > 0:
            total += tree[node]
            node -= node & -node
        return total
