"""Variable-height ledger over a flat numpy prefix array."""

from __future__ import annotations

import logging

import numpy as np

from vscroll.api.window import HeightEntry, HeightSource
from vscroll.ledger.base import check_boundary, check_removal, check_row, require_count, require_height

_LOG = logging.getLogger("vscroll.ledger")

# Past this size every insert/remove/measure re-sums a suffix of the list on
# the next query; the Fenwick ledger should be used instead.
FLAT_LEDGER_ROW_LIMIT = 4096


class FlatHeightLedger:
    """Cached prefix-sum array re-summed lazily after changes.

    Complexity, n = row count: `locate` is an O(log n) `searchsorted` and
    `get_offset` is O(1) on a clean cache. Any height change or splice marks
    the cache stale from that row, and the next query re-sums the suffix with
    one vectorized `cumsum` (O(n)). Suitable for lists capped at a few
    thousand rows.
    """

    def __init__(self, estimated_height: float, row_count: int = 0) -> None:
        self._estimated_height = require_height(estimated_height)
        self._heights = np.empty(0, dtype=np.float64)
        self._measured = np.empty(0, dtype=bool)
        self._offsets = np.zeros(1, dtype=np.float64)
        self._stale_from: int | None = None
        self._limit_warned = False
        self.reset(row_count)

    @property
    def row_count(self) -> int:
        return int(self._heights.shape[0])

    @property
    def estimated_height(self) -> float:
        return self._estimated_height

    def get_offset(self, index: int) -> float:
        check_boundary(index, self.row_count, "get_offset")
        return float(self._synced_offsets()[index])

    def total_height(self) -> float:
        return float(self._synced_offsets()[-1])

    def locate(self, y: float) -> int:
        row_count = self.row_count
        if row_count == 0 or not y > 0.0:
            return 0
        offsets = self._synced_offsets()
        if y >= offsets[-1]:
            return row_count
        return int(np.searchsorted(offsets, y, side="right")) - 1

    def height(self, index: int) -> float:
        check_row(index, self.row_count, "height")
        return float(self._heights[index])

    def entry(self, index: int) -> HeightEntry:
        check_row(index, self.row_count, "entry")
        source = HeightSource.MEASURED if self._measured[index] else HeightSource.ESTIMATED
        return HeightEntry(index=index, height=float(self._heights[index]), source=source)

    def set_height(self, index: int, height: float) -> bool:
        check_row(index, self.row_count, "set_height")
        value = require_height(height)
        self._measured[index] = True
        if self._heights[index] == value:
            return False
        self._heights[index] = value
        self._invalidate_from(index)
        return True

    def insert_rows(self, at: int, count: int) -> None:
        check_boundary(at, self.row_count, "insert_rows")
        if require_count(count) == 0:
            return
        self._heights = np.insert(self._heights, at, np.full(count, self._estimated_height))
        self._measured = np.insert(self._measured, at, np.zeros(count, dtype=bool))
        self._resize_offsets(at)
        self._invalidate_from(at)

    def remove_rows(self, at: int, count: int) -> None:
        check_removal(at, count, self.row_count)
        if count == 0:
            return
        span = np.s_[at : at + count]
        self._heights = np.delete(self._heights, span)
        self._measured = np.delete(self._measured, span)
        self._resize_offsets(at)
        self._invalidate_from(at)

    def reset(self, row_count: int) -> None:
        count = require_count(row_count)
        self._heights = np.full(count, self._estimated_height, dtype=np.float64)
        self._measured = np.zeros(count, dtype=bool)
        self._offsets = np.zeros(count + 1, dtype=np.float64)
        self._stale_from = None
        self._invalidate_from(0)

    def _resize_offsets(self, keep_through: int) -> None:
        offsets = np.zeros(self.row_count + 1, dtype=np.float64)
        offsets[: keep_through + 1] = self._offsets[: keep_through + 1]
        self._offsets = offsets

    def _invalidate_from(self, boundary: int) -> None:
        if self._stale_from is None or boundary < self._stale_from:
            self._stale_from = boundary
        if not self._limit_warned and self.row_count > FLAT_LEDGER_ROW_LIMIT:
            self._limit_warned = True
            _LOG.warning(
                "flat_ledger_row_limit_exceeded rows=%d limit=%d",
                self.row_count,
                FLAT_LEDGER_ROW_LIMIT,
            )

    def _synced_offsets(self) -> np.ndarray:
        start = self._stale_from
        if start is not None:
            offsets = self._offsets
            if start < offsets.shape[0] - 1:
                offsets[start + 1 :] = offsets[start] + np.cumsum(self._heights[start:])
            self._stale_from = None
        return self._offsets
