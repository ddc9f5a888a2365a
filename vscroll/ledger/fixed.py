"""Fixed-height ledger: every row shares one configured height."""

from __future__ import annotations

import math

from vscroll.api.window import HeightEntry, HeightSource
from vscroll.ledger.base import check_boundary, check_removal, check_row, require_count, require_height


class FixedHeightLedger:
    """Constant-time ledger where `offset(i) = i * row_height`.

    Every query is O(1) and mutations only adjust the row count. Measured
    heights are accepted but never change the layout.
    """

    def __init__(self, row_height: float, row_count: int = 0) -> None:
        self._row_height = require_height(row_height)
        self._row_count = require_count(row_count)

    @property
    def row_count(self) -> int:
        return self._row_count

    @property
    def estimated_height(self) -> float:
        return self._row_height

    def get_offset(self, index: int) -> float:
        check_boundary(index, self._row_count, "get_offset")
        return index * self._row_height

    def locate(self, y: float) -> int:
        if self._row_count == 0 or not y > 0.0:
            return 0
        if math.isinf(y):
            return self._row_count
        return min(self._row_count, int(y // self._row_height))

    def total_height(self) -> float:
        return self._row_count * self._row_height

    def height(self, index: int) -> float:
        check_row(index, self._row_count, "height")
        return self._row_height

    def entry(self, index: int) -> HeightEntry:
        check_row(index, self._row_count, "entry")
        return HeightEntry(index=index, height=self._row_height, source=HeightSource.ESTIMATED)

    def set_height(self, index: int, height: float) -> bool:
        check_row(index, self._row_count, "set_height")
        require_height(height)
        return False

    def insert_rows(self, at: int, count: int) -> None:
        check_boundary(at, self._row_count, "insert_rows")
        self._row_count += require_count(count)

    def remove_rows(self, at: int, count: int) -> None:
        check_removal(at, count, self._row_count)
        self._row_count -= count

    def reset(self, row_count: int) -> None:
        self._row_count = require_count(row_count)
