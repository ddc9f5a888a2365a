"""Height ledger contract."""

from __future__ import annotations

from typing import Protocol

from vscroll.api.window import HeightEntry


class HeightLedger(Protocol):
    """Per-row height store with cumulative-offset queries."""

    @property
    def row_count(self) -> int:
        """Number of rows currently tracked."""

    @property
    def estimated_height(self) -> float:
        """Height assumed for rows that have not been measured."""

    def get_offset(self, index: int) -> float:
        """Return the top edge of row `index`; `index == row_count` is the total height."""

    def locate(self, y: float) -> int:
        """Return the row whose interval contains `y`, or `row_count` past the end."""

    def total_height(self) -> float:
        """Return the summed height of every row."""

    def height(self, index: int) -> float:
        """Return the current height of an existing row."""

    def entry(self, index: int) -> HeightEntry:
        """Return the height entry of an existing row."""

    def set_height(self, index: int, height: float) -> bool:
        """Record a measured height. Returns whether the stored value changed."""

    def insert_rows(self, at: int, count: int) -> None:
        """Insert `count` estimated rows before index `at`."""

    def remove_rows(self, at: int, count: int) -> None:
        """Remove rows `[at, at + count)`."""

    def reset(self, row_count: int) -> None:
        """Replace all rows with `row_count` estimated rows."""
