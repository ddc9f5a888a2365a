"""Public exception types.

Only API misuse raises: out-of-range row indices and invalid configuration.
Steady-state scroll/measure anomalies are normalized instead.
"""

from __future__ import annotations


class VirtualScrollError(Exception):
    """Base class for virtual scroll engine errors."""


class IndexOutOfRange(VirtualScrollError, IndexError):
    """A row index outside the current list bounds was queried."""

    def __init__(self, index: int, row_count: int, *, operation: str = "") -> None:
        self.index = int(index)
        self.row_count = int(row_count)
        self.operation = operation
        prefix = f"{operation}: " if operation else ""
        super().__init__(f"{prefix}row index {self.index} out of range for {self.row_count} rows")


class InvalidConfiguration(VirtualScrollError, ValueError):
    """Scroller configuration rejected at setup."""

    def __init__(self, field: str, value: object, reason: str) -> None:
        self.field = field
        self.value = value
        super().__init__(f"invalid {field}={value!r}: {reason}")
