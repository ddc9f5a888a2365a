"""Argument checks shared by height ledger implementations."""

from __future__ import annotations

import math

from vscroll.api.errors import IndexOutOfRange


def require_height(height: float) -> float:
    value = float(height)
    if not math.isfinite(value) or value <= 0.0:
        raise ValueError(f"row height must be a finite number > 0, got {height!r}")
    return value


def require_count(count: int) -> int:
    if count < 0:
        raise ValueError(f"row count must be >= 0, got {count}")
    return int(count)


def check_row(index: int, row_count: int, operation: str) -> None:
    """Existing rows are `[0, row_count)`."""
    if index < 0 or index >= row_count:
        raise IndexOutOfRange(index, row_count, operation=operation)


def check_boundary(index: int, row_count: int, operation: str) -> None:
    """Row boundaries are `[0, row_count]`; `row_count` is the bottom edge."""
    if index < 0 or index > row_count:
        raise IndexOutOfRange(index, row_count, operation=operation)


def check_removal(at: int, count: int, row_count: int) -> None:
    check_boundary(at, row_count, "remove_rows")
    require_count(count)
    if at + count > row_count:
        raise IndexOutOfRange(at + count, row_count, operation="remove_rows")
