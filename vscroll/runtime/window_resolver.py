"""Viewport-to-row-range resolution."""

from __future__ import annotations

from vscroll.api.ledger import HeightLedger
from vscroll.api.window import EMPTY_WINDOW, Viewport, Window


def resolve(viewport: Viewport, ledger: HeightLedger, overscan: int) -> Window:
    """Return the row range covering `viewport` plus `overscan` rows each side.

    Rows straddling either viewport edge are included. The cost is two
    `locate` calls and one `get_offset` on the ledger.
    """
    row_count = ledger.row_count
    if row_count == 0:
        return EMPTY_WINDOW
    snapshot = viewport.normalized()
    scroll = snapshot.scroll_offset
    first = ledger.locate(scroll)
    if snapshot.viewport_height <= 0.0:
        anchor = min(first, row_count)
        return Window(
            start_index=anchor,
            end_index=anchor,
            top_offset=ledger.get_offset(anchor),
            visible_start=anchor,
            visible_end=anchor,
        )
    last = ledger.locate(scroll + snapshot.viewport_height)
    margin = max(0, int(overscan))
    start = max(0, first - margin)
    end = min(row_count, last + margin + 1)
    return Window(
        start_index=start,
        end_index=end,
        top_offset=ledger.get_offset(start),
        visible_start=min(first, row_count),
        visible_end=min(row_count, last + 1),
    )


def covered_extent(window: Window, ledger: HeightLedger) -> tuple[float, float]:
    """Return the pixel span `[top, bottom)` occupied by the window's rows."""
    return (ledger.get_offset(window.start_index), ledger.get_offset(window.end_index))
