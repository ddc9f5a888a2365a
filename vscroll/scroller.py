"""Item-list facade wiring a ledger, a controller and a tick scheduler together."""

from __future__ import annotations

import logging
from collections.abc import Callable, Hashable, Iterable, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from vscroll.api.errors import IndexOutOfRange
from vscroll.api.ports import RowRenderer, TickScheduler
from vscroll.api.window import HeightSource, Viewport, VisibleRow, Window
from vscroll.ledger.factory import create_height_ledger
from vscroll.runtime.config import ScrollerConfig, validate_scroller_config
from vscroll.runtime.controller import ReconciliationController
from vscroll.runtime.metrics import NoopReconciliationMetrics, ReconciliationMetrics
from vscroll.runtime.scheduler import FrameTickScheduler

_LOG = logging.getLogger("vscroll.scroller")

T = TypeVar("T")

WINDOW_STYLES = "will-change:transform;"


@dataclass(frozen=True, slots=True)
class ScrollerView(Generic[T]):
    """Everything a host needs to lay out one frame of the list."""

    window: Window
    content_height: float
    rows: tuple[VisibleRow[T], ...]

    @property
    def content_style(self) -> str:
        """Style for the full-height spacer that sizes the native scrollbar."""
        return f"height: {_format_px(self.content_height)}px"

    @property
    def window_style(self) -> str:
        """Style translating the materialized block to its cumulative offset."""
        return f"{WINDOW_STYLES}transform: translateY({_format_px(self.window.top_offset)}px);"


class VirtualScroller(Generic[T]):
    """Virtualized list over a sequence of items.

    Items are identified by `key(item)`; without a key function the row index
    is the identity. Measured heights are cached by key so they survive
    `set_items` reorders, and the row under the scroll offset stays anchored
    across replacements.
    """

    def __init__(
        self,
        items: Iterable[T],
        config: ScrollerConfig,
        *,
        key: Callable[[T], Hashable] | None = None,
        renderer: RowRenderer[T] | None = None,
        on_view: Callable[[ScrollerView[T]], None] | None = None,
        on_scroll_offset: Callable[[float], None] | None = None,
        scheduler: TickScheduler | None = None,
        metrics: ReconciliationMetrics | NoopReconciliationMetrics | None = None,
    ) -> None:
        self._config = validate_scroller_config(config)
        self._items: tuple[T, ...] = tuple(items)
        self._key = key
        self._renderer = renderer
        self._on_view = on_view
        self._on_scroll_offset = on_scroll_offset
        self._scheduler = scheduler if scheduler is not None else FrameTickScheduler()
        self._measured_by_key: dict[Hashable, float] = {}
        self._view: ScrollerView[T] | None = None
        ledger = create_height_ledger(self._config, len(self._items))
        self._controller = ReconciliationController(
            self._config,
            ledger,
            self,
            self._scheduler,
            metrics=metrics,
        )

    @property
    def items(self) -> Sequence[T]:
        """Current items; splices build a new tuple, reads never copy."""
        return self._items

    @property
    def controller(self) -> ReconciliationController:
        return self._controller

    @property
    def scheduler(self) -> TickScheduler:
        return self._scheduler

    @property
    def view(self) -> ScrollerView[T] | None:
        """Most recently applied view, or None before the first frame."""
        return self._view

    def content_height(self) -> float:
        return self._controller.total_height()

    def key_at(self, index: int) -> Hashable:
        if index < 0 or index >= len(self._items):
            raise IndexOutOfRange(index, len(self._items), operation="key_at")
        if self._key is None:
            return index
        return self._key(self._items[index])

    def update_viewport(self, scroll_offset: float, viewport_height: float) -> None:
        self._controller.update_viewport(Viewport(scroll_offset=scroll_offset, viewport_height=viewport_height))

    def on_scroll(self, scroll_offset: float) -> None:
        self._controller.on_scroll(scroll_offset)

    def on_resize(self, viewport_height: float) -> None:
        self._controller.on_resize(viewport_height)

    def frame(self) -> int:
        """Run one host tick. Returns the number of callbacks executed."""
        if isinstance(self._scheduler, FrameTickScheduler):
            return self._scheduler.run_tick()
        return 0 if self._controller.flush() is None else 1

    def set_items(self, items: Iterable[T]) -> None:
        """Replace every item, carrying measured heights and the anchor row by key."""
        anchor_row = self._controller.anchor_index()
        anchor_key = self.key_at(anchor_row) if anchor_row is not None else None
        self._items = tuple(items)
        keys = [self.key_at(index) for index in range(len(self._items))]
        first_index: dict[Hashable, int] = {}
        for index, row_key in enumerate(keys):
            first_index.setdefault(row_key, index)
        measured = {
            index: self._measured_by_key[row_key]
            for index, row_key in enumerate(keys)
            if row_key in self._measured_by_key
        }
        self._measured_by_key = {
            row_key: height for row_key, height in self._measured_by_key.items() if row_key in first_index
        }
        anchor = first_index.get(anchor_key) if anchor_key is not None else None
        _LOG.debug(
            "items_replaced rows=%d measured=%d anchor=%s",
            len(self._items),
            len(measured),
            anchor,
        )
        self._controller.reset_rows(len(self._items), measured=measured, anchor=anchor)

    def insert_items(self, at: int, items: Iterable[T]) -> None:
        if at < 0 or at > len(self._items):
            raise IndexOutOfRange(at, len(self._items), operation="insert_items")
        added = tuple(items)
        self._items = self._items[:at] + added + self._items[at:]
        if self._key is None and added:
            self._shift_positional_heights(at, removed=0, inserted=len(added))
        self._controller.insert_rows(at, len(added))

    def remove_items(self, at: int, count: int) -> None:
        if count < 0:
            raise ValueError(f"row count must be >= 0, got {count}")
        if at < 0 or at + count > len(self._items):
            raise IndexOutOfRange(at if at < 0 else at + count, len(self._items), operation="remove_items")
        if self._key is not None:
            for item in self._items[at : at + count]:
                self._measured_by_key.pop(self._key(item), None)
        self._items = self._items[:at] + self._items[at + count :]
        if self._key is None and count:
            self._shift_positional_heights(at, removed=count, inserted=0)
        self._controller.remove_rows(at, count)

    def report_measured_height(self, index: int, height: float, *, key: Hashable | None = None) -> bool:
        """Accept a renderer measurement; stale indices or keys are dropped."""
        if index < 0 or index >= len(self._items):
            return self._controller.report_measured_height(index, height)
        row_key = self.key_at(index)
        if key is not None and key != row_key:
            _LOG.debug("measurement_dropped reason=key_mismatch index=%d", index)
            return False
        scheduled = self._controller.report_measured_height(index, height)
        ledger = self._controller.ledger
        if index < ledger.row_count and ledger.entry(index).source is HeightSource.MEASURED:
            self._measured_by_key[row_key] = ledger.height(index)
        return scheduled

    def apply_window(self, window: Window, total_height: float) -> None:
        rows = tuple(VisibleRow(index=i, key=self.key_at(i), item=self._items[i]) for i in window.indices)
        view = ScrollerView(window=window, content_height=total_height, rows=rows)
        self._view = view
        if self._renderer is not None:
            for row in rows:
                self._renderer.render_row(row.index, row.key, row.item)
        if self._on_view is not None:
            self._on_view(view)

    def apply_scroll_offset(self, scroll_offset: float) -> None:
        if self._on_scroll_offset is not None:
            self._on_scroll_offset(scroll_offset)

    def _shift_positional_heights(self, at: int, *, removed: int, inserted: int) -> None:
        # Index keys move with the rows below the splice point.
        shifted: dict[Hashable, float] = {}
        for row_key, height in self._measured_by_key.items():
            if not isinstance(row_key, int) or row_key < at:
                shifted[row_key] = height
            elif row_key >= at + removed:
                shifted[row_key - removed + inserted] = height
        self._measured_by_key = shifted


def _format_px(value: float) -> str:
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return f"{number:.3f}".rstrip("0").rstrip(".")
