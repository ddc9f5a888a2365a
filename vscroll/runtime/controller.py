"""Reconciliation of scroll events, list mutations and measured heights."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from enum import StrEnum

from vscroll.api.errors import IndexOutOfRange
from vscroll.api.ledger import HeightLedger
from vscroll.api.ports import ScrollHost, TickScheduler
from vscroll.api.window import Viewport, Window
from vscroll.runtime.config import ScrollerConfig, validate_scroller_config
from vscroll.runtime.metrics import (
    NoopReconciliationMetrics,
    ReconciliationMetrics,
    create_reconciliation_metrics,
)
from vscroll.runtime.window_resolver import resolve

_LOG = logging.getLogger("vscroll.controller")


class ControllerState(StrEnum):
    IDLE = "idle"
    PENDING = "pending"
    RESOLVING = "resolving"


class ReconciliationController:
    """Coalesces scroll, mutation and measurement events into one resolve per tick.

    Every event bumps a generation counter and moves the controller to
    PENDING, requesting a single tick from the scheduler. Further events while
    PENDING only replace the viewport snapshot. On tick the window is resolved
    against the latest snapshot; a window computed against an older
    generation is discarded and never handed to the host.

    Mutations and measurements above the scroll position move the scroll
    offset by the height they add or remove, and the corrected offset is
    pushed to the host before the next resolve.
    """

    def __init__(
        self,
        config: ScrollerConfig,
        ledger: HeightLedger,
        host: ScrollHost,
        scheduler: TickScheduler,
        *,
        metrics: ReconciliationMetrics | NoopReconciliationMetrics | None = None,
    ) -> None:
        self._config = validate_scroller_config(config)
        self._ledger = ledger
        self._host = host
        self._scheduler = scheduler
        self._metrics = (
            metrics if metrics is not None else create_reconciliation_metrics(enabled=config.metrics_enabled)
        )
        self._state = ControllerState.IDLE
        self._viewport: Viewport | None = None
        self._window: Window | None = None
        self._generation = 0
        self._tick_token: int | None = None

    @property
    def state(self) -> ControllerState:
        return self._state

    @property
    def current_window(self) -> Window | None:
        return self._window

    @property
    def viewport(self) -> Viewport | None:
        return self._viewport

    @property
    def ledger(self) -> HeightLedger:
        return self._ledger

    @property
    def config(self) -> ScrollerConfig:
        return self._config

    @property
    def metrics(self) -> ReconciliationMetrics | NoopReconciliationMetrics:
        return self._metrics

    @property
    def generation(self) -> int:
        return self._generation

    def total_height(self) -> float:
        return self._ledger.total_height()

    def anchor_index(self) -> int | None:
        """Return the row under the current scroll offset, if there is one."""
        if self._viewport is None or self._ledger.row_count == 0:
            return None
        index = self._ledger.locate(self._viewport.scroll_offset)
        return index if index < self._ledger.row_count else None

    def update_viewport(self, viewport: Viewport) -> None:
        """Record a host viewport snapshot; the last snapshot before a tick wins."""
        snapshot = viewport.normalized()
        self._metrics.record_viewport_update()
        if snapshot == self._viewport and self._state is ControllerState.IDLE and self._window is not None:
            return
        self._viewport = snapshot
        self._invalidate()

    def on_scroll(self, scroll_offset: float) -> None:
        height = self._viewport.viewport_height if self._viewport is not None else 0.0
        self.update_viewport(Viewport(scroll_offset=scroll_offset, viewport_height=height))

    def on_resize(self, viewport_height: float) -> None:
        scroll = self._viewport.scroll_offset if self._viewport is not None else 0.0
        self.update_viewport(Viewport(scroll_offset=scroll, viewport_height=viewport_height))

    def insert_rows(self, at: int, count: int) -> None:
        """Insert estimated rows before `at`, keeping visible content in place."""
        ledger = self._ledger
        if at < 0 or at > ledger.row_count:
            raise IndexOutOfRange(at, ledger.row_count, operation="insert_rows")
        had_rows_below = at < ledger.row_count
        boundary = ledger.get_offset(at)
        ledger.insert_rows(at, count)
        if count == 0:
            return
        self._metrics.record_mutation()
        viewport = self._viewport
        if viewport is not None and had_rows_below and boundary < viewport.scroll_offset:
            inserted = ledger.get_offset(at + count) - boundary
            self._correct_scroll(viewport.scroll_offset + inserted, reason="insert")
        self._invalidate()

    def remove_rows(self, at: int, count: int) -> None:
        """Remove rows `[at, at + count)`, keeping visible content in place."""
        ledger = self._ledger
        if at < 0 or count < 0 or at + count > ledger.row_count:
            # Let the ledger raise its own range error.
            ledger.remove_rows(at, count)
        span_top = ledger.get_offset(at)
        span_bottom = ledger.get_offset(at + count)
        ledger.remove_rows(at, count)
        if count == 0:
            return
        self._metrics.record_mutation()
        viewport = self._viewport
        if viewport is not None and span_top < viewport.scroll_offset:
            scroll = viewport.scroll_offset
            if scroll >= span_bottom:
                target = scroll - (span_bottom - span_top)
            else:
                target = span_top
            self._correct_scroll(target, reason="remove")
        self._invalidate()

    def reset_rows(
        self,
        row_count: int,
        *,
        measured: Mapping[int, float] | None = None,
        anchor: int | None = None,
    ) -> None:
        """Replace the whole list.

        `measured` seeds known heights by new index. `anchor` is the new index
        of the row that was under the scroll offset; when given, that row keeps
        its position in the viewport.
        """
        ledger = self._ledger
        viewport = self._viewport
        intra_offset = 0.0
        previous_anchor = self.anchor_index()
        if viewport is not None and previous_anchor is not None:
            intra_offset = viewport.scroll_offset - ledger.get_offset(previous_anchor)
        ledger.reset(row_count)
        for index, height in (measured or {}).items():
            if 0 <= index < row_count and _valid_height(height):
                ledger.set_height(index, height)
        self._metrics.record_mutation()
        if viewport is not None and anchor is not None and 0 <= anchor < row_count:
            target = ledger.get_offset(anchor) + min(intra_offset, ledger.height(anchor))
            self._correct_scroll(target, reason="reset")
        self._invalidate()

    def report_measured_height(self, index: int, height: float) -> bool:
        """Feed a renderer measurement. Returns whether a recompute was scheduled."""
        ledger = self._ledger
        if index < 0 or index >= ledger.row_count:
            self._metrics.record_measurement(applied=False)
            _LOG.debug("measurement_dropped reason=stale_index index=%d rows=%d", index, ledger.row_count)
            return False
        if not _valid_height(height):
            self._metrics.record_measurement(applied=False)
            _LOG.debug("measurement_dropped reason=invalid_height index=%d height=%r", index, height)
            return False
        value = float(height)
        current = ledger.height(index)
        if abs(value - current) <= self._config.height_epsilon:
            ledger.set_height(index, current)
            self._metrics.record_measurement(applied=False)
            return False
        row_bottom = ledger.get_offset(index + 1)
        if not ledger.set_height(index, value):
            self._metrics.record_measurement(applied=False)
            return False
        self._metrics.record_measurement(applied=True)
        viewport = self._viewport
        if self._config.anchor_measurements and viewport is not None and row_bottom <= viewport.scroll_offset:
            self._correct_scroll(viewport.scroll_offset + (value - current), reason="measure")
        self._invalidate()
        return True

    def tick(self) -> Window | None:
        """Resolve and apply a window if one is pending."""
        if self._state is not ControllerState.PENDING:
            return None
        self._tick_token = None
        viewport = self._viewport
        if viewport is None:
            self._state = ControllerState.IDLE
            return None
        self._state = ControllerState.RESOLVING
        try:
            generation = self._generation
            window = resolve(viewport, self._ledger, self._config.overscan)
            total_height = self._ledger.total_height()
            if generation != self._generation:
                # A newer event already moved us back to PENDING with a tick queued.
                self._metrics.record_resolve(discarded=True)
                _LOG.debug("window_discarded generation=%d latest=%d", generation, self._generation)
                return None
            self._metrics.record_resolve(discarded=False)
            self._window = window
            self._host.apply_window(window, total_height)
        finally:
            if self._state is ControllerState.RESOLVING:
                self._state = ControllerState.IDLE
        return window

    def flush(self) -> Window | None:
        """Resolve immediately instead of waiting for the scheduled tick."""
        if self._state is not ControllerState.PENDING:
            return None
        if self._tick_token is not None:
            self._scheduler.cancel(self._tick_token)
            self._tick_token = None
        return self.tick()

    def _invalidate(self) -> None:
        self._generation += 1
        if self._state is ControllerState.PENDING:
            self._metrics.record_coalesced()
            return
        self._state = ControllerState.PENDING
        self._tick_token = self._scheduler.call_soon(self.tick)
        self._metrics.record_tick_requested()

    def _correct_scroll(self, target: float, *, reason: str) -> None:
        viewport = self._viewport
        if viewport is None:
            return
        corrected = viewport.with_scroll_offset(target)
        if corrected.scroll_offset == viewport.scroll_offset:
            return
        self._viewport = corrected
        self._metrics.record_anchor_correction()
        _LOG.debug(
            "scroll_anchor_corrected reason=%s from=%.2f to=%.2f",
            reason,
            viewport.scroll_offset,
            corrected.scroll_offset,
        )
        self._host.apply_scroll_offset(corrected.scroll_offset)


def _valid_height(height: float) -> bool:
    try:
        value = float(height)
    except (TypeError, ValueError):
        return False
    return math.isfinite(value) and value > 0.0
