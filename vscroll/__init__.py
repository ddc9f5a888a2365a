"""Viewport windowing engine for virtualized scrolling lists."""

from vscroll.api import (
    EMPTY_WINDOW,
    HeightEntry,
    HeightSource,
    IndexOutOfRange,
    InvalidConfiguration,
    Viewport,
    VirtualScrollError,
    VisibleRow,
    Window,
)
from vscroll.ledger import FenwickHeightLedger, FixedHeightLedger, FlatHeightLedger, create_height_ledger
from vscroll.runtime import ControllerState, ReconciliationController, ScrollerConfig, resolve
from vscroll.scroller import ScrollerView, VirtualScroller

__all__ = [
    "EMPTY_WINDOW",
    "ControllerState",
    "FenwickHeightLedger",
    "FixedHeightLedger",
    "FlatHeightLedger",
    "HeightEntry",
    "HeightSource",
    "IndexOutOfRange",
    "InvalidConfiguration",
    "ReconciliationController",
    "ScrollerConfig",
    "ScrollerView",
    "Viewport",
    "VirtualScrollError",
    "VirtualScroller",
    "VisibleRow",
    "Window",
    "create_height_ledger",
    "resolve",
]
