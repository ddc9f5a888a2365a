"""Public scroll engine contracts."""

from vscroll.api.errors import IndexOutOfRange, InvalidConfiguration, VirtualScrollError
from vscroll.api.ledger import HeightLedger
from vscroll.api.logging import ScrollLoggingConfig
from vscroll.api.ports import RowRenderer, ScrollHost, TickCallback, TickScheduler
from vscroll.api.window import (
    EMPTY_WINDOW,
    HeightEntry,
    HeightSource,
    Viewport,
    VisibleRow,
    Window,
)

__all__ = [
    "EMPTY_WINDOW",
    "HeightEntry",
    "HeightLedger",
    "HeightSource",
    "IndexOutOfRange",
    "InvalidConfiguration",
    "RowRenderer",
    "ScrollHost",
    "ScrollLoggingConfig",
    "TickCallback",
    "TickScheduler",
    "Viewport",
    "VirtualScrollError",
    "VisibleRow",
    "Window",
]
