"""Boundary contracts with the host platform, renderer and tick source."""

from __future__ import annotations

from collections.abc import Callable, Hashable
from typing import Protocol, TypeVar

from vscroll.api.window import Window

TickCallback = Callable[[], None]

T = TypeVar("T")


class ScrollHost(Protocol):
    """Scroll container owned by the host platform."""

    def apply_window(self, window: Window, total_height: float) -> None:
        """Materialize `window` at `window.top_offset` inside a `total_height` container."""

    def apply_scroll_offset(self, scroll_offset: float) -> None:
        """Move the container's scroll position after anchor preservation."""


class RowRenderer(Protocol[T]):
    """Produces the visual representation of one row."""

    def render_row(self, index: int, key: Hashable, item: T) -> None:
        """Render one row of the requested window."""


class TickScheduler(Protocol):
    """Host scheduling boundary between a pending and a resolving controller."""

    def call_soon(self, callback: TickCallback) -> int:
        """Run `callback` once on the next tick and return a cancel token."""

    def cancel(self, token: int) -> None:
        """Cancel a queued callback if it has not run."""
