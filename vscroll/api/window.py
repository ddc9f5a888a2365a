"""Viewport and content-window value types."""

from __future__ import annotations

import math
from collections.abc import Hashable
from dataclasses import dataclass
from enum import StrEnum
from typing import Generic, TypeVar

T = TypeVar("T")


class HeightSource(StrEnum):
    """Origin of a ledger height entry."""

    MEASURED = "measured"
    ESTIMATED = "estimated"


@dataclass(frozen=True, slots=True)
class HeightEntry:
    """Height recorded for one row index."""

    index: int
    height: float
    source: HeightSource


@dataclass(frozen=True, slots=True)
class Viewport:
    """Host-reported scroll position and visible height."""

    scroll_offset: float
    viewport_height: float

    def normalized(self) -> Viewport:
        """Return a copy with NaN/negative values clamped to zero."""
        scroll = _non_negative(self.scroll_offset)
        height = _non_negative(self.viewport_height)
        if scroll == self.scroll_offset and height == self.viewport_height:
            return self
        return Viewport(scroll_offset=scroll, viewport_height=height)

    def with_scroll_offset(self, scroll_offset: float) -> Viewport:
        return Viewport(scroll_offset=_non_negative(scroll_offset), viewport_height=self.viewport_height)

    def with_viewport_height(self, viewport_height: float) -> Viewport:
        return Viewport(scroll_offset=self.scroll_offset, viewport_height=_non_negative(viewport_height))


@dataclass(frozen=True, slots=True)
class Window:
    """Row range to materialize and the offset at which to place it.

    `start_index`/`end_index` include overscan; `visible_start`/`visible_end`
    is the strictly visible range. `top_offset` is the cumulative offset of
    `start_index`.
    """

    start_index: int
    end_index: int
    top_offset: float
    visible_start: int = 0
    visible_end: int = 0

    @property
    def count(self) -> int:
        return self.end_index - self.start_index

    @property
    def indices(self) -> range:
        return range(self.start_index, self.end_index)

    def is_empty(self) -> bool:
        return self.end_index <= self.start_index


EMPTY_WINDOW = Window(start_index=0, end_index=0, top_offset=0.0)


@dataclass(frozen=True, slots=True)
class VisibleRow(Generic[T]):
    """One materialized row handed to a renderer."""

    index: int
    key: Hashable
    item: T


def _non_negative(value: float) -> float:
    number = float(value)
    if not math.isfinite(number) or number < 0.0:
        return 0.0
    return number
