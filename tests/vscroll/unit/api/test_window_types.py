from __future__ import annotations

import math

from vscroll.api.errors import IndexOutOfRange, InvalidConfiguration, VirtualScrollError
from vscroll.api.window import EMPTY_WINDOW, Viewport, Window


def test_viewport_normalized_clamps_invalid_values() -> None:
    viewport = Viewport(scroll_offset=-12.0, viewport_height=math.nan)
    assert viewport.normalized() == Viewport(scroll_offset=0.0, viewport_height=0.0)
    clean = Viewport(scroll_offset=10.0, viewport_height=300.0)
    assert clean.normalized() is clean
    assert clean.with_scroll_offset(-1.0).scroll_offset == 0.0
    assert clean.with_viewport_height(math.inf).viewport_height == 0.0


def test_window_exposes_range_helpers() -> None:
    window = Window(start_index=4, end_index=9, top_offset=128.0, visible_start=5, visible_end=8)
    assert window.count == 5
    assert list(window.indices) == [4, 5, 6, 7, 8]
    assert not window.is_empty()
    assert EMPTY_WINDOW.is_empty()
    assert EMPTY_WINDOW.count == 0


def test_errors_share_base_and_builtin_types() -> None:
    error = IndexOutOfRange(7, 3, operation="get_offset")
    assert isinstance(error, VirtualScrollError)
    assert isinstance(error, IndexError)
    assert "get_offset" in str(error)
    config_error = InvalidConfiguration("row_height", 0.0, "must be > 0")
    assert isinstance(config_error, ValueError)
    assert config_error.field == "row_height"
