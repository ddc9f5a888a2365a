from __future__ import annotations

from collections.abc import Callable, Hashable

from vscroll.api.window import Window
from vscroll.runtime.config import ScrollerConfig


class RecordingHost:
    def __init__(self) -> None:
        self.windows: list[tuple[Window, float]] = []
        self.scroll_offsets: list[float] = []
        self.on_apply: Callable[[Window], None] | None = None

    def apply_window(self, window: Window, total_height: float) -> None:
        self.windows.append((window, total_height))
        if self.on_apply is not None:
            self.on_apply(window)

    def apply_scroll_offset(self, scroll_offset: float) -> None:
        self.scroll_offsets.append(scroll_offset)

    @property
    def last_window(self) -> Window:
        return self.windows[-1][0]


class RecordingRenderer:
    def __init__(self) -> None:
        self.rendered: list[tuple[int, Hashable, object]] = []

    def render_row(self, index: int, key: Hashable, item: object) -> None:
        self.rendered.append((index, key, item))


def fixed_config(**overrides: object) -> ScrollerConfig:
    values: dict[str, object] = {"row_height": 32.0, "overscan": 2}
    values.update(overrides)
    return ScrollerConfig(**values)  # type: ignore[arg-type]


def variable_config(**overrides: object) -> ScrollerConfig:
    values: dict[str, object] = {"row_height": 32.0, "overscan": 2, "variable_height": True}
    values.update(overrides)
    return ScrollerConfig(**values)  # type: ignore[arg-type]
