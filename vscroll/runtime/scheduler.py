"""Tick sources driving pending recomputations."""

from __future__ import annotations

import asyncio
from collections import deque
from dataclasses import dataclass

from vscroll.api.ports import TickCallback


@dataclass(slots=True)
class _Task:
    task_id: int
    callback: TickCallback
    cancelled: bool = False


class FrameTickScheduler:
    """Host-pumped scheduler: queued callbacks run on the next `run_tick()`.

    Callbacks queued while a tick is running are deferred to the following
    tick, so one frame never resolves twice.
    """

    def __init__(self) -> None:
        self._next_task_id = 1
        self._tick_index = 0
        self._tasks: dict[int, _Task] = {}
        self._queue: deque[int] = deque()

    @property
    def tick_index(self) -> int:
        return self._tick_index

    @property
    def queued_task_count(self) -> int:
        """Return count of active queued callbacks."""
        return sum(1 for task in self._tasks.values() if not task.cancelled)

    def call_soon(self, callback: TickCallback) -> int:
        """Queue a one-shot callback for the next tick."""
        task_id = self._next_task_id
        self._next_task_id += 1
        self._tasks[task_id] = _Task(task_id=task_id, callback=callback)
        self._queue.append(task_id)
        return task_id

    def cancel(self, token: int) -> None:
        """Cancel a queued callback if it exists."""
        task = self._tasks.get(token)
        if task is not None:
            task.cancelled = True

    def run_tick(self) -> int:
        """Run callbacks queued before this call. Returns how many ran."""
        self._tick_index += 1
        executed = 0
        for _ in range(len(self._queue)):
            task_id = self._queue.popleft()
            task = self._tasks.pop(task_id, None)
            if task is None or task.cancelled:
                continue
            task.callback()
            executed += 1
        return executed


class AsyncioTickScheduler:
    """Adapter scheduling ticks on an asyncio event loop via `call_soon`."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop
        self._next_task_id = 1
        self._handles: dict[int, asyncio.Handle] = {}

    def call_soon(self, callback: TickCallback) -> int:
        loop = self._loop if self._loop is not None else asyncio.get_running_loop()
        task_id = self._next_task_id
        self._next_task_id += 1

        def _run() -> None:
            self._handles.pop(task_id, None)
            callback()

        self._handles[task_id] = loop.call_soon(_run)
        return task_id

    def cancel(self, token: int) -> None:
        handle = self._handles.pop(token, None)
        if handle is not None:
            handle.cancel()

    @property
    def queued_task_count(self) -> int:
        return len(self._handles)
