"""Reconciliation counters for lightweight diagnostics."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ReconciliationMetricsSnapshot:
    """Read-only counter snapshot."""

    viewport_updates: int = 0
    coalesced_events: int = 0
    mutations: int = 0
    measurements_applied: int = 0
    measurements_dropped: int = 0
    ticks_requested: int = 0
    resolves: int = 0
    discarded_windows: int = 0
    anchor_corrections: int = 0


class NoopReconciliationMetrics:
    """No-op collector for zero-impact disabled mode."""

    def record_viewport_update(self) -> None:
        return None

    def record_coalesced(self) -> None:
        return None

    def record_mutation(self) -> None:
        return None

    def record_measurement(self, *, applied: bool) -> None:
        _ = applied

    def record_tick_requested(self) -> None:
        return None

    def record_resolve(self, *, discarded: bool) -> None:
        _ = discarded

    def record_anchor_correction(self) -> None:
        return None

    def snapshot(self) -> ReconciliationMetricsSnapshot:
        return ReconciliationMetricsSnapshot()


class ReconciliationMetrics:
    """In-memory counters for one controller."""

    def __init__(self) -> None:
        self._viewport_updates = 0
        self._coalesced_events = 0
        self._mutations = 0
        self._measurements_applied = 0
        self._measurements_dropped = 0
        self._ticks_requested = 0
        self._resolves = 0
        self._discarded_windows = 0
        self._anchor_corrections = 0

    def record_viewport_update(self) -> None:
        self._viewport_updates += 1

    def record_coalesced(self) -> None:
        self._coalesced_events += 1

    def record_mutation(self) -> None:
        self._mutations += 1

    def record_measurement(self, *, applied: bool) -> None:
        if applied:
            self._measurements_applied += 1
        else:
            self._measurements_dropped += 1

    def record_tick_requested(self) -> None:
        self._ticks_requested += 1

    def record_resolve(self, *, discarded: bool) -> None:
        self._resolves += 1
        if discarded:
            self._discarded_windows += 1

    def record_anchor_correction(self) -> None:
        self._anchor_corrections += 1

    def snapshot(self) -> ReconciliationMetricsSnapshot:
        return ReconciliationMetricsSnapshot(
            viewport_updates=self._viewport_updates,
            coalesced_events=self._coalesced_events,
            mutations=self._mutations,
            measurements_applied=self._measurements_applied,
            measurements_dropped=self._measurements_dropped,
            ticks_requested=self._ticks_requested,
            resolves=self._resolves,
            discarded_windows=self._discarded_windows,
            anchor_corrections=self._anchor_corrections,
        )


def create_reconciliation_metrics(*, enabled: bool) -> ReconciliationMetrics | NoopReconciliationMetrics:
    """Factory returning enabled collector or no-op implementation."""
    if not enabled:
        return NoopReconciliationMetrics()
    return ReconciliationMetrics()
