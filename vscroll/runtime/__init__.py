"""Scroll engine runtime modules."""

from vscroll.runtime.config import (
    ScrollerConfig,
    load_scroll_logging_config,
    load_scroller_config,
    validate_scroller_config,
)
from vscroll.runtime.controller import ControllerState, ReconciliationController
from vscroll.runtime.logging import (
    configure_scroll_logging,
    get_scroll_logger,
    setup_scroll_logging,
    shutdown_scroll_logging,
)
from vscroll.runtime.metrics import (
    NoopReconciliationMetrics,
    ReconciliationMetrics,
    ReconciliationMetricsSnapshot,
    create_reconciliation_metrics,
)
from vscroll.runtime.scheduler import AsyncioTickScheduler, FrameTickScheduler
from vscroll.runtime.window_resolver import covered_extent, resolve

__all__ = [
    "AsyncioTickScheduler",
    "ControllerState",
    "FrameTickScheduler",
    "NoopReconciliationMetrics",
    "ReconciliationController",
    "ReconciliationMetrics",
    "ReconciliationMetricsSnapshot",
    "ScrollerConfig",
    "configure_scroll_logging",
    "covered_extent",
    "create_reconciliation_metrics",
    "get_scroll_logger",
    "load_scroll_logging_config",
    "load_scroller_config",
    "resolve",
    "setup_scroll_logging",
    "shutdown_scroll_logging",
    "validate_scroller_config",
]
