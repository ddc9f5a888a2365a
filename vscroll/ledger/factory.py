"""Ledger construction from scroller configuration."""

from __future__ import annotations

from vscroll.api.ledger import HeightLedger
from vscroll.ledger.fenwick import FenwickHeightLedger
from vscroll.ledger.fixed import FixedHeightLedger
from vscroll.ledger.flat import FlatHeightLedger
from vscroll.runtime.config import ScrollerConfig, validate_scroller_config


def create_height_ledger(config: ScrollerConfig, row_count: int = 0) -> HeightLedger:
    """Return a fresh ledger owned by one list instance."""
    validate_scroller_config(config)
    if not config.variable_height:
        return FixedHeightLedger(config.row_height, row_count)
    if config.ledger_backend == "flat":
        return FlatHeightLedger(config.row_height, row_count)
    return FenwickHeightLedger(config.row_height, row_count)
