"""Height ledger implementations."""

from vscroll.ledger.factory import create_height_ledger
from vscroll.ledger.fenwick import FenwickHeightLedger
from vscroll.ledger.fixed import FixedHeightLedger
from vscroll.ledger.flat import FLAT_LEDGER_ROW_LIMIT, FlatHeightLedger

__all__ = [
    "FLAT_LEDGER_ROW_LIMIT",
    "FenwickHeightLedger",
    "FixedHeightLedger",
    "FlatHeightLedger",
    "create_height_ledger",
]
