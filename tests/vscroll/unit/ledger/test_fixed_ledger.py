from __future__ import annotations

import math

import pytest

from vscroll.api.errors import IndexOutOfRange
from vscroll.api.window import HeightSource
from vscroll.ledger.fixed import FixedHeightLedger


def test_fixed_ledger_offsets_are_row_multiples() -> None:
    ledger = FixedHeightLedger(32.0, 10_000)
    assert ledger.get_offset(0) == 0.0
    assert ledger.get_offset(100) == 3200.0
    assert ledger.get_offset(10_000) == 320_000.0
    assert ledger.total_height() == 320_000.0


def test_fixed_ledger_locate_boundaries() -> None:
    ledger = FixedHeightLedger(32.0, 10_000)
    assert ledger.locate(0.0) == 0
    assert ledger.locate(31.9) == 0
    assert ledger.locate(32.0) == 1
    assert ledger.locate(600.0) == 18
    assert ledger.locate(3200.0) == 100
    assert ledger.locate(320_000.0) == 10_000
    assert ledger.locate(1e12) == 10_000
    assert ledger.locate(math.inf) == 10_000


def test_fixed_ledger_locate_normalizes_negative_and_nan() -> None:
    ledger = FixedHeightLedger(32.0, 5)
    assert ledger.locate(-10.0) == 0
    assert ledger.locate(math.nan) == 0
    assert FixedHeightLedger(32.0).locate(100.0) == 0


def test_fixed_ledger_rejects_out_of_range_indices() -> None:
    ledger = FixedHeightLedger(20.0, 3)
    with pytest.raises(IndexOutOfRange) as excinfo:
        ledger.get_offset(4)
    assert excinfo.value.index == 4
    assert excinfo.value.row_count == 3
    with pytest.raises(IndexOutOfRange):
        ledger.height(3)
    with pytest.raises(IndexOutOfRange):
        ledger.insert_rows(4, 1)
    with pytest.raises(IndexOutOfRange):
        ledger.remove_rows(2, 2)


def test_fixed_ledger_measurements_do_not_change_layout() -> None:
    ledger = FixedHeightLedger(20.0, 3)
    assert ledger.set_height(1, 55.0) is False
    assert ledger.height(1) == 20.0
    assert ledger.entry(1).source is HeightSource.ESTIMATED
    with pytest.raises(ValueError):
        ledger.set_height(1, 0.0)


def test_fixed_ledger_mutations_adjust_row_count() -> None:
    ledger = FixedHeightLedger(10.0, 5)
    ledger.insert_rows(2, 3)
    assert ledger.row_count == 8
    assert ledger.total_height() == 80.0
    ledger.remove_rows(0, 6)
    assert ledger.row_count == 2
    ledger.reset(0)
    assert ledger.total_height() == 0.0
    with pytest.raises(ValueError):
        ledger.insert_rows(0, -1)


def test_fixed_ledger_rejects_non_positive_row_height() -> None:
    with pytest.raises(ValueError):
        FixedHeightLedger(0.0)
    with pytest.raises(ValueError):
        FixedHeightLedger(math.nan)
