from __future__ import annotations

import bisect
import logging
import math
import random
from itertools import accumulate

import pytest

from vscroll.api.errors import IndexOutOfRange
from vscroll.api.window import HeightSource
from vscroll.ledger.fenwick import FenwickHeightLedger
from vscroll.ledger.flat import FLAT_LEDGER_ROW_LIMIT, FlatHeightLedger

VARIABLE_LEDGERS = (FenwickHeightLedger, FlatHeightLedger)


def _assert_matches(ledger, heights: list[float]) -> None:
    offsets = [0.0, *accumulate(heights)]
    assert ledger.row_count == len(heights)
    assert ledger.total_height() == offsets[-1]
    for index, expected in enumerate(offsets):
        assert ledger.get_offset(index) == expected
    for index, height in enumerate(heights):
        assert ledger.height(index) == height
    for y in (0.0, 0.5, *offsets[1:-1], offsets[-1] - 0.5, offsets[-1]):
        if y > offsets[-1]:
            continue
        expected = max(0, min(len(heights), bisect.bisect_right(offsets, y) - 1))
        assert ledger.locate(y) == expected, y


def test_variable_ledgers_locate_measured_first_row() -> None:
    for ledger_type in VARIABLE_LEDGERS:
        ledger = ledger_type(32.0, 100)
        assert ledger.set_height(0, 500.0) is True
        assert ledger.locate(0.0) == 0
        assert ledger.locate(499.5) == 0
        assert ledger.locate(500.0) == 1
        assert ledger.get_offset(1) == 500.0
        assert ledger.entry(0).source is HeightSource.MEASURED
        assert ledger.entry(1).source is HeightSource.ESTIMATED


def test_variable_ledgers_locate_inverts_get_offset() -> None:
    heights = [10.0, 45.5, 32.0, 7.25, 120.0, 1.0, 64.0]
    for ledger_type in VARIABLE_LEDGERS:
        ledger = ledger_type(32.0, len(heights))
        for index, height in enumerate(heights):
            ledger.set_height(index, height)
        total = ledger.total_height()
        y = 0.0
        while y < total:
            row = ledger.locate(y)
            assert ledger.get_offset(row) <= y < ledger.get_offset(row + 1)
            y += 0.75


def test_variable_ledgers_sentinel_and_normalization() -> None:
    for ledger_type in VARIABLE_LEDGERS:
        ledger = ledger_type(20.0, 4)
        assert ledger.locate(-5.0) == 0
        assert ledger.locate(math.nan) == 0
        assert ledger.locate(80.0) == 4
        assert ledger.locate(math.inf) == 4
        assert ledger_type(20.0).locate(10.0) == 0
        assert ledger_type(20.0).total_height() == 0.0


def test_variable_ledgers_unchanged_measurement_reports_no_change() -> None:
    for ledger_type in VARIABLE_LEDGERS:
        ledger = ledger_type(32.0, 3)
        assert ledger.set_height(1, 32.0) is False
        assert ledger.entry(1).source is HeightSource.MEASURED
        assert ledger.total_height() == 96.0


def test_variable_ledgers_insert_shifts_entries_and_seeds_estimates() -> None:
    for ledger_type in VARIABLE_LEDGERS:
        ledger = ledger_type(10.0, 4)
        ledger.set_height(2, 50.0)
        ledger.insert_rows(1, 2)
        _assert_matches(ledger, [10.0, 10.0, 10.0, 10.0, 50.0, 10.0])
        assert ledger.entry(4).source is HeightSource.MEASURED
        assert ledger.entry(1).source is HeightSource.ESTIMATED


def test_variable_ledgers_remove_shifts_entries() -> None:
    for ledger_type in VARIABLE_LEDGERS:
        ledger = ledger_type(10.0, 6)
        ledger.set_height(5, 70.0)
        ledger.set_height(0, 5.0)
        ledger.remove_rows(0, 2)
        _assert_matches(ledger, [10.0, 10.0, 10.0, 70.0])
        ledger.remove_rows(4, 0)
        assert ledger.row_count == 4


def test_variable_ledgers_measure_while_stale() -> None:
    for ledger_type in VARIABLE_LEDGERS:
        ledger = ledger_type(10.0, 8)
        assert ledger.total_height() == 80.0
        ledger.insert_rows(4, 1)
        ledger.set_height(1, 30.0)
        ledger.set_height(6, 15.0)
        ledger.remove_rows(0, 1)
        _assert_matches(ledger, [30.0, 10.0, 10.0, 10.0, 10.0, 15.0, 10.0, 10.0])


def test_variable_ledgers_match_naive_prefix_sums_under_random_edits() -> None:
    rng = random.Random(7)
    for ledger_type in VARIABLE_LEDGERS:
        heights = [24.0] * 40
        ledger = ledger_type(24.0, 40)
        for _ in range(300):
            op = rng.random()
            if op < 0.5 and heights:
                index = rng.randrange(len(heights))
                value = rng.randint(1, 240) / 2
                ledger.set_height(index, value)
                heights[index] = value
            elif op < 0.75:
                at = rng.randint(0, len(heights))
                count = rng.randint(0, 5)
                ledger.insert_rows(at, count)
                heights[at:at] = [24.0] * count
            elif heights:
                at = rng.randrange(len(heights))
                count = rng.randint(0, len(heights) - at)
                ledger.remove_rows(at, count)
                del heights[at : at + count]
            if rng.random() < 0.3:
                _assert_matches(ledger, heights)
        _assert_matches(ledger, heights)


def test_variable_ledgers_reset_replaces_rows() -> None:
    for ledger_type in VARIABLE_LEDGERS:
        ledger = ledger_type(16.0, 3)
        ledger.set_height(0, 99.0)
        ledger.reset(5)
        _assert_matches(ledger, [16.0] * 5)
        assert ledger.entry(0).source is HeightSource.ESTIMATED


def test_variable_ledgers_reject_misuse() -> None:
    for ledger_type in VARIABLE_LEDGERS:
        ledger = ledger_type(16.0, 3)
        with pytest.raises(IndexOutOfRange):
            ledger.get_offset(4)
        with pytest.raises(IndexOutOfRange):
            ledger.get_offset(-1)
        with pytest.raises(IndexOutOfRange):
            ledger.set_height(3, 10.0)
        with pytest.raises(IndexOutOfRange):
            ledger.entry(3)
        with pytest.raises(IndexOutOfRange):
            ledger.insert_rows(4, 1)
        with pytest.raises(IndexOutOfRange):
            ledger.remove_rows(1, 3)
        with pytest.raises(ValueError):
            ledger.set_height(0, -1.0)
        with pytest.raises(ValueError):
            ledger.set_height(0, math.inf)
        with pytest.raises(ValueError):
            ledger.remove_rows(0, -1)


def test_fenwick_ledger_tracks_measured_count() -> None:
    ledger = FenwickHeightLedger(16.0, 10)
    ledger.set_height(2, 20.0)
    ledger.set_height(3, 16.0)
    assert ledger.measured_count == 2
    ledger.remove_rows(2, 1)
    assert ledger.measured_count == 1


def test_fenwick_ledger_handles_large_lists() -> None:
    ledger = FenwickHeightLedger(32.0, 50_000)
    ledger.set_height(25_000, 132.0)
    assert ledger.get_offset(25_001) == 25_000 * 32.0 + 132.0
    assert ledger.locate(25_000 * 32.0 + 131.0) == 25_000
    assert ledger.locate(25_000 * 32.0 + 132.0) == 25_001
    assert ledger.total_height() == 50_000 * 32.0 + 100.0


def test_flat_ledger_warns_once_past_row_limit(caplog) -> None:
    caplog.set_level(logging.WARNING, logger="vscroll.ledger")
    ledger = FlatHeightLedger(10.0, FLAT_LEDGER_ROW_LIMIT + 1)
    ledger.insert_rows(0, 10)
    warnings = [r for r in caplog.records if "flat_ledger_row_limit_exceeded" in r.getMessage()]
    assert len(warnings) == 1


def test_variable_ledgers_locate_row_tops_with_inexact_heights() -> None:
    rng = random.Random(11)
    choices = (0.1, 0.2, 0.3, 17.7, 33.3, 1 / 3, 2.05)
    for ledger_type in VARIABLE_LEDGERS:
        for _ in range(40):
            row_count = rng.randint(1, 300)
            ledger = ledger_type(32.0, row_count)
            for index in range(row_count):
                ledger.set_height(index, rng.choice(choices))
            if rng.random() < 0.5:
                ledger.insert_rows(rng.randint(0, row_count), 3)
                ledger.set_height(rng.randrange(ledger.row_count), 1 / 3)
            for index in range(ledger.row_count):
                top = ledger.get_offset(index)
                assert ledger.locate(top) == index, (ledger_type.__name__, index, top)
                middle = top + ledger.height(index) / 2
                row = ledger.locate(middle)
                assert ledger.get_offset(row) <= middle < ledger.get_offset(row + 1)
            assert ledger.locate(ledger.total_height()) == ledger.row_count
