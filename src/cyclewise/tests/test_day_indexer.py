"""Tests for day-within-cycle indexing."""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta

import pytest

from cyclewise.cycle.day_indexer import (
    cycle_progress,
    day_in_cycle,
    days_until_next_period,
    normalize_cycle_length,
)
from cyclewise.errors import InvalidArgumentError
from cyclewise.tests.conftest import ALL_CYCLE_LENGTHS


class TestDayInCycle:
    @pytest.mark.parametrize("length", ALL_CYCLE_LENGTHS)
    def test_start_date_is_day_one(self, length: int) -> None:
        start = date(2025, 7, 26)
        assert day_in_cycle(start, start, length) == 1

    def test_mid_cycle(self) -> None:
        assert day_in_cycle(date(2025, 7, 1), date(2025, 7, 15), 28) == 15

    def test_last_day_of_cycle(self) -> None:
        assert day_in_cycle(date(2025, 7, 1), date(2025, 7, 28), 28) == 28

    def test_overflow_wraps_into_next_cycle(self) -> None:
        # 2025-07-30 is the 30th calendar day counted from 2025-07-01
        assert day_in_cycle(date(2025, 7, 1), date(2025, 7, 30), 28) == 2

    def test_exactly_one_cycle_later_is_day_one(self) -> None:
        start = date(2025, 7, 1)
        assert day_in_cycle(start, start + timedelta(days=28), 28) == 1

    @pytest.mark.parametrize("length", [21, 28, 35])
    def test_wraparound_is_periodic(self, length: int) -> None:
        start = date(2025, 3, 10)
        for offset in range(-120, 120):
            q = start + timedelta(days=offset)
            assert day_in_cycle(start, q, length) == day_in_cycle(
                start, q + timedelta(days=length), length
            )

    def test_future_start_date_stays_in_range(self) -> None:
        result = day_in_cycle(date(2025, 8, 1), date(2025, 7, 26), 28)
        assert 1 <= result <= 28
        # Six days before day 1 is day 23 of the preceding 28-day cycle
        assert result == 23

    def test_day_before_start_is_last_day_of_previous_cycle(self) -> None:
        assert day_in_cycle(date(2025, 8, 1), date(2025, 7, 31), 28) == 28

    def test_start_centuries_in_future(self) -> None:
        result = day_in_cycle(date(2525, 1, 1), date(2025, 1, 1), 28)
        assert 1 <= result <= 28

    def test_start_far_in_past(self) -> None:
        result = day_in_cycle(date(1900, 1, 1), date(2025, 1, 1), 35)
        assert 1 <= result <= 35

    def test_accepts_iso_strings_and_datetimes(self) -> None:
        assert day_in_cycle("2025-07-01T00:00:00.000Z", "2025-07-15", 28) == 15
        assert day_in_cycle(datetime(2025, 7, 1, 23, 59), date(2025, 7, 15), 28) == 15

    def test_missing_start_date_raises(self) -> None:
        with pytest.raises(InvalidArgumentError, match="required"):
            day_in_cycle(None, date(2025, 7, 15), 28)

    def test_unparseable_date_raises(self) -> None:
        with pytest.raises(InvalidArgumentError, match="ISO-8601"):
            day_in_cycle("first of July", date(2025, 7, 15), 28)

    def test_out_of_range_length_is_clamped(self) -> None:
        start = date(2025, 1, 1)
        # Clamped to 35, so 35 days later is day 1 again
        assert day_in_cycle(start, start + timedelta(days=35), 40) == 1
        assert day_in_cycle(start, start + timedelta(days=21), 10) == 1


class TestNormalizeCycleLength:
    def test_in_range_unchanged(self) -> None:
        assert normalize_cycle_length(28) == 28

    def test_clamps_and_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="cyclewise.cycle.day_indexer"):
            assert normalize_cycle_length(50) == 35
            assert normalize_cycle_length(14) == 21
        assert "clamped" in caplog.text

    def test_non_integer_raises(self) -> None:
        with pytest.raises(InvalidArgumentError):
            normalize_cycle_length("28")  # type: ignore[arg-type]
        with pytest.raises(InvalidArgumentError):
            normalize_cycle_length(True)  # type: ignore[arg-type]


class TestCycleCounters:
    def test_days_until_next_period(self) -> None:
        assert days_until_next_period(1, 28) == 28
        assert days_until_next_period(14, 28) == 15
        assert days_until_next_period(28, 28) == 1

    def test_cycle_progress(self) -> None:
        assert cycle_progress(7, 28) == 25
        assert cycle_progress(14, 28) == 50
        assert cycle_progress(21, 28) == 75
        assert cycle_progress(28, 28) == 100

    def test_day_outside_cycle_raises(self) -> None:
        with pytest.raises(InvalidArgumentError):
            days_until_next_period(29, 28)
