"""Tests for history aggregation: average length, regularity, statistics."""

from __future__ import annotations

import logging
from datetime import date

import pytest

from cyclewise.cycle.history import (
    average_cycle_length,
    complete_cycle_record,
    cycle_length_stddev,
    cycle_statistics,
    recent_cycles,
    regularity,
    round_half_up,
    windowed_lengths,
)
from cyclewise.errors import InvalidArgumentError
from cyclewise.models import CycleHistoryRecord, PredictionConfidence
from cyclewise.tests.conftest import make_history


def lengths(*values: int) -> list[dict]:
    return [{"cycleLength": v} for v in values]


# ---------------------------------------------------------------------------
# Average cycle length
# ---------------------------------------------------------------------------


class TestAverageCycleLength:
    def test_average_from_history(self) -> None:
        assert average_cycle_length(lengths(28, 29, 27, 28)) == 28

    def test_empty_history_uses_default(self) -> None:
        assert average_cycle_length([]) == 28
        assert average_cycle_length(None) == 28

    def test_only_last_six_cycles_count(self) -> None:
        history = lengths(35, 35, 28, 29, 27, 28, 29, 28)
        assert average_cycle_length(history) == 28

    def test_window_is_chronological_not_insertion_order(self) -> None:
        # Stored newest first, oldest outliers at the end of the list
        history = list(reversed(make_history(35, 35, 28, 29, 27, 28, 29, 28)))
        assert average_cycle_length(history) == 28
        assert windowed_lengths(history) == [28, 29, 27, 28, 29, 28]

    def test_malformed_records_are_excluded(self, caplog: pytest.LogCaptureFixture) -> None:
        history = [
            {"cycleLength": 28},
            {"cycleLength": None},
            {"startDate": "2025-01-01"},
            {"cycleLength": "not a number"},
            {"cycleLength": 30},
        ]
        with caplog.at_level(logging.WARNING, logger="cyclewise.schemas"):
            assert average_cycle_length(history) == 29
        assert "Skipping malformed history record" in caplog.text

    def test_boolean_lengths_are_excluded(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="cyclewise.schemas"):
            assert windowed_lengths([{"cycleLength": True}, {"cycleLength": 28}]) == [28]
        assert "Skipping malformed history record 0" in caplog.text

        caplog.clear()
        records = [
            CycleHistoryRecord(start_date=None, cycle_length=True),
            CycleHistoryRecord(start_date=None, cycle_length=28),
        ]
        with caplog.at_level(logging.WARNING, logger="cyclewise.schemas"):
            assert windowed_lengths(records) == [28]
            assert average_cycle_length(records) == 28
        assert "invalid cycle length True" in caplog.text

    def test_all_malformed_falls_back_to_default(self) -> None:
        assert average_cycle_length([{"notes": "x"}, {"cycleLength": 0}]) == 28

    def test_rounds_half_up(self) -> None:
        assert average_cycle_length(lengths(27, 28)) == 28
        assert average_cycle_length(lengths(28, 29)) == 29

    def test_result_is_clamped(self) -> None:
        assert average_cycle_length(lengths(40, 42, 44)) == 35

    def test_stored_history_fixture(self, stored_history: list[dict]) -> None:
        assert average_cycle_length(stored_history) == 28

    def test_round_half_up(self) -> None:
        assert round_half_up(27.5) == 28
        assert round_half_up(28.49) == 28


# ---------------------------------------------------------------------------
# Regularity / confidence
# ---------------------------------------------------------------------------


class TestRegularity:
    def test_no_history_is_low(self) -> None:
        assert regularity([]) is PredictionConfidence.LOW

    def test_only_malformed_is_low(self) -> None:
        assert regularity([{"notes": "x"}]) is PredictionConfidence.LOW

    def test_fewer_than_three_records_is_medium(self) -> None:
        assert regularity(lengths(28)) is PredictionConfidence.MEDIUM
        assert regularity(lengths(21, 35)) is PredictionConfidence.MEDIUM

    def test_regular_cycles_are_high(self) -> None:
        assert regularity(lengths(28, 28, 28)) is PredictionConfidence.HIGH
        assert regularity(lengths(28, 29, 27, 28)) is PredictionConfidence.HIGH

    def test_moderate_spread_is_medium(self) -> None:
        # pstdev ≈ 3.27
        assert regularity(lengths(24, 28, 32)) is PredictionConfidence.MEDIUM

    def test_wide_spread_is_low(self) -> None:
        assert regularity(lengths(21, 35, 21, 35)) is PredictionConfidence.LOW

    def test_old_outliers_outside_window_ignored(self) -> None:
        history = make_history(21, 35, 28, 28, 29, 28, 27, 28)
        assert regularity(history) is PredictionConfidence.HIGH

    def test_more_dispersion_never_raises_confidence(self) -> None:
        previous = PredictionConfidence.HIGH
        for spread in range(0, 8):
            level = regularity(lengths(28 - spread, 28, 28 + spread))
            assert level <= previous
            previous = level
        assert previous is PredictionConfidence.LOW

    def test_stddev(self) -> None:
        assert cycle_length_stddev([]) is None
        assert cycle_length_stddev(lengths(28, 28, 28)) == pytest.approx(0.0)
        assert cycle_length_stddev(lengths(21, 35)) == pytest.approx(7.0)


# ---------------------------------------------------------------------------
# Statistics / windows / completion
# ---------------------------------------------------------------------------


class TestCycleStatistics:
    def test_stored_history(self, stored_history: list[dict]) -> None:
        stats = cycle_statistics(stored_history)
        assert stats.total_cycles == 10
        assert stats.usable_cycles == 8
        assert stats.average_length == 30
        assert stats.shortest_cycle == 27
        assert stats.longest_cycle == 35
        assert stats.standard_deviation == pytest.approx(3.1)
        assert stats.regularity == "regular"

    def test_empty(self) -> None:
        stats = cycle_statistics([])
        assert stats.average_length is None
        assert stats.regularity == "insufficient-data"
        assert stats.usable_cycles == 0

    def test_regularity_labels(self) -> None:
        assert cycle_statistics(lengths(28, 28, 29)).regularity == "very-regular"
        assert cycle_statistics(lengths(21, 35)).regularity == "irregular"


class TestRecentCycles:
    def test_newest_first(self) -> None:
        history = make_history(30, 29, 28)
        recent = recent_cycles(history, count=2)
        assert [r.cycle_length for r in recent] == [28, 29]
        assert recent[0].start_date > recent[1].start_date

    def test_defaults_to_rolling_window(self, stored_history: list[dict]) -> None:
        recent = recent_cycles(stored_history)
        assert len(recent) == 6
        assert recent[0].start_date == date(2026, 1, 27)

    def test_zero_count(self) -> None:
        assert recent_cycles(make_history(28), count=0) == []


class TestCompleteCycleRecord:
    def test_records_observed_length(self) -> None:
        record = CycleHistoryRecord(start_date=date(2025, 1, 1), cycle_length=28)
        completed = complete_cycle_record(record, date(2025, 1, 31))
        assert completed.cycle_length == 30
        assert completed.start_date == date(2025, 1, 1)
        # Input is untouched
        assert record.cycle_length == 28

    def test_accepts_iso_string(self) -> None:
        record = CycleHistoryRecord(start_date=date(2025, 1, 1), cycle_length=28)
        assert complete_cycle_record(record, "2025-01-27T00:00:00.000Z").cycle_length == 26

    def test_next_start_must_be_later(self) -> None:
        record = CycleHistoryRecord(start_date=date(2025, 1, 1), cycle_length=28)
        with pytest.raises(InvalidArgumentError):
            complete_cycle_record(record, date(2025, 1, 1))

    def test_undated_record_raises(self) -> None:
        with pytest.raises(InvalidArgumentError, match="undated"):
            complete_cycle_record(CycleHistoryRecord(start_date=None, cycle_length=28), date(2025, 1, 1))
