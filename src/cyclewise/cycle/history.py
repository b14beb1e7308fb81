"""Cycle history aggregation: windowed average length and regularity.

History arrives in whatever order the store keeps it (the desktop store
keeps it newest-first), so every windowed computation sorts by start date
first.  Undated records sort as oldest and otherwise keep their input
order, which means a purely undated history is treated as oldest-first.

Averages and dispersion use the most recent ``history.rolling_window``
usable records (6 by default).  Malformed records are dropped by
:func:`cyclewise.schemas.normalize_history` before anything is computed.
"""

from __future__ import annotations

import logging
import math
import statistics
from collections.abc import Iterable
from datetime import date
from typing import Any

from cyclewise.config_loader import EngineConfig, resolve_config
from cyclewise.cycle.day_indexer import normalize_cycle_length
from cyclewise.dates import DateLike, days_between
from cyclewise.errors import InvalidArgumentError
from cyclewise.models import CycleHistoryRecord, CycleStatistics, PredictionConfidence
from cyclewise.schemas import normalize_history

logger = logging.getLogger("cyclewise.cycle.history")

History = Iterable[Any]


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (27.5 → 28, 28.5 → 29)."""
    return math.floor(value + 0.5)


def chronological(records: list[CycleHistoryRecord]) -> list[CycleHistoryRecord]:
    """Sort records oldest-first.  The sort is stable; undated records lead."""
    return sorted(records, key=lambda r: r.start_date or date.min)


def recent_cycles(
    history: History | None, count: int | None = None, config: EngineConfig | None = None
) -> list[CycleHistoryRecord]:
    """Return the most recent usable records, newest first.

    Args:
        history: Persisted history in any order.
        count:   How many to return; defaults to the configured rolling window.
    """
    cfg = resolve_config(config)
    n = cfg.history.rolling_window if count is None else count
    if n <= 0:
        return []
    ordered = chronological(normalize_history(history))
    return list(reversed(ordered[-n:]))


def windowed_lengths(history: History | None, config: EngineConfig | None = None) -> list[int]:
    """Cycle lengths of the rolling window, oldest first."""
    cfg = resolve_config(config)
    ordered = chronological(normalize_history(history))
    return [r.cycle_length for r in ordered[-cfg.history.rolling_window:]]


def average_cycle_length(history: History | None, config: EngineConfig | None = None) -> int:
    """Rounded mean length of the most recent cycles.

    Returns the configured default (28) when there is no usable record.
    The result is clamped to the allowed cycle length range.
    """
    cfg = resolve_config(config)
    lengths = windowed_lengths(history, cfg)
    if not lengths:
        return cfg.cycle_length.default

    average = round_half_up(statistics.mean(lengths))
    logger.debug("Average cycle length %d from %d record(s)", average, len(lengths))
    return normalize_cycle_length(average, cfg)


def cycle_length_stddev(history: History | None, config: EngineConfig | None = None) -> float | None:
    """Population standard deviation of the windowed lengths, or None if empty."""
    lengths = windowed_lengths(history, config)
    if not lengths:
        return None
    return statistics.pstdev(lengths)


def regularity(history: History | None, config: EngineConfig | None = None) -> PredictionConfidence:
    """Confidence implied by how consistent recent cycle lengths are.

    No usable records → LOW.  Fewer than ``min_records_for_regularity``
    → MEDIUM.  Otherwise stddev below ``high_max_stddev`` → HIGH, above
    ``low_min_stddev`` → LOW, else MEDIUM.
    """
    cfg = resolve_config(config)
    lengths = windowed_lengths(history, cfg)
    if not lengths:
        return PredictionConfidence.LOW
    if len(lengths) < cfg.history.min_records_for_regularity:
        return PredictionConfidence.MEDIUM

    std = statistics.pstdev(lengths)
    if std < cfg.confidence.high_max_stddev:
        return PredictionConfidence.HIGH
    if std > cfg.confidence.low_min_stddev:
        return PredictionConfidence.LOW
    return PredictionConfidence.MEDIUM


def _regularity_label(std: float) -> str:
    if std < 2:
        return "very-regular"
    if std < 4:
        return "regular"
    if std < 7:
        return "somewhat-irregular"
    return "irregular"


def cycle_statistics(history: History | None) -> CycleStatistics:
    """Summarize every usable record (not just the rolling window)."""
    items = list(history or [])
    records = normalize_history(items)

    if not records:
        return CycleStatistics(
            average_length=None,
            shortest_cycle=None,
            longest_cycle=None,
            standard_deviation=None,
            regularity="insufficient-data",
            total_cycles=len(items),
            usable_cycles=0,
        )

    lengths = [r.cycle_length for r in records]
    std = statistics.pstdev(lengths)
    return CycleStatistics(
        average_length=round_half_up(statistics.mean(lengths)),
        shortest_cycle=min(lengths),
        longest_cycle=max(lengths),
        standard_deviation=round(std, 1),
        regularity=_regularity_label(std),
        total_cycles=len(items),
        usable_cycles=len(records),
    )


def complete_cycle_record(
    record: CycleHistoryRecord,
    next_start: DateLike,
    config: EngineConfig | None = None,
) -> CycleHistoryRecord:
    """Close a cycle when the next one begins, recording its observed length.

    Raises:
        InvalidArgumentError: If the record is undated or ``next_start`` is
            not after its start date.
    """
    if record.start_date is None:
        raise InvalidArgumentError("Cannot complete an undated cycle record")
    observed = days_between(next_start, record.start_date)
    if observed <= 0:
        raise InvalidArgumentError(
            f"Next cycle start must be after {record.start_date.isoformat()}"
        )
    return record.with_length(normalize_cycle_length(observed, config))
