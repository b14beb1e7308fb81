"""Cycle phase and prediction functions.

Every function here is pure: outputs depend only on the arguments (plus
the immutable engine config), nothing is cached and nothing is mutated.
Callers may invoke them concurrently.  The ``history`` argument is read
as a snapshot; pass an immutable copy if another thread may modify it.

Modules:
    day_indexer — day-within-cycle with wraparound in both directions
    phases      — four-phase classifier, ovulation window, luteal bands
    fertility   — fertility level and percentage
    phase_info  — all per-day classifications in one object
    history     — windowed average length, regularity, statistics
    predictor   — next/previous period and ovulation dates
    navigation  — previous/next period jump targets
    calendar    — ovulation + next-period predictions with confidence
"""

from cyclewise.cycle.calendar import calendar_predictions
from cyclewise.cycle.day_indexer import cycle_progress, day_in_cycle, days_until_next_period
from cyclewise.cycle.fertility import fertility_level, fertility_percentage
from cyclewise.cycle.history import (
    average_cycle_length,
    complete_cycle_record,
    cycle_statistics,
    recent_cycles,
    regularity,
)
from cyclewise.cycle.navigation import period_navigation_info
from cyclewise.cycle.phase_info import phase_info
from cyclewise.cycle.phases import (
    days_until_next_phase,
    luteal_band,
    ovulation_day,
    ovulation_window,
    phase,
    phase_progress,
)
from cyclewise.cycle.predictor import (
    next_period_date,
    predicted_ovulation_date,
    previous_period_date,
)

__all__ = [
    "average_cycle_length",
    "calendar_predictions",
    "complete_cycle_record",
    "cycle_progress",
    "cycle_statistics",
    "day_in_cycle",
    "days_until_next_period",
    "days_until_next_phase",
    "fertility_level",
    "fertility_percentage",
    "luteal_band",
    "next_period_date",
    "ovulation_day",
    "ovulation_window",
    "period_navigation_info",
    "phase",
    "phase_info",
    "phase_progress",
    "predicted_ovulation_date",
    "previous_period_date",
    "recent_cycles",
    "regularity",
]
