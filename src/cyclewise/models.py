"""Value types shared by every cyclewise component.

All dataclasses are frozen: the engine never mutates its inputs or its
outputs, so results can be cached or shared between threads freely.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from enum import Enum


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class Phase(str, Enum):
    """Canonical cycle phase, in temporal order within a cycle.

    A phase is a pure classification of ``(day_in_cycle, cycle_length)``.
    It is recomputed on every call and never advanced or stored, so there
    are no transitions, guards or side effects attached to it.
    """

    MENSTRUAL = "menstrual"
    FOLLICULAR = "follicular"
    OVULATION = "ovulation"
    LUTEAL = "luteal"


class LutealBand(str, Enum):
    """Presentation subdivision of the luteal phase by days remaining."""

    EARLY = "early-luteal"
    LATE = "late-luteal"
    VERY_LATE = "very-late-luteal"


class _OrderedEnum(str, Enum):
    """String enum whose members compare by declaration order."""

    @property
    def rank(self) -> int:
        return list(type(self)).index(self)

    def _rank_of(self, other) -> int:
        if type(other) is not type(self):
            raise TypeError(
                f"cannot compare {type(self).__name__} with {type(other).__name__}"
            )
        return other.rank

    def __lt__(self, other):
        return self.rank < self._rank_of(other)

    def __le__(self, other):
        return self.rank <= self._rank_of(other)

    def __gt__(self, other):
        return self.rank > self._rank_of(other)

    def __ge__(self, other):
        return self.rank >= self._rank_of(other)


class FertilityLevel(_OrderedEnum):
    """Discrete fertility/risk level.  ``VERY_LOW < LOW < ... < VERY_HIGH``."""

    VERY_LOW = "very-low"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    VERY_HIGH = "very-high"


class PredictionConfidence(_OrderedEnum):
    """How much the cycle history supports a prediction.  ``LOW < MEDIUM < HIGH``."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class PredictionType(str, Enum):
    OVULATION = "ovulation"
    PERIOD = "period"


# ---------------------------------------------------------------------------
# History
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CycleHistoryRecord:
    """One historical cycle as the engine sees it.

    Attributes:
        start_date:   First day of the cycle.  ``None`` for undated records,
                      which still count towards averages but cannot anchor a
                      previous-period lookup.
        cycle_length: Observed length in days (start of this cycle to start
                      of the next).
    """

    start_date: date | None
    cycle_length: int

    def with_length(self, cycle_length: int) -> "CycleHistoryRecord":
        return replace(self, cycle_length=cycle_length)


@dataclass(frozen=True)
class CycleStatistics:
    """Summary of the usable history records.

    Attributes:
        average_length:  Rounded mean of all usable lengths, or None.
        shortest_cycle:  Minimum length, or None.
        longest_cycle:   Maximum length, or None.
        standard_deviation: Population stddev rounded to 0.1, or None.
        regularity:      'very-regular', 'regular', 'somewhat-irregular',
                         'irregular' or 'insufficient-data'.
        total_cycles:    Number of records passed in, including malformed ones.
        usable_cycles:   Number of records that survived validation.
    """

    average_length: int | None
    shortest_cycle: int | None
    longest_cycle: int | None
    standard_deviation: float | None
    regularity: str
    total_cycles: int
    usable_cycles: int


# ---------------------------------------------------------------------------
# Phase details
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class OvulationWindow:
    """Broad ovulation window in day-in-cycle terms (peak ± 2 days)."""

    start: int
    peak: int
    end: int


@dataclass(frozen=True)
class PhaseInfo:
    day_in_cycle: int
    cycle_length: int
    phase: Phase
    fertility_level: FertilityLevel
    fertility_percentage: int
    days_until_next_phase: int
    phase_progress: int
    days_until_next_period: int
    ovulation_day: int
    is_ovulating: bool
    luteal_band: LutealBand | None = None


# ---------------------------------------------------------------------------
# Predictions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PredictionResult:
    """A single predicted event date with its confidence."""

    date: date
    confidence: PredictionConfidence
    type: PredictionType

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "confidence": self.confidence.value,
            "type": self.type.value,
        }


@dataclass(frozen=True)
class CalendarPredictions:
    """Ovulation and next-period predictions sharing one confidence value."""

    ovulation: PredictionResult
    next_period: PredictionResult

    @property
    def confidence(self) -> PredictionConfidence:
        return self.next_period.confidence

    def to_dict(self) -> dict:
        return {
            "ovulation": self.ovulation.to_dict(),
            "nextPeriod": self.next_period.to_dict(),
        }


@dataclass(frozen=True)
class NavigationEntry:
    """One side of a previous/next period jump.

    Attributes:
        date:             Target date.
        is_predicted:     False only when the date is an observed history start.
        based_on_history: True when usable history drove the cycle length.
        cycle_length:     The cycle length actually used.
    """

    date: date
    is_predicted: bool
    based_on_history: bool
    cycle_length: int

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "isPredicted": self.is_predicted,
            "basedOnHistory": self.based_on_history,
            "cycleLength": self.cycle_length,
        }


@dataclass(frozen=True)
class NavigationInfo:
    next: NavigationEntry
    previous: NavigationEntry

    def to_dict(self) -> dict:
        return {"next": self.next.to_dict(), "previous": self.previous.to_dict()}


@dataclass(frozen=True)
class CycleSnapshot:
    """Everything the UI needs for one query date, computed in one call."""

    query_date: date
    cycle_start: date
    cycle_length: int
    phase_info: PhaseInfo
    predictions: CalendarPredictions
    navigation: NavigationInfo
    statistics: CycleStatistics
    warnings: tuple[str, ...] = ()
