"""Fertility level and percentage for a day within a cycle.

Levels by day (``ov`` = ovulation day, ``L`` = cycle length):

    day <= 5                 very-low
    ov <= day <= ov + 2      very-high
    ov - 3 <= day < ov       high
    day in {6, 7}, day >= L-2  low
    otherwise                medium

The percentage is computed separately, on its own banded curve:

    very-low   5
    low        10–25   (rising towards ovulation, falling into the period)
    medium     35–55   (linear ramp within each medium stretch)
    high       70–80   (ov-3 → 70, ov-1 → 80)
    very-high  90–100  (ov → 100, then 95, 90)

so that it falls in the band of the matching level and never rises as a
day moves further from the peak on either side of it.
"""

from __future__ import annotations

from cyclewise.config_loader import EngineConfig, resolve_config
from cyclewise.cycle.day_indexer import normalize_cycle_length, validate_day
from cyclewise.models import FertilityLevel

# Lower bound of each level's percentage band
LEVEL_FLOORS: dict[FertilityLevel, int] = {
    FertilityLevel.VERY_LOW: 0,
    FertilityLevel.LOW: 10,
    FertilityLevel.MEDIUM: 30,
    FertilityLevel.HIGH: 60,
    FertilityLevel.VERY_HIGH: 85,
}

_HIGH_LEAD_DAYS = 3
_LOW_TAIL_DAYS = 3
_MEDIUM_MIN = 35
_MEDIUM_MAX = 55


def level_for_percentage(percentage: float) -> FertilityLevel:
    """Map a percentage back onto the level whose band contains it."""
    result = FertilityLevel.VERY_LOW
    for level, floor in LEVEL_FLOORS.items():
        if percentage >= floor:
            result = level
    return result


def fertility_level(
    day_in_cycle: int, cycle_length: int, config: EngineConfig | None = None
) -> FertilityLevel:
    cfg = resolve_config(config)
    length = normalize_cycle_length(cycle_length, cfg)
    validate_day(day_in_cycle, length)

    menstrual_end = cfg.phases.menstrual_days
    ov_day = length - cfg.phases.luteal_days
    ov_end = ov_day + cfg.phases.ovulation_window_days - 1

    if day_in_cycle <= menstrual_end:
        return FertilityLevel.VERY_LOW
    if ov_day <= day_in_cycle <= ov_end:
        return FertilityLevel.VERY_HIGH
    if ov_day - _HIGH_LEAD_DAYS <= day_in_cycle < ov_day:
        return FertilityLevel.HIGH
    if day_in_cycle <= menstrual_end + 2 or day_in_cycle > length - _LOW_TAIL_DAYS:
        return FertilityLevel.LOW
    return FertilityLevel.MEDIUM


def _ramp(day: int, first: int, last: int, rising: bool) -> int:
    if last <= first:
        return (_MEDIUM_MIN + _MEDIUM_MAX) // 2
    fraction = (day - first) / (last - first)
    if not rising:
        fraction = 1 - fraction
    return _MEDIUM_MIN + round(fraction * (_MEDIUM_MAX - _MEDIUM_MIN))


def fertility_percentage(
    day_in_cycle: int, cycle_length: int, config: EngineConfig | None = None
) -> int:
    """Continuous 0–100 fertility score for a day of the cycle."""
    cfg = resolve_config(config)
    length = normalize_cycle_length(cycle_length, cfg)
    validate_day(day_in_cycle, length)

    menstrual_end = cfg.phases.menstrual_days
    ov_day = length - cfg.phases.luteal_days
    ov_end = ov_day + cfg.phases.ovulation_window_days - 1
    high_start = ov_day - _HIGH_LEAD_DAYS
    early_low_end = menstrual_end + 2
    late_low_start = length - _LOW_TAIL_DAYS + 1

    if day_in_cycle <= menstrual_end:
        return 5

    if ov_day <= day_in_cycle <= ov_end:
        return max(LEVEL_FLOORS[FertilityLevel.VERY_HIGH], 100 - 5 * (day_in_cycle - ov_day))

    if high_start <= day_in_cycle < ov_day:
        return 80 - 5 * (ov_day - day_in_cycle - 1)

    if day_in_cycle <= early_low_end:
        # 15 on the first day after the period, 20 on the next
        return 15 + 5 * (day_in_cycle - menstrual_end - 1)

    if day_in_cycle >= late_low_start:
        # 20, 15, 10 over the last three days
        return 20 - 5 * (day_in_cycle - late_low_start)

    if day_in_cycle < ov_day:
        return _ramp(day_in_cycle, early_low_end + 1, high_start - 1, rising=True)
    return _ramp(day_in_cycle, ov_end + 1, late_low_start - 1, rising=False)
