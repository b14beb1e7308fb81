"""Phase classification for a day within a cycle.

Ovulation is anchored to the *end* of the cycle (``luteal_days`` before the
next period), not to a fixed day 14, so the ovulation window moves with the
cycle length:

    cycle 21 → ovulation days 7–9
    cycle 28 → ovulation days 14–16
    cycle 35 → ovulation days 21–23

Classification order is menstrual, ovulation, follicular, luteal.  For a
21-day cycle the ovulation window starts right after menstruation, and
checking ovulation before follicular keeps day 7 from being claimed twice.
"""

from __future__ import annotations

from cyclewise.config_loader import EngineConfig, resolve_config
from cyclewise.cycle.day_indexer import normalize_cycle_length, validate_day
from cyclewise.models import LutealBand, OvulationWindow, Phase


def ovulation_day(cycle_length: int, config: EngineConfig | None = None) -> int:
    """Day-in-cycle of the expected ovulation peak."""
    cfg = resolve_config(config)
    return normalize_cycle_length(cycle_length, cfg) - cfg.phases.luteal_days


def ovulation_window(cycle_length: int, config: EngineConfig | None = None) -> OvulationWindow:
    """Broad two-days-either-side window around the ovulation peak.

    This is the calendar's highlight window.  The phase classifier uses the
    narrower peak-plus-following-days window.
    """
    peak = ovulation_day(cycle_length, config)
    return OvulationWindow(start=peak - 2, peak=peak, end=peak + 2)


def phase(day_in_cycle: int, cycle_length: int, config: EngineConfig | None = None) -> Phase:
    """Classify a day of the cycle into one of the four canonical phases.

    Raises:
        InvalidArgumentError: If ``day_in_cycle`` is outside ``[1, cycle_length]``.
    """
    cfg = resolve_config(config)
    length = normalize_cycle_length(cycle_length, cfg)
    validate_day(day_in_cycle, length)

    menstrual_end = cfg.phases.menstrual_days
    ov_day = length - cfg.phases.luteal_days
    ov_end = ov_day + cfg.phases.ovulation_window_days - 1

    if day_in_cycle <= menstrual_end:
        return Phase.MENSTRUAL
    if ov_day <= day_in_cycle <= ov_end:
        return Phase.OVULATION
    if day_in_cycle < ov_day:
        return Phase.FOLLICULAR
    return Phase.LUTEAL


def days_until_next_phase(
    day_in_cycle: int, cycle_length: int, config: EngineConfig | None = None
) -> int:
    """Days until the phase after the current one begins.

    For the luteal phase the next phase is the following cycle's
    menstruation, so this equals the days until the next period.
    """
    cfg = resolve_config(config)
    length = normalize_cycle_length(cycle_length, cfg)
    current = phase(day_in_cycle, length, cfg)
    ov_day = length - cfg.phases.luteal_days

    if current is Phase.MENSTRUAL:
        return max(0, cfg.phases.menstrual_days + 1 - day_in_cycle)
    if current is Phase.FOLLICULAR:
        return max(0, ov_day - day_in_cycle)
    if current is Phase.OVULATION:
        return max(0, ov_day + cfg.phases.ovulation_window_days - day_in_cycle)
    return max(0, length - day_in_cycle + 1)


def phase_bounds(
    current: Phase, cycle_length: int, config: EngineConfig | None = None
) -> tuple[int, int]:
    """First and last day-in-cycle of ``current`` for this cycle length."""
    cfg = resolve_config(config)
    length = normalize_cycle_length(cycle_length, cfg)
    menstrual_end = cfg.phases.menstrual_days
    ov_day = length - cfg.phases.luteal_days
    ov_end = ov_day + cfg.phases.ovulation_window_days - 1

    if current is Phase.MENSTRUAL:
        return 1, menstrual_end
    if current is Phase.FOLLICULAR:
        return menstrual_end + 1, ov_day - 1
    if current is Phase.OVULATION:
        return max(ov_day, menstrual_end + 1), ov_end
    return ov_end + 1, length


def phase_progress(day_in_cycle: int, cycle_length: int, config: EngineConfig | None = None) -> int:
    """Percentage (0–100) of the current phase completed on this day."""
    cfg = resolve_config(config)
    length = normalize_cycle_length(cycle_length, cfg)
    first, last = phase_bounds(phase(day_in_cycle, length, cfg), length, cfg)
    span = max(1, last - first + 1)
    return min(100, round((day_in_cycle - first + 1) / span * 100))


def luteal_band(
    day_in_cycle: int, cycle_length: int, config: EngineConfig | None = None
) -> LutealBand | None:
    """Split the luteal phase by days remaining before the next period.

    Returns None outside the luteal phase.  The band is a display concern
    layered on top of :func:`phase`; it is not a fifth phase.
    """
    cfg = resolve_config(config)
    length = normalize_cycle_length(cycle_length, cfg)
    if phase(day_in_cycle, length, cfg) is not Phase.LUTEAL:
        return None

    remaining = length - day_in_cycle
    if remaining < cfg.phases.very_late_luteal_days:
        return LutealBand.VERY_LATE
    if remaining < cfg.phases.late_luteal_days:
        return LutealBand.LATE
    return LutealBand.EARLY
