"""Bundle every per-day classification into one PhaseInfo."""

from __future__ import annotations

from cyclewise.config_loader import EngineConfig, resolve_config
from cyclewise.cycle.day_indexer import days_until_next_period, normalize_cycle_length
from cyclewise.cycle.fertility import fertility_level, fertility_percentage
from cyclewise.cycle.phases import (
    days_until_next_phase,
    luteal_band,
    ovulation_window,
    phase,
    phase_progress,
)
from cyclewise.models import PhaseInfo


def phase_info(day_in_cycle: int, cycle_length: int, config: EngineConfig | None = None) -> PhaseInfo:
    """Compute phase, fertility and progress details for one day.

    Args:
        day_in_cycle: Day index in ``[1, cycle_length]``.
        cycle_length: Cycle length (clamped to the configured range).

    Returns:
        PhaseInfo for that day.
    """
    cfg = resolve_config(config)
    length = normalize_cycle_length(cycle_length, cfg)
    window = ovulation_window(length, cfg)

    return PhaseInfo(
        day_in_cycle=day_in_cycle,
        cycle_length=length,
        phase=phase(day_in_cycle, length, cfg),
        fertility_level=fertility_level(day_in_cycle, length, cfg),
        fertility_percentage=fertility_percentage(day_in_cycle, length, cfg),
        days_until_next_phase=days_until_next_phase(day_in_cycle, length, cfg),
        phase_progress=phase_progress(day_in_cycle, length, cfg),
        days_until_next_period=days_until_next_period(day_in_cycle, length),
        ovulation_day=window.peak,
        is_ovulating=window.start <= day_in_cycle <= window.end,
        luteal_band=luteal_band(day_in_cycle, length, cfg),
    )
