"""Day-within-cycle indexing.

Maps a cycle start date and a query date onto a 1-based day index that
wraps every ``cycle_length`` days, in both directions.  A start date that
lies after the query date is treated as the start of a later cycle: the
query falls in an earlier cycle of the same length.
"""

from __future__ import annotations

import logging

from cyclewise.config_loader import EngineConfig, resolve_config
from cyclewise.dates import DateLike, days_between
from cyclewise.errors import InvalidArgumentError

logger = logging.getLogger("cyclewise.cycle.day_indexer")


def normalize_cycle_length(cycle_length: int, config: EngineConfig | None = None) -> int:
    """Clamp a cycle length into the configured ``[min, max]`` range.

    Raises:
        InvalidArgumentError: If ``cycle_length`` is not an integer.
    """
    if isinstance(cycle_length, bool) or not isinstance(cycle_length, int):
        raise InvalidArgumentError(f"cycle_length must be an integer, got {cycle_length!r}")
    bounds = resolve_config(config).cycle_length
    clamped = bounds.clamp(cycle_length)
    if clamped != cycle_length:
        logger.warning(
            "Cycle length %d outside [%d, %d], clamped to %d",
            cycle_length,
            bounds.min,
            bounds.max,
            clamped,
        )
    return clamped


def validate_day(day_in_cycle: int, cycle_length: int) -> None:
    """Raise unless ``1 <= day_in_cycle <= cycle_length``."""
    if isinstance(day_in_cycle, bool) or not isinstance(day_in_cycle, int):
        raise InvalidArgumentError(f"day_in_cycle must be an integer, got {day_in_cycle!r}")
    if not 1 <= day_in_cycle <= cycle_length:
        raise InvalidArgumentError(
            f"day_in_cycle {day_in_cycle} is outside [1, {cycle_length}]"
        )


def day_in_cycle(
    start_date: DateLike,
    query_date: DateLike,
    cycle_length: int,
    config: EngineConfig | None = None,
) -> int:
    """Return the 1-based day of the cycle that ``query_date`` falls on.

    Python's modulo is floored, so negative differences (start date after
    the query date) fold into ``[0, cycle_length)`` directly, however many
    cycles apart the two dates are.

    Args:
        start_date:   Day 1 of a known cycle.
        query_date:   Date to index.
        cycle_length: Cycle length in days (clamped to the configured range).

    Returns:
        Day index in ``[1, cycle_length]``.

    Raises:
        InvalidArgumentError: If either date is missing or unparseable.
    """
    length = normalize_cycle_length(cycle_length, config)
    diff = days_between(query_date, start_date)
    return diff % length + 1


def days_until_next_period(day: int, cycle_length: int) -> int:
    """Days from ``day`` to day 1 of the next cycle (1 on the last day)."""
    validate_day(day, cycle_length)
    return cycle_length - day + 1


def cycle_progress(day: int, cycle_length: int) -> int:
    """Percentage of the cycle elapsed on ``day`` (100 on the last day)."""
    validate_day(day, cycle_length)
    return round(day / cycle_length * 100)
