"""Forward and backward period/ovulation date predictions.

The past can be observed while the future can only be estimated, so the
previous period comes from the history record whenever one exists, and
the next period is always projected.
"""

from __future__ import annotations

import logging
from datetime import date

from cyclewise.config_loader import EngineConfig, resolve_config
from cyclewise.cycle.day_indexer import normalize_cycle_length
from cyclewise.cycle.history import History, average_cycle_length
from cyclewise.dates import DateLike, add_days, to_date
from cyclewise.models import CycleHistoryRecord
from cyclewise.schemas import normalize_history

logger = logging.getLogger("cyclewise.cycle.predictor")


def effective_cycle_length(
    current_cycle_length: int,
    history: History | None,
    config: EngineConfig | None = None,
) -> tuple[int, bool]:
    """Pick the cycle length to project with.

    Returns:
        ``(length, based_on_history)``: the history average when there is at
        least one usable record, else the clamped current length.
    """
    cfg = resolve_config(config)
    records = normalize_history(history)
    if records:
        return average_cycle_length(records, cfg), True
    return normalize_cycle_length(current_cycle_length, cfg), False


def observed_previous_start(current_start: DateLike, history: History | None) -> date | None:
    """Most recent recorded start date strictly before ``current_start``."""
    anchor = to_date(current_start, field_name="current_start")
    dated: list[CycleHistoryRecord] = [
        r for r in normalize_history(history) if r.start_date is not None
    ]
    for record in sorted(dated, key=lambda r: r.start_date, reverse=True):
        if record.start_date < anchor:
            return record.start_date
    return None


def next_period_date(
    current_start: DateLike,
    current_cycle_length: int,
    history: History | None = None,
    config: EngineConfig | None = None,
) -> date:
    """Project the start of the next period from the current cycle start."""
    start = to_date(current_start, field_name="current_start")
    length, _ = effective_cycle_length(current_cycle_length, history, config)
    return add_days(start, length)


def previous_period_date(
    current_start: DateLike,
    current_cycle_length: int,
    history: History | None = None,
    config: EngineConfig | None = None,
) -> date:
    """Return the previous period start, observed if possible, else projected."""
    start = to_date(current_start, field_name="current_start")
    records = normalize_history(history)
    observed = observed_previous_start(start, records)
    if observed is not None:
        return observed

    length, _ = effective_cycle_length(current_cycle_length, records, config)
    logger.debug("No recorded cycle before %s, projecting back %d days", start, length)
    return add_days(start, -length)


def predicted_ovulation_date(
    start_date: DateLike,
    cycle_length: int,
    config: EngineConfig | None = None,
) -> date:
    """Date of the ovulation peak in the cycle starting on ``start_date``.

    The peak is day ``cycle_length - luteal_days`` and day 1 is the start
    date itself, hence the extra day subtracted.
    """
    cfg = resolve_config(config)
    start = to_date(start_date, field_name="start_date")
    length = normalize_cycle_length(cycle_length, cfg)
    return add_days(start, length - cfg.phases.luteal_days - 1)
