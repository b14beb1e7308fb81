"""Previous/next period targets for "jump to nearest period" actions."""

from __future__ import annotations

from cyclewise.config_loader import EngineConfig, resolve_config
from cyclewise.cycle.history import History
from cyclewise.cycle.predictor import effective_cycle_length, observed_previous_start
from cyclewise.dates import DateLike, add_days, to_date
from cyclewise.models import NavigationEntry, NavigationInfo
from cyclewise.schemas import normalize_history


def period_navigation_info(
    current_start: DateLike,
    current_cycle_length: int,
    history: History | None = None,
    config: EngineConfig | None = None,
) -> NavigationInfo:
    """Assemble the previous and next period targets with their provenance.

    ``next`` is always a projection.  ``previous`` is an observation
    (``is_predicted=False``) when a recorded cycle started before
    ``current_start``, and a backward projection otherwise.
    """
    cfg = resolve_config(config)
    start = to_date(current_start, field_name="current_start")
    # Materialize once; the caller's collection may be a one-shot iterable
    records = normalize_history(history)
    length, based_on_history = effective_cycle_length(current_cycle_length, records, cfg)

    next_entry = NavigationEntry(
        date=add_days(start, length),
        is_predicted=True,
        based_on_history=based_on_history,
        cycle_length=length,
    )

    observed = observed_previous_start(start, records)
    previous_entry = NavigationEntry(
        date=observed if observed is not None else add_days(start, -length),
        is_predicted=observed is None,
        based_on_history=based_on_history,
        cycle_length=length,
    )

    return NavigationInfo(next=next_entry, previous=previous_entry)
