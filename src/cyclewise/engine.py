"""Cycle engine facade.

Binds an :class:`EngineConfig` to the pure functions in
:mod:`cyclewise.cycle` so UI and state layers can call everything through
one object, and assembles a full :class:`CycleSnapshot` for a query date.

Usage::

    engine = CycleEngine()
    snapshot = engine.snapshot(
        cycle_start="2026-02-01",
        query_date=date(2026, 2, 14),
        cycle_length=28,
        history=store["cycleData"]["history"],
    )
    print(snapshot.phase_info.phase)
    print(snapshot.predictions.next_period.date)

The engine holds no mutable state.  The query date is always passed in;
nothing reads the clock.
"""

from __future__ import annotations

import logging
from datetime import date

from cyclewise.config_loader import EngineConfig, get_engine_config
from cyclewise.cycle import calendar, day_indexer, fertility, navigation, phases, predictor
from cyclewise.cycle import history as history_mod
from cyclewise.cycle.phase_info import phase_info as build_phase_info
from cyclewise.cycle.history import History
from cyclewise.dates import DateLike, to_date
from cyclewise.models import (
    CalendarPredictions,
    CycleSnapshot,
    CycleStatistics,
    FertilityLevel,
    NavigationInfo,
    Phase,
    PhaseInfo,
    PredictionConfidence,
)
from cyclewise.schemas import normalize_history, parse_active_cycle

logger = logging.getLogger("cyclewise.engine")


class CycleEngine:
    """Phase classification and period prediction with a bound config."""

    def __init__(self, config: EngineConfig | None = None) -> None:
        self._config = config or get_engine_config()

    @property
    def config(self) -> EngineConfig:
        return self._config

    # ------------------------------------------------------------------
    # Per-day classification
    # ------------------------------------------------------------------

    def day_in_cycle(self, start_date: DateLike, query_date: DateLike, cycle_length: int) -> int:
        return day_indexer.day_in_cycle(start_date, query_date, cycle_length, self._config)

    def phase(self, day_in_cycle: int, cycle_length: int) -> Phase:
        return phases.phase(day_in_cycle, cycle_length, self._config)

    def fertility_level(self, day_in_cycle: int, cycle_length: int) -> FertilityLevel:
        return fertility.fertility_level(day_in_cycle, cycle_length, self._config)

    def fertility_percentage(self, day_in_cycle: int, cycle_length: int) -> int:
        return fertility.fertility_percentage(day_in_cycle, cycle_length, self._config)

    def phase_info(self, day_in_cycle: int, cycle_length: int) -> PhaseInfo:
        return build_phase_info(day_in_cycle, cycle_length, self._config)

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    def average_cycle_length(self, history: History | None) -> int:
        return history_mod.average_cycle_length(history, self._config)

    def regularity(self, history: History | None) -> PredictionConfidence:
        return history_mod.regularity(history, self._config)

    def statistics(self, history: History | None) -> CycleStatistics:
        return history_mod.cycle_statistics(history)

    # ------------------------------------------------------------------
    # Predictions
    # ------------------------------------------------------------------

    def next_period_date(
        self, current_start: DateLike, current_cycle_length: int, history: History | None = None
    ) -> date:
        return predictor.next_period_date(current_start, current_cycle_length, history, self._config)

    def previous_period_date(
        self, current_start: DateLike, current_cycle_length: int, history: History | None = None
    ) -> date:
        return predictor.previous_period_date(
            current_start, current_cycle_length, history, self._config
        )

    def predicted_ovulation_date(self, start_date: DateLike, cycle_length: int) -> date:
        return predictor.predicted_ovulation_date(start_date, cycle_length, self._config)

    def period_navigation_info(
        self, current_start: DateLike, current_cycle_length: int, history: History | None = None
    ) -> NavigationInfo:
        return navigation.period_navigation_info(
            current_start, current_cycle_length, history, self._config
        )

    def calendar_predictions(
        self, cycle_start: DateLike, cycle_length: int, history: History | None = None
    ) -> CalendarPredictions:
        return calendar.calendar_predictions(cycle_start, cycle_length, history, self._config)

    # ------------------------------------------------------------------
    # Snapshot
    # ------------------------------------------------------------------

    def snapshot(
        self,
        cycle_start: DateLike,
        query_date: DateLike,
        cycle_length: int,
        history: History | None = None,
    ) -> CycleSnapshot:
        """Compute everything the UI shows for ``query_date`` in one call.

        Args:
            cycle_start:  Day 1 of the active cycle.
            query_date:   The date being displayed (usually today).
            cycle_length: The active cycle's configured length.
            history:      Persisted history records, any order.

        Returns:
            CycleSnapshot.  ``warnings`` notes any input the engine had to
            adjust (clamped length, dropped records, defaulted length).

        Raises:
            InvalidArgumentError: If ``cycle_start`` or ``query_date`` is missing.
        """
        cfg = self._config
        active = parse_active_cycle({"startDate": cycle_start, "cycleLength": cycle_length})
        query = to_date(query_date, field_name="query_date")
        items = list(history or [])
        records = normalize_history(items)

        warnings: list[str] = []
        if not cfg.cycle_length.contains(active.cycle_length):
            warnings.append(
                f"Cycle length {active.cycle_length} clamped to "
                f"{cfg.cycle_length.clamp(active.cycle_length)}"
            )
        if len(records) < len(items):
            warnings.append(f"Ignored {len(items) - len(records)} malformed history record(s)")
        if not records:
            warnings.append("No cycle history; predictions use the configured cycle length")

        length = day_indexer.normalize_cycle_length(active.cycle_length, cfg)
        day = day_indexer.day_in_cycle(active.start_date, query, length, cfg)

        snapshot = CycleSnapshot(
            query_date=query,
            cycle_start=active.start_date,
            cycle_length=length,
            phase_info=build_phase_info(day, length, cfg),
            predictions=calendar.calendar_predictions(active.start_date, length, records, cfg),
            navigation=navigation.period_navigation_info(active.start_date, length, records, cfg),
            statistics=history_mod.cycle_statistics(items),
            warnings=tuple(warnings),
        )
        logger.debug(
            "Snapshot %s: day %d/%d phase=%s",
            query,
            day,
            length,
            snapshot.phase_info.phase.value,
        )
        return snapshot
