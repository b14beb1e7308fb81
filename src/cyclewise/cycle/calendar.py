"""Calendar-highlighting predictions: ovulation and next period."""

from __future__ import annotations

import logging

from cyclewise.config_loader import EngineConfig, resolve_config
from cyclewise.cycle.history import History, regularity
from cyclewise.cycle.predictor import effective_cycle_length, predicted_ovulation_date
from cyclewise.dates import DateLike, add_days, to_date
from cyclewise.models import CalendarPredictions, PredictionResult, PredictionType
from cyclewise.schemas import normalize_history

logger = logging.getLogger("cyclewise.cycle.calendar")


def calendar_predictions(
    cycle_start: DateLike,
    cycle_length: int,
    history: History | None = None,
    config: EngineConfig | None = None,
) -> CalendarPredictions:
    """Predict the ovulation and next-period dates for the current cycle.

    Confidence is derived once from history and shared by both results:
    LOW without usable history, MEDIUM with fewer records than the
    regularity minimum, and the dispersion-based regularity after that.
    """
    cfg = resolve_config(config)
    start = to_date(cycle_start, field_name="cycle_start")
    records = normalize_history(history)
    length, _ = effective_cycle_length(cycle_length, records, cfg)
    confidence = regularity(records, cfg)

    logger.debug(
        "Calendar predictions for cycle %s: length=%d confidence=%s records=%d",
        start,
        length,
        confidence.value,
        len(records),
    )

    return CalendarPredictions(
        ovulation=PredictionResult(
            date=predicted_ovulation_date(start, length, cfg),
            confidence=confidence,
            type=PredictionType.OVULATION,
        ),
        next_period=PredictionResult(
            date=add_days(start, length),
            confidence=confidence,
            type=PredictionType.PERIOD,
        ),
    )
