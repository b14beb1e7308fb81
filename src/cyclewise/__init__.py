"""cyclewise — menstrual cycle phase and prediction engine.

Maps a cycle start date, a query date, a cycle length and the recorded
cycle history to the current phase, a fertility score, and predicted
period and ovulation dates with a confidence rating.

Subpackages:
    cycle/ — the pure phase, fertility, history and prediction functions

Core modules:
    engine        — CycleEngine facade and one-call snapshots
    models        — enums and frozen result dataclasses
    schemas       — pydantic validation of persisted payloads
    dates         — date normalization (date, datetime, ISO-8601 string)
    config_loader — load/validate/hot-reload engine_config.yaml
    config        — environment settings and logging setup
"""

from cyclewise.config_loader import EngineConfig, get_engine_config, reload_engine_config
from cyclewise.engine import CycleEngine
from cyclewise.errors import ConfigValidationError, CycleEngineError, InvalidArgumentError
from cyclewise.models import (
    CalendarPredictions,
    CycleHistoryRecord,
    CycleSnapshot,
    FertilityLevel,
    LutealBand,
    NavigationEntry,
    NavigationInfo,
    Phase,
    PhaseInfo,
    PredictionConfidence,
    PredictionResult,
    PredictionType,
)

__version__ = "0.1.0"

__all__ = [
    "CalendarPredictions",
    "ConfigValidationError",
    "CycleEngine",
    "CycleEngineError",
    "CycleHistoryRecord",
    "CycleSnapshot",
    "EngineConfig",
    "FertilityLevel",
    "InvalidArgumentError",
    "LutealBand",
    "NavigationEntry",
    "NavigationInfo",
    "Phase",
    "PhaseInfo",
    "PredictionConfidence",
    "PredictionResult",
    "PredictionType",
    "get_engine_config",
    "reload_engine_config",
]
