"""Load, validate, and hot-reload the cyclewise engine configuration.

The config lives in ``engine_config.yaml`` alongside this module.  At first
use it is loaded once and cached.  Call ``reload_engine_config()`` to re-read
from disk after an edit; no restart required.

Usage::

    from cyclewise.config_loader import get_engine_config

    config = get_engine_config()
    config.cycle_length.clamp(40)        # 35
    config.history.rolling_window        # 6
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from cyclewise.errors import ConfigValidationError

logger = logging.getLogger("cyclewise.config")

# Path to the YAML file sitting next to this module
_CONFIG_PATH = Path(__file__).parent / "engine_config.yaml"


# ---------------------------------------------------------------------------
# Typed config sections
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CycleLengthConfig:
    """Allowed cycle length domain in days."""

    default: int = 28
    min: int = 21
    max: int = 35

    def clamp(self, length: int) -> int:
        return max(self.min, min(self.max, length))

    def contains(self, length: int) -> bool:
        return self.min <= length <= self.max


@dataclass(frozen=True)
class HistoryConfig:
    """History aggregation settings."""

    rolling_window: int = 6
    min_records_for_regularity: int = 3


@dataclass(frozen=True)
class ConfidenceConfig:
    """Standard deviation thresholds (days) for confidence classification."""

    high_max_stddev: float = 2.0
    low_min_stddev: float = 4.0


@dataclass(frozen=True)
class PhaseConfig:
    """Fixed day offsets used by the phase and fertility classifiers."""

    menstrual_days: int = 5
    luteal_days: int = 14
    ovulation_window_days: int = 3
    late_luteal_days: int = 7
    very_late_luteal_days: int = 3


@dataclass(frozen=True)
class EngineConfig:
    """Complete, validated engine configuration.

    This is the single in-memory representation of engine_config.yaml.
    Every classifier, aggregator and predictor reads from this object.

    Attributes:
        version:       Config schema version string.
        cycle_length:  Default and allowed range of cycle lengths.
        history:       Rolling window and minimum sample sizes.
        confidence:    Dispersion thresholds for Low/Medium/High.
        phases:        Day offsets for the phase boundaries.
    """

    version: str = "1.0"
    cycle_length: CycleLengthConfig = field(default_factory=CycleLengthConfig)
    history: HistoryConfig = field(default_factory=HistoryConfig)
    confidence: ConfidenceConfig = field(default_factory=ConfidenceConfig)
    phases: PhaseConfig = field(default_factory=PhaseConfig)


# ---------------------------------------------------------------------------
# Loader / validation
# ---------------------------------------------------------------------------


def _load_yaml(path: Path) -> dict:
    """Read and parse a YAML file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigValidationError: If the YAML is malformed.
    """
    if not path.exists():
        raise FileNotFoundError(f"Engine config not found: {path}")

    with path.open("r", encoding="utf-8") as fh:
        try:
            raw = yaml.safe_load(fh) or {}
        except yaml.YAMLError as exc:
            raise ConfigValidationError(f"YAML parse error in {path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigValidationError(f"{path} must contain a mapping at the top level")
    return raw


def _validate_and_build(raw: dict) -> EngineConfig:
    """Validate the raw YAML dict and construct an EngineConfig.

    Every problem is collected before raising so a broken file reports all
    of its errors at once.  Missing optional keys take their defaults.

    Raises:
        ConfigValidationError: If any value is missing, mistyped or inconsistent.
    """
    errors: list[str] = []

    def _section(name: str) -> dict:
        value = raw.get(name) or {}
        if not isinstance(value, dict):
            errors.append(f"'{name}' must be a mapping")
            return {}
        return value

    def _int(d: dict, key: str, section: str, default: int, minimum: int = 1) -> int:
        value = d.get(key, default)
        if isinstance(value, bool) or not isinstance(value, int):
            errors.append(f"{section}.{key} must be an integer, got {value!r}")
            return default
        if value < minimum:
            errors.append(f"{section}.{key} = {value} must be >= {minimum}")
        return value

    def _float(d: dict, key: str, section: str, default: float) -> float:
        value = d.get(key, default)
        try:
            result = float(value)
        except (TypeError, ValueError):
            errors.append(f"{section}.{key} must be a number, got {value!r}")
            return default
        if result < 0:
            errors.append(f"{section}.{key} = {result} must not be negative")
        return result

    version = str(raw.get("version", "1.0"))

    # ── Cycle length ──
    cl_raw = _section("cycle_length")
    cycle_length = CycleLengthConfig(
        default=_int(cl_raw, "default", "cycle_length", 28),
        min=_int(cl_raw, "min", "cycle_length", 21),
        max=_int(cl_raw, "max", "cycle_length", 35),
    )
    if cycle_length.min > cycle_length.max:
        errors.append(
            f"cycle_length.min ({cycle_length.min}) is greater than "
            f"cycle_length.max ({cycle_length.max})"
        )
    elif not cycle_length.contains(cycle_length.default):
        errors.append(
            f"cycle_length.default ({cycle_length.default}) is out of range "
            f"[{cycle_length.min}, {cycle_length.max}]"
        )

    # ── History ──
    h_raw = _section("history")
    history = HistoryConfig(
        rolling_window=_int(h_raw, "rolling_window", "history", 6),
        min_records_for_regularity=_int(
            h_raw, "min_records_for_regularity", "history", 3, minimum=2
        ),
    )

    # ── Confidence ──
    c_raw = _section("confidence")
    confidence = ConfidenceConfig(
        high_max_stddev=_float(c_raw, "high_max_stddev", "confidence", 2.0),
        low_min_stddev=_float(c_raw, "low_min_stddev", "confidence", 4.0),
    )
    if confidence.high_max_stddev > confidence.low_min_stddev:
        errors.append(
            "confidence.high_max_stddev must not exceed confidence.low_min_stddev"
        )

    # ── Phases ──
    p_raw = _section("phases")
    phases = PhaseConfig(
        menstrual_days=_int(p_raw, "menstrual_days", "phases", 5),
        luteal_days=_int(p_raw, "luteal_days", "phases", 14),
        ovulation_window_days=_int(p_raw, "ovulation_window_days", "phases", 3),
        late_luteal_days=_int(p_raw, "late_luteal_days", "phases", 7),
        very_late_luteal_days=_int(p_raw, "very_late_luteal_days", "phases", 3),
    )
    if phases.very_late_luteal_days > phases.late_luteal_days:
        errors.append("phases.very_late_luteal_days must not exceed phases.late_luteal_days")
    if phases.luteal_days >= cycle_length.min:
        errors.append(
            f"phases.luteal_days ({phases.luteal_days}) must be shorter than "
            f"cycle_length.min ({cycle_length.min})"
        )

    if errors:
        raise ConfigValidationError(
            f"engine_config.yaml has {len(errors)} validation error(s):\n"
            + "\n".join(f"  • {e}" for e in errors)
        )

    return EngineConfig(
        version=version,
        cycle_length=cycle_length,
        history=history,
        confidence=confidence,
        phases=phases,
    )


def load_engine_config(path: Path | None = None) -> EngineConfig:
    """Load and validate the engine config from disk.

    Args:
        path: Override path to YAML. Uses the bundled engine_config.yaml by default.

    Returns:
        Validated EngineConfig instance.
    """
    target = path or _CONFIG_PATH
    raw = _load_yaml(target)
    config = _validate_and_build(raw)
    logger.info("Loaded engine config v%s from %s", config.version, target)
    return config


# ---------------------------------------------------------------------------
# Global singleton with hot-reload support
# ---------------------------------------------------------------------------

_config: EngineConfig | None = None
_config_lock = threading.Lock()


def get_engine_config() -> EngineConfig:
    """Return the global EngineConfig singleton, loading it on first call.

    The file is taken from ``Settings.engine_config_path`` when set, else
    the bundled YAML.  Thread-safe.
    """
    global _config
    if _config is None:
        with _config_lock:
            if _config is None:  # double-checked locking
                from cyclewise.config import get_settings

                _config = load_engine_config(get_settings().engine_config_path)
    return _config


def reload_engine_config(path: Path | None = None) -> EngineConfig:
    """Reload the engine config from disk and replace the global singleton.

    If validation fails, the old config is retained and the error is re-raised.

    Raises:
        ConfigValidationError: If the new config is invalid.
        FileNotFoundError:     If the config file is missing.
    """
    global _config
    new_config = load_engine_config(path)  # validate before acquiring lock
    with _config_lock:
        old_version = _config.version if _config else "none"
        _config = new_config
    logger.info("Reloaded engine config: %s → %s", old_version, new_config.version)
    return new_config


def resolve_config(config: EngineConfig | None) -> EngineConfig:
    """Return ``config`` or, when omitted, the global singleton."""
    return config if config is not None else get_engine_config()
