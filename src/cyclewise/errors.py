"""Exception hierarchy for the cyclewise engine."""

from __future__ import annotations


class CycleEngineError(Exception):
    """Base class for every error raised by cyclewise."""


class InvalidArgumentError(CycleEngineError, ValueError):
    """Raised when an input cannot be interpreted at all.

    Out-of-range cycle lengths are clamped rather than rejected; this is
    reserved for values with no sensible reading (a missing start date, an
    unparseable date string, a day index outside its cycle).
    """


class ConfigValidationError(CycleEngineError, ValueError):
    """Raised when engine_config.yaml fails validation."""
