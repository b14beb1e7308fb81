"""Date normalization helpers.

The persistence layer hands the engine either native ``date`` / ``datetime``
objects or ISO-8601 strings (``"2025-07-01"`` or the full
``"2025-07-01T00:00:00.000Z"`` form written by JavaScript's
``toISOString()``).  Everything is reduced to a plain ``date`` before any
arithmetic; the engine works at day granularity only.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Union

from cyclewise.errors import InvalidArgumentError

DateLike = Union[date, datetime, str]


def to_date(value: DateLike | None, *, field_name: str = "date") -> date:
    """Normalize a date-like value to a ``date``.

    Args:
        value:      A ``date``, ``datetime`` or ISO-8601 string.
        field_name: Name used in the error message.

    Returns:
        The calendar date (time-of-day and timezone are dropped).

    Raises:
        InvalidArgumentError: If the value is missing or unparseable.
    """
    if value is None:
        raise InvalidArgumentError(f"{field_name} is required")

    # datetime is a subclass of date, check it first
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise InvalidArgumentError(f"{field_name} is empty")
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            if len(text) == 10:
                return date.fromisoformat(text)
            return datetime.fromisoformat(text).date()
        except ValueError as exc:
            raise InvalidArgumentError(
                f"{field_name} is not an ISO-8601 date: {value!r}"
            ) from exc

    raise InvalidArgumentError(
        f"{field_name} must be a date, datetime or ISO-8601 string, got {type(value).__name__}"
    )


def days_between(later: DateLike, earlier: DateLike) -> int:
    """Whole-day difference ``later - earlier`` (negative if ``later`` is earlier)."""
    return (to_date(later) - to_date(earlier)).days


def add_days(start: DateLike, days: int) -> date:
    return to_date(start) + timedelta(days=days)
