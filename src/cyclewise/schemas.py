"""Pydantic schemas for data arriving from the persistence layer.

The store writes camelCase JSON (``startDate``, ``cycleLength``) alongside
descriptive fields the engine does not read (``id``, ``notes``,
``symptoms``...).  These schemas accept either key style, parse ISO-8601
strings or native dates, drop the extras, and hand back the engine's own
frozen dataclasses.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from cyclewise.dates import to_date
from cyclewise.errors import InvalidArgumentError
from cyclewise.models import CycleHistoryRecord

logger = logging.getLogger("cyclewise.schemas")


class CycleBase(BaseModel):
    """Base model with shared config for all cyclewise boundary schemas."""

    model_config = ConfigDict(
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
        frozen=True,
    )


def _coerce_date(value: Any) -> date | None:
    if value is None:
        return None
    try:
        return to_date(value)
    except InvalidArgumentError as exc:
        raise ValueError(str(exc)) from exc


def _reject_bool(value: Any) -> Any:
    # pydantic coerces True/False to 1/0 for int fields
    if isinstance(value, bool):
        raise ValueError("cycleLength must be an integer, not a boolean")
    return value


class CycleRecordSchema(CycleBase):
    """One persisted history record.  Only the start date and length matter."""

    start_date: date | None = Field(default=None, alias="startDate")
    cycle_length: int = Field(alias="cycleLength", gt=0)

    @field_validator("start_date", mode="before")
    @classmethod
    def _parse_start_date(cls, value: Any) -> Any:
        return _coerce_date(value)

    @field_validator("cycle_length", mode="before")
    @classmethod
    def _reject_bool_length(cls, value: Any) -> Any:
        return _reject_bool(value)

    def to_record(self) -> CycleHistoryRecord:
        return CycleHistoryRecord(start_date=self.start_date, cycle_length=self.cycle_length)


class ActiveCycleSchema(CycleBase):
    """The in-progress cycle: its start date and configured length."""

    start_date: date = Field(alias="startDate")
    cycle_length: int = Field(default=28, alias="cycleLength")

    @field_validator("start_date", mode="before")
    @classmethod
    def _parse_start_date(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("startDate is required")
        return _coerce_date(value)

    @field_validator("cycle_length", mode="before")
    @classmethod
    def _reject_bool_length(cls, value: Any) -> Any:
        return _reject_bool(value)


def parse_active_cycle(payload: dict | ActiveCycleSchema) -> ActiveCycleSchema:
    """Validate the active-cycle payload.

    Raises:
        InvalidArgumentError: If the start date is missing or unparseable.
    """
    if isinstance(payload, ActiveCycleSchema):
        return payload
    try:
        return ActiveCycleSchema.model_validate(payload)
    except ValidationError as exc:
        raise InvalidArgumentError(f"Invalid active cycle: {exc}") from exc


def normalize_history(items: Iterable[Any] | None) -> list[CycleHistoryRecord]:
    """Convert persisted history into engine records, dropping malformed ones.

    Accepts any mix of dicts, ``CycleRecordSchema`` and ``CycleHistoryRecord``
    instances.  A record that fails validation is logged and skipped; it
    never aborts the rest of the history.  Input order is preserved.

    Args:
        items: The history collection (treated as a read-only snapshot).

    Returns:
        Usable records in their original order.
    """
    if not items:
        return []

    records: list[CycleHistoryRecord] = []
    for index, item in enumerate(items):
        if isinstance(item, CycleHistoryRecord):
            if (
                isinstance(item.cycle_length, int)
                and not isinstance(item.cycle_length, bool)
                and item.cycle_length > 0
            ):
                records.append(item)
            else:
                logger.warning(
                    "Skipping history record %d: invalid cycle length %r",
                    index,
                    item.cycle_length,
                )
            continue
        if isinstance(item, CycleRecordSchema):
            records.append(item.to_record())
            continue
        try:
            records.append(CycleRecordSchema.model_validate(item).to_record())
        except ValidationError as exc:
            logger.warning(
                "Skipping malformed history record %d: %s",
                index,
                "; ".join(
                    f"{'.'.join(str(p) for p in err['loc']) or 'record'}: {err['msg']}"
                    for err in exc.errors()
                ),
            )
    return records
