"""Shared fixtures for the cyclewise test suite."""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path
from typing import Any

import pytest

from cyclewise import config_loader
from cyclewise.config_loader import EngineConfig, load_engine_config
from cyclewise.engine import CycleEngine
from cyclewise.models import CycleHistoryRecord

# Fixtures directory
FIXTURES_DIR = Path(__file__).parent / "fixtures"

# Query date used with the fixture history: day 14 of the cycle that
# started on 2026-02-24
TEST_DATE = date(2026, 3, 9)

ALL_CYCLE_LENGTHS = range(21, 36)


def load_fixture(name: str) -> dict[str, Any]:
    """Load a JSON fixture file relative to the fixtures directory."""
    return json.loads((FIXTURES_DIR / name).read_text())


def make_history(*lengths: int, start: date = date(2025, 1, 1)) -> list[CycleHistoryRecord]:
    """Build consecutive, dated records with the given lengths (oldest first)."""
    records = []
    current = start
    for length in lengths:
        records.append(CycleHistoryRecord(start_date=current, cycle_length=length))
        current = date.fromordinal(current.toordinal() + length)
    return records


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def engine_config() -> EngineConfig:
    """Load the bundled engine config."""
    return load_engine_config()


@pytest.fixture(autouse=True)
def _isolated_config_singleton(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep hot-reload tests from leaking a replaced singleton into others."""
    monkeypatch.setattr(config_loader, "_config", None)


@pytest.fixture
def engine(engine_config: EngineConfig) -> CycleEngine:
    return CycleEngine(engine_config)


# ---------------------------------------------------------------------------
# JSON fixture loaders
# ---------------------------------------------------------------------------


@pytest.fixture
def cycle_data() -> dict:
    return load_fixture("cycle_history.json")


@pytest.fixture
def stored_history(cycle_data: dict) -> list[dict]:
    """History as the desktop store persists it: newest first, with extras."""
    return cycle_data["history"]
