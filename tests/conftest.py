"""Shared fixtures for HabitStreaks tests.

Dates are fixed so week boundaries are deterministic. January 2026:

    Sun Mon Tue Wed Thu Fri Sat
                      1   2   3
      4   5   6   7   8   9  10
     11  12  13  14  15  16  17
     18  19  20  21  22  23  24
     25  26  27  28  29  30  31

TODAY is Wednesday 2026-01-21.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import date
from pathlib import Path
from typing import Any

import pytest

from habitstreaks import const
from habitstreaks.config import EngineConfig, HabitStreaksConfig, StorageConfig
from habitstreaks.coordinator import HabitTrackerCoordinator
from habitstreaks.event_bus import HabitEvent
from habitstreaks.store import HabitStreaksStore

LedgerFactory = Callable[..., dict[str, dict[str, Any]]]


@pytest.fixture
def make_ledger() -> LedgerFactory:
    """Return a factory building a ledger from completed and missed dates."""

    def _make(
        completed: Iterable[date] = (),
        missed: Iterable[date] = (),
        habit_id: str = "habit-1",
    ) -> dict[str, dict[str, Any]]:
        ledger: dict[str, dict[str, Any]] = {}
        for state, days in ((True, completed), (False, missed)):
            for day in days:
                ledger[day.isoformat()] = {
                    const.DATA_COMPLETION_ID: f"rec-{day.isoformat()}",
                    const.DATA_COMPLETION_HABIT_ID: habit_id,
                    const.DATA_COMPLETION_DATE: day.isoformat(),
                    const.DATA_COMPLETION_COMPLETED: state,
                    const.DATA_COMPLETION_COMPLETED_AT: None,
                }
        return ledger

    return _make


@pytest.fixture
def storage_path(tmp_path: Path) -> Path:
    """Return a storage file location inside the test's temp dir."""
    return tmp_path / "data" / const.DEFAULT_STORAGE_FILENAME


@pytest.fixture
def store(storage_path: Path) -> HabitStreaksStore:
    """Return a store pointing at a fresh temp file."""
    return HabitStreaksStore(storage_path)


@pytest.fixture
def coordinator(store: HabitStreaksStore, storage_path: Path) -> HabitTrackerCoordinator:
    """Return a coordinator over an empty store."""
    config = HabitStreaksConfig(
        engine=EngineConfig(timezone="UTC"),
        storage=StorageConfig(path=storage_path),
    )
    return HabitTrackerCoordinator(store=store, config=config)


@pytest.fixture
def events(coordinator: HabitTrackerCoordinator) -> list[HabitEvent]:
    """Collect every event published on the coordinator's bus."""
    received: list[HabitEvent] = []
    coordinator.bus.subscribe_all(received.append)
    return received
