# File: store.py
"""Handles persistent data storage for HabitStreaks.

Habits, completion records and frequency-change history are written to a
single JSON file as plain records; no derived value (streaks, rates) is ever
stored. Loading normalizes older or hand-edited files so every optional
collection is present and empty rather than missing or null.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
import tempfile
from typing import Any

from . import const
from .exceptions import InvalidFrequencyError
from .frequency import DailyFrequency, apply_frequency, frequency_from_habit
from .utils.dt_utils import dt_now_iso, dt_parse_date


class HabitStreaksStore:
    """Handles persistent storage operations for HabitStreaks data.

    Thin JSON-file store with an in-memory cache. Habits are keyed by
    internal_id; the ledger is keyed by habit id, then ISO date.
    """

    def __init__(self, path: Path | str) -> None:
        """Initialize the store.

        Args:
            path: Location of the JSON file. Parent directories are created
                  on first save.
        """
        self._path = Path(path)
        self._data: dict[str, Any] = {}  # In-memory data cache for quick access.

    @staticmethod
    def get_default_structure() -> dict[str, Any]:
        """Return canonical empty data structure for fresh installations."""
        return {
            const.DATA_META: {
                const.DATA_META_SCHEMA_VERSION: const.SCHEMA_VERSION,
                const.DATA_META_LAST_SAVED: None,
            },
            const.DATA_HABITS: {},
            const.DATA_COMPLETIONS: {},
        }

    @staticmethod
    def normalize(raw: dict[str, Any] | None) -> dict[str, Any]:
        """Fill in missing buckets and per-habit collections.

        Missing or null collections become empty ones so every computation
        downstream stays total. Ledger buckets are rebuilt so each record's
        key matches its own date and habit id. Records whose date is not an
        ISO calendar date are dropped, and a habit whose stored frequency no
        longer validates falls back to daily, so every query stays answerable.
        """
        data = HabitStreaksStore.get_default_structure()
        if not raw:
            return data

        meta = raw.get(const.DATA_META) or {}
        data[const.DATA_META].update(meta)

        for habit_id, habit in (raw.get(const.DATA_HABITS) or {}).items():
            if not isinstance(habit, dict):
                const.LOGGER.warning(
                    "WARNING: Skipping malformed habit entry '%s' in storage", habit_id
                )
                continue
            habit.setdefault(const.DATA_HABIT_ID, habit_id)
            if habit.get(const.DATA_HABIT_FREQUENCY_HISTORY) is None:
                habit[const.DATA_HABIT_FREQUENCY_HISTORY] = []
            habit.setdefault(const.DATA_HABIT_FREQUENCY, const.FREQUENCY_DAILY)
            try:
                frequency_from_habit(habit)
            except InvalidFrequencyError as err:
                const.LOGGER.warning(
                    "WARNING: Habit '%s' has an invalid frequency in storage (%s). "
                    "Falling back to daily",
                    habit_id,
                    err,
                )
                apply_frequency(habit, DailyFrequency())
            data[const.DATA_HABITS][habit_id] = habit

        for habit_id, bucket in (raw.get(const.DATA_COMPLETIONS) or {}).items():
            ledger: dict[str, Any] = {}
            records = bucket.values() if isinstance(bucket, dict) else (bucket or [])
            for record in records:
                if not isinstance(record, dict):
                    continue
                parsed = dt_parse_date(record.get(const.DATA_COMPLETION_DATE))
                if parsed is None:
                    const.LOGGER.warning(
                        "WARNING: Skipping completion record with invalid date %r "
                        "for habit '%s'",
                        record.get(const.DATA_COMPLETION_DATE),
                        habit_id,
                    )
                    continue
                iso_day = parsed.isoformat()
                record[const.DATA_COMPLETION_DATE] = iso_day
                record[const.DATA_COMPLETION_HABIT_ID] = habit_id
                record[const.DATA_COMPLETION_COMPLETED] = bool(
                    record.get(const.DATA_COMPLETION_COMPLETED, False)
                )
                ledger[iso_day] = record
            data[const.DATA_COMPLETIONS][habit_id] = ledger

        for habit_id in data[const.DATA_HABITS]:
            data[const.DATA_COMPLETIONS].setdefault(habit_id, {})

        return data

    def load(self) -> dict[str, Any]:
        """Load data from disk, initializing an empty structure if absent."""
        const.LOGGER.debug("DEBUG: HabitStreaksStore: Loading data from %s", self._path)
        if not self._path.exists():
            const.LOGGER.info("INFO: No existing storage found. Initializing new data")
            self._data = self.get_default_structure()
            return self._data

        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as err:
            const.LOGGER.error(
                "ERROR: Failed to read storage file %s: %s. Starting with empty data",
                self._path,
                err,
            )
            self._data = self.get_default_structure()
            return self._data

        self._data = self.normalize(raw)
        const.LOGGER.debug(
            "DEBUG: Loaded existing data from storage: %s",
            {
                "habits": len(self._data[const.DATA_HABITS]),
                "ledgers": len(self._data[const.DATA_COMPLETIONS]),
            },
        )
        return self._data

    @property
    def data(self) -> dict[str, Any]:
        """Retrieve the in-memory data cache."""
        return self._data

    @property
    def path(self) -> Path:
        """Location of the storage file."""
        return self._path

    def set_data(self, new_data: dict[str, Any]) -> None:
        """Replace the entire in-memory data structure."""
        self._data = new_data

    def save(self) -> bool:
        """Write the current data structure to disk atomically.

        Errors are logged and reported through the return value; they are
        never raised, so a failed save cannot undo an in-memory mutation.

        Returns:
            True when the file was written.
        """
        self._data.setdefault(const.DATA_META, {})[const.DATA_META_LAST_SAVED] = (
            dt_now_iso()
        )
        tmp_name: str | None = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            payload = json.dumps(self._data, indent=2, sort_keys=True, ensure_ascii=False)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
                handle.write("\n")
            os.replace(tmp_name, self._path)
            tmp_name = None
        except OSError as err:
            const.LOGGER.error(
                "ERROR: Failed to save storage due to file system error: %s. "
                "Check disk space and file permissions for %s",
                err,
                self._path,
            )
            return False
        except TypeError as err:
            const.LOGGER.error(
                "ERROR: Failed to save storage due to non-serializable data: %s",
                err,
            )
            return False
        except ValueError as err:
            const.LOGGER.error(
                "ERROR: Failed to save storage due to invalid data format: %s",
                err,
            )
            return False
        finally:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
        const.LOGGER.debug("DEBUG: Data saved successfully to %s", self._path)
        return True

    def clear_data(self) -> None:
        """Clear all stored data and reset to default structure."""
        const.LOGGER.warning("WARNING: Clearing all HabitStreaks data and resetting storage")
        self._data = self.get_default_structure()
        self.save()

    def delete_storage(self) -> None:
        """Clear in-memory data and remove the storage file from disk."""
        self._data = self.get_default_structure()
        try:
            self._path.unlink(missing_ok=True)
            const.LOGGER.info("INFO: Storage file removed successfully: %s", self._path)
        except OSError as err:
            const.LOGGER.error(
                "ERROR: Failed to remove storage file %s: %s. Check file permissions",
                self._path,
                err,
            )
