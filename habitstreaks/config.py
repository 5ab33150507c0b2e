"""Configuration for HabitStreaks.

Settings live in an optional TOML file:

    [engine]
    timezone = "Europe/Berlin"
    max_lookback_days = 3660
    completion_rate_window = 30
    progress_window_days = 14

    [storage]
    path = "~/.local/share/habitstreaks/habitstreaks.json"

Bad values fall back to their defaults; ``load_config`` reports what it
ignored through a warning string instead of raising.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
import tomllib
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from . import const


def _as_int(value: Any, *, default: int, minimum: int = 1) -> tuple[int, bool]:
    if isinstance(value, bool):
        return default, False
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return default, False
    if parsed < minimum:
        return default, False
    return parsed, True


def _as_timezone(value: Any, *, default: str) -> tuple[str, bool]:
    if not isinstance(value, str) or not value.strip():
        return default, False
    try:
        ZoneInfo(value.strip())
    except (ZoneInfoNotFoundError, ValueError):
        return default, False
    return value.strip(), True


@dataclass(frozen=True)
class EngineConfig:
    timezone: str = const.DEFAULT_TIMEZONE
    max_lookback_days: int = const.DEFAULT_MAX_LOOKBACK_DAYS
    completion_rate_window: int = const.DEFAULT_COMPLETION_RATE_WINDOW
    progress_window_days: int = const.DEFAULT_PROGRESS_WINDOW_DAYS

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)


@dataclass(frozen=True)
class StorageConfig:
    path: Path = field(default_factory=lambda: Path(const.DEFAULT_STORAGE_FILENAME))


@dataclass(frozen=True)
class HabitStreaksConfig:
    engine: EngineConfig = field(default_factory=EngineConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)


def parse_config(data: dict[str, Any]) -> tuple[HabitStreaksConfig, list[str]]:
    """Build a config from already-parsed TOML data.

    Returns (config, problems) where problems lists every ignored value.
    """
    problems: list[str] = []
    engine_raw = data.get("engine") or {}
    storage_raw = data.get("storage") or {}
    if not isinstance(engine_raw, dict):
        problems.append("[engine] must be a table")
        engine_raw = {}
    if not isinstance(storage_raw, dict):
        problems.append("[storage] must be a table")
        storage_raw = {}

    defaults = EngineConfig()
    values: dict[str, Any] = {}

    if "timezone" in engine_raw:
        tz, ok = _as_timezone(engine_raw["timezone"], default=defaults.timezone)
        if not ok:
            problems.append(f"engine.timezone: unknown timezone {engine_raw['timezone']!r}")
        values["timezone"] = tz

    for key in ("max_lookback_days", "completion_rate_window", "progress_window_days"):
        if key not in engine_raw:
            continue
        parsed, ok = _as_int(engine_raw[key], default=getattr(defaults, key))
        if not ok:
            problems.append(f"engine.{key}: expected a positive integer")
        values[key] = parsed

    storage = StorageConfig()
    raw_path = storage_raw.get("path")
    if raw_path is not None:
        if isinstance(raw_path, str) and raw_path.strip():
            storage = StorageConfig(path=Path(raw_path.strip()).expanduser())
        else:
            problems.append("storage.path: expected a non-empty string")

    return HabitStreaksConfig(engine=EngineConfig(**values), storage=storage), problems


def load_config(path: Path) -> tuple[HabitStreaksConfig, str]:
    """Load config from a TOML file.

    Returns (config, warning). Warning is empty on success; a missing file is
    not an error and yields the defaults.
    """
    if not path.exists():
        return HabitStreaksConfig(), ""

    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as exc:
        return HabitStreaksConfig(), f"config parse failed: {exc}"

    config, problems = parse_config(data)
    if problems:
        warning = "config values ignored: " + "; ".join(problems)
        const.LOGGER.warning("WARNING: %s (%s)", warning, path)
        return config, warning
    return config, ""
