"""Manager modules for HabitStreaks.

Managers orchestrate workflows and coordinate between engines.
They are stateful, event-aware, and mutate coordinator data under its lock.
"""

from .base_manager import BaseManager
from .habit_manager import HabitManager
from .ledger_manager import LedgerManager
from .statistics_manager import StatisticsManager

__all__ = [
    "BaseManager",
    "HabitManager",
    "LedgerManager",
    "StatisticsManager",
]
