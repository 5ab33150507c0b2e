"""Engine modules for HabitStreaks.

Contains pure computation engines:
- ledger_engine: Completion record creation, toggling and indexing
- streak_engine: Current and best streaks per frequency model
- statistics_engine: Completion rates and progress views
"""

from .ledger_engine import LedgerEngine, LedgerView
from .statistics_engine import StatisticsEngine
from .streak_engine import StreakEngine

__all__ = [
    "LedgerEngine",
    "LedgerView",
    "StatisticsEngine",
    "StreakEngine",
]
