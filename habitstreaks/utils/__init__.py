# File: utils/__init__.py
"""Pure Python utilities for HabitStreaks.

Submodules:
    - dt_utils: Date parsing, week/month boundaries, timezone-aware "today"
    - math_utils: Percentage and rounding helpers

Usage:
    from . import dt_utils
    from .math_utils import calculate_percentage
"""

from . import dt_utils, math_utils

__all__ = ["dt_utils", "math_utils"]
