"""Exceptions raised by the HabitStreaks engine.

Every error carries a ``translation_key`` plus ``translation_placeholders`` so
a UI layer can render a localized message without parsing the text.
"""

from __future__ import annotations

from typing import Any

from . import const


class HabitStreaksError(Exception):
    """Base error for all HabitStreaks failures."""

    def __init__(
        self,
        message: str,
        *,
        translation_key: str | None = None,
        translation_placeholders: dict[str, str] | None = None,
    ) -> None:
        """Initialize the error.

        Args:
            message: Human-readable description.
            translation_key: Key identifying the message template.
            translation_placeholders: Values substituted into the template.
        """
        super().__init__(message)
        self.translation_key = translation_key
        self.translation_placeholders = translation_placeholders or {}


class HabitNotFoundError(HabitStreaksError):
    """Raised when an operation targets a habit id that does not exist."""

    def __init__(self, habit_id: str) -> None:
        self.habit_id = habit_id
        super().__init__(
            f"{const.LABEL_HABIT} '{habit_id}' not found",
            translation_key=const.TRANS_KEY_ERROR_NOT_FOUND,
            translation_placeholders={
                "entity_type": const.LABEL_HABIT,
                "name": habit_id,
            },
        )


class InvalidFrequencyError(HabitStreaksError):
    """Raised when a frequency configuration cannot be represented."""

    def __init__(
        self,
        message: str,
        translation_key: str = const.TRANS_KEY_ERROR_INVALID_FREQUENCY,
        **placeholders: Any,
    ) -> None:
        super().__init__(
            message,
            translation_key=translation_key,
            translation_placeholders={k: str(v) for k, v in placeholders.items()},
        )


class InvalidDateError(HabitStreaksError):
    """Raised when a date argument is not a strict ISO calendar date."""

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(
            f"Invalid calendar date: {value!r} (expected YYYY-MM-DD)",
            translation_key=const.TRANS_KEY_ERROR_INVALID_DATE,
            translation_placeholders={"value": str(value)},
        )


class InvalidHabitUpdateError(HabitStreaksError):
    """Raised when update_habit() receives fields it may not change."""

    def __init__(self, fields: list[str]) -> None:
        self.fields = fields
        super().__init__(
            f"Fields cannot be changed with update_habit(): {', '.join(fields)}",
            translation_key=const.TRANS_KEY_ERROR_INVALID_HABIT_UPDATE,
            translation_placeholders={"fields": ", ".join(fields)},
        )
