"""Domain events and the in-process bus that delivers them.

Managers publish an event only after the mutation it describes has been
applied to in-memory state. Handlers run synchronously in subscription
order; a handler that raises is logged and skipped so a failing dependent
(for example a goal-progress recompute) can only go stale, never corrupt or
roll back habit data.

Event Flow:
    LedgerManager.toggle() -> emit(CompletionToggled)
                                      |
        GoalProgressSubscriber <------+
"""

from __future__ import annotations

from collections.abc import Callable
import contextlib
from dataclasses import asdict, dataclass, field
from typing import Any, ClassVar

from . import const
from .utils.dt_utils import dt_now_iso


@dataclass(frozen=True)
class HabitEvent:
    """Base class for events about a single habit."""

    signal: ClassVar[str] = ""

    habit_id: str
    goal_id: str | None = None
    occurred_at: str = field(default_factory=dt_now_iso)

    def as_payload(self) -> dict[str, Any]:
        """Return the event as a JSON-serializable dict including its signal."""
        payload = asdict(self)
        payload["signal"] = self.signal
        return payload


@dataclass(frozen=True)
class CompletionToggled(HabitEvent):
    """A ledger record was created or changed."""

    signal: ClassVar[str] = const.SIGNAL_COMPLETION_TOGGLED

    date: str = ""
    completed: bool = False


@dataclass(frozen=True)
class FrequencyChanged(HabitEvent):
    """A habit's recurrence rule was replaced."""

    signal: ClassVar[str] = const.SIGNAL_FREQUENCY_CHANGED

    change_id: str = ""
    previous_frequency: dict[str, Any] = field(default_factory=dict)
    new_frequency: dict[str, Any] = field(default_factory=dict)
    streak_at_change: int = 0


@dataclass(frozen=True)
class HabitAdded(HabitEvent):
    """A habit was created."""

    signal: ClassVar[str] = const.SIGNAL_HABIT_ADDED


@dataclass(frozen=True)
class HabitUpdated(HabitEvent):
    """Non-frequency habit fields changed (including goal links)."""

    signal: ClassVar[str] = const.SIGNAL_HABIT_UPDATED

    previous_goal_id: str | None = None
    changed_fields: tuple[str, ...] = ()


@dataclass(frozen=True)
class HabitDeleted(HabitEvent):
    """A habit and its ledger were removed."""

    signal: ClassVar[str] = const.SIGNAL_HABIT_DELETED


EventHandler = Callable[[HabitEvent], Any]

_ALL_SIGNALS = "*"


class EventBus:
    """Synchronous pub/sub bus keyed by event signal."""

    def __init__(self) -> None:
        self._handlers: dict[str, list[EventHandler]] = {}
        self.events_published = 0

    def subscribe(self, signal: str, handler: EventHandler) -> Callable[[], None]:
        """Register ``handler`` for one signal.

        Returns:
            Callable that removes the subscription.
        """
        handlers = self._handlers.setdefault(signal, [])
        handlers.append(handler)
        const.LOGGER.debug(
            "DEBUG: Handler %s subscribed to '%s'",
            getattr(handler, "__qualname__", repr(handler)),
            signal,
        )

        def _unsubscribe() -> None:
            with contextlib.suppress(ValueError):
                handlers.remove(handler)

        return _unsubscribe

    def subscribe_all(self, handler: EventHandler) -> Callable[[], None]:
        """Register ``handler`` for every signal."""
        return self.subscribe(_ALL_SIGNALS, handler)

    def publish(self, event: HabitEvent) -> None:
        """Deliver ``event`` to its signal's handlers, then to catch-all handlers."""
        self.events_published += 1
        const.LOGGER.debug(
            "DEBUG: Publishing '%s' for habit %s", event.signal, event.habit_id
        )
        handlers = [
            *self._handlers.get(event.signal, []),
            *self._handlers.get(_ALL_SIGNALS, []),
        ]
        for handler in handlers:
            try:
                handler(event)
            except Exception:  # noqa: BLE001
                const.LOGGER.exception(
                    "ERROR: Event handler %s failed for '%s' (habit %s)",
                    getattr(handler, "__qualname__", repr(handler)),
                    event.signal,
                    event.habit_id,
                )
