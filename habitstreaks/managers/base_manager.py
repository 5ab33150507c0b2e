"""Base manager class for HabitStreaks managers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .. import const

if TYPE_CHECKING:
    from collections.abc import Callable

    from ..coordinator import HabitTrackerCoordinator
    from ..event_bus import EventHandler, HabitEvent


class BaseManager:
    """Base class for all HabitStreaks managers with event support.

    Provides:
    - Event emitting on the coordinator's bus (emit)
    - Event listening with cleanup on shutdown (listen)

    Data Persistence:
    - Mutate coordinator data inside ``with self.coordinator.lock:``
    - Call coordinator.persist() after the block, then emit()
    """

    def __init__(self, coordinator: HabitTrackerCoordinator) -> None:
        """Initialize manager.

        Args:
            coordinator: Parent coordinator owning data, store and bus
        """
        self.coordinator = coordinator
        self._unsubscribers: list[Callable[[], None]] = []

    def emit(self, event: HabitEvent) -> None:
        """Publish an event after the mutation it describes has committed.

        Example:
            self.emit(CompletionToggled(habit_id=habit_id, date="2026-01-19",
                                        completed=True))
        """
        const.LOGGER.debug(
            "Emitting event '%s' from %s", event.signal, self.__class__.__name__
        )
        self.coordinator.bus.publish(event)

    def listen(self, signal: str, callback: EventHandler) -> None:
        """Subscribe to a signal; the subscription ends on shutdown()."""
        self._unsubscribers.append(self.coordinator.bus.subscribe(signal, callback))
        const.LOGGER.debug(
            "Manager %s listening to event '%s'", self.__class__.__name__, signal
        )

    def setup(self) -> None:
        """Set up the manager (subscribe to events, initialize state).

        Called once during coordinator initialization.
        """

    def shutdown(self) -> None:
        """Drop every subscription made through listen()."""
        while self._unsubscribers:
            self._unsubscribers.pop()()
