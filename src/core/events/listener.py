"""Abstract contract for event listeners."""

from abc import ABC, abstractmethod

from core.events.event_manager import EventManager


class Listener(ABC):
    """Something that attaches its handlers to an event manager."""

    @abstractmethod
    def attach(self, manager: EventManager) -> None:
        """Attach the listener's handlers to the manager's topics."""
