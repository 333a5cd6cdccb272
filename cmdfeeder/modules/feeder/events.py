"""Notification contract raised by the feeder."""

from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

Listener = Callable[..., Any]


class FeederEvent(str, Enum):
    """Notifications a host can subscribe to."""

    DATA = "data"  # (command, context)
    CHANGE = "change"
    HOLD = "hold"
    UNHOLD = "unhold"


class EventDispatcher:
    """
    Synchronous subscriber registry.

    Callbacks run in-line with the call that raised the event, in the order
    they were subscribed. Exceptions raised by a callback propagate to the
    caller of emit().
    """

    def __init__(self, listeners: Optional[Mapping[Any, Union[Listener, List[Listener]]]] = None):
        self._listeners: Dict[FeederEvent, List[Listener]] = {event: [] for event in FeederEvent}

        for event, callbacks in (listeners or {}).items():
            if callable(callbacks):
                callbacks = [callbacks]
            for callback in callbacks:
                self.subscribe(event, callback)

    def subscribe(self, event, callback: Listener) -> Callable[[], None]:
        """
        Register a callback for an event.

        Args:
            event: FeederEvent member or its string value
            callback: Callable invoked when the event is raised

        Returns:
            A function that removes the subscription when called

        Raises:
            ValueError: If event is not a known notification
        """
        event = FeederEvent(event)
        if not callable(callback):
            raise ValueError(f"Listener for '{event.value}' must be callable")

        self._listeners[event].append(callback)

        def unsubscribe() -> None:
            self.unsubscribe(event, callback)

        return unsubscribe

    def unsubscribe(self, event, callback: Listener) -> None:
        """Remove a callback. Unknown callbacks are ignored."""
        callbacks = self._listeners[FeederEvent(event)]
        if callback in callbacks:
            callbacks.remove(callback)

    def emit(self, event: FeederEvent, *args: Any) -> None:
        # Copy so a callback may unsubscribe itself while being dispatched
        for callback in list(self._listeners[event]):
            callback(*args)
