import logging
from typing import Any, Callable, Dict, List, Mapping, Optional

from .events import EventDispatcher, FeederEvent, Listener
from .models import FeederSnapshot, QueueItem

logger = logging.getLogger(__name__)

PREPEND = "prepend"
APPEND = "append"

DataFilter = Callable[[Any, Dict[str, Any]], Any]


def ensure_list(value: Any) -> List[Any]:
    """
    Coerce a feed input to a list.

    None becomes an empty list, lists and tuples are copied, and anything
    else (strings and mappings included) is wrapped as a single element.
    """
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


class Feeder:
    def __init__(
        self,
        data_filter: Optional[DataFilter] = None,
        listeners: Optional[Mapping[Any, Any]] = None,
    ):
        """
        Initialize the feeder.

        Args:
            data_filter: Optional callable applied to each command as it is
                released. Receives (command, context) and returns the command
                to announce; a falsy return skips the command.
            listeners: Optional mapping of FeederEvent (or its value) to a
                callback or list of callbacks
        """
        if data_filter is not None and not callable(data_filter):
            raise ValueError("data_filter must be callable")

        self._data_filter = data_filter
        self._events = EventDispatcher(listeners)

        self._hold = False
        self._hold_reason: Any = None
        self._queue: List[QueueItem] = []
        self._pending = False
        self._changed = False

    @property
    def data_filter(self) -> Optional[DataFilter]:
        return self._data_filter

    @property
    def hold_reason(self) -> Any:
        return self._hold_reason

    @property
    def is_held(self) -> bool:
        return self._hold

    def subscribe(self, event, callback: Listener) -> Callable[[], None]:
        """Subscribe to a notification. Returns an unsubscribe function."""
        return self._events.subscribe(event, callback)

    def unsubscribe(self, event, callback: Listener) -> None:
        self._events.unsubscribe(event, callback)

    def _emit_change(self) -> None:
        self._changed = True
        self._events.emit(FeederEvent.CHANGE)

    def feed(
        self,
        data: Any,
        context: Optional[Mapping[str, Any]] = None,
        options: Optional[Mapping[str, Any]] = None,
    ) -> None:
        """
        Add commands to the queue.

        Args:
            data: A command or a list of commands
            context: Metadata stored (as a shallow copy) with every command
            options: {"direction": "prepend" | "append"}, append by default
        """
        commands = ensure_list(data)
        if not commands:
            return

        if not self._queue:
            self._pending = False

        items = [QueueItem(command=command, context=dict(context or {})) for command in commands]

        direction = (options or {}).get("direction", APPEND)
        if direction == PREPEND:
            self._queue = items + self._queue
        else:
            self._queue = self._queue + items

        self._emit_change()

    def prepend(
        self,
        data: Any,
        context: Optional[Mapping[str, Any]] = None,
        options: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.feed(data, context, {**(options or {}), "direction": PREPEND})

    def append(
        self,
        data: Any,
        context: Optional[Mapping[str, Any]] = None,
        options: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.feed(data, context, {**(options or {}), "direction": APPEND})

    def hold(self, reason: Any = None) -> None:
        """Pause delivery. Ignored if already held."""
        if self._hold:
            return

        self._hold = True
        self._hold_reason = reason
        logger.debug(f"Feeder on hold: {reason!r}")

        self._events.emit(FeederEvent.HOLD)
        self._emit_change()

    def unhold(self) -> None:
        """Resume delivery. Ignored if not held."""
        if not self._hold:
            return

        self._hold = False
        self._hold_reason = None
        logger.debug("Feeder released from hold")

        self._events.emit(FeederEvent.UNHOLD)
        self._emit_change()

    def clear(self) -> None:
        """Drop all buffered commands."""
        self._queue = []
        self._pending = False
        logger.debug("Feeder queue cleared")
        self._emit_change()

    def reset(self) -> None:
        """Drop all buffered commands and release any hold."""
        self._hold = False
        self._hold_reason = None
        self._queue = []
        self._pending = False
        logger.debug("Feeder reset")
        self._emit_change()

    def size(self) -> int:
        return len(self._queue)

    def __len__(self) -> int:
        return len(self._queue)

    def next(self) -> bool:
        """
        Release at most one command.

        Blank commands (a falsy filter result) are consumed silently and the
        next item is tried within the same call. An exception raised by the
        data filter propagates; the item being filtered is not requeued.

        Returns:
            The pending flag after the drain step
        """
        while not self._hold and self._queue:
            item = self._queue.pop(0)
            command = item.command

            if self._data_filter is not None:
                command = self._data_filter(command, item.context)
                if not command:
                    continue

            self._pending = True
            logger.debug(f"Releasing command: {command!r}")
            self._events.emit(FeederEvent.DATA, command, item.context)
            self._emit_change()
            break

        if not self._queue:
            self._pending = False

        return self._pending

    def is_pending(self) -> bool:
        return self._pending

    def peek(self) -> bool:
        """Return whether anything changed since the last call, and reset the flag."""
        changed = self._changed
        self._changed = False
        return changed

    take_changed = peek

    def items(self) -> List[QueueItem]:
        """Shallow copy of the buffered items, front first."""
        return list(self._queue)

    def snapshot(self) -> FeederSnapshot:
        """Status projection. Does not consume the changed flag."""
        return FeederSnapshot(
            hold=self._hold,
            hold_reason=self._hold_reason,
            queue=len(self._queue),
            pending=self._pending,
            changed=self._changed,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hold": self._hold,
            "holdReason": self._hold_reason,
            "queue": len(self._queue),
            "pending": self._pending,
            "changed": self._changed,
        }
