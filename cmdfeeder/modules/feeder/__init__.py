"""
Feeder Module - Black Box Interface

Purpose: Buffer outbound commands and release them one at a time
Interface: feed(), prepend(), append(), hold(), unhold(), next(), peek()
Hidden: Queue storage, blank-line skipping, change tracking

The transport that actually sends a released command subscribes to the
"data" notification; the feeder never talks to a device itself.
"""

from .events import FeederEvent
from .feeder import APPEND, PREPEND, Feeder, ensure_list
from .models import FeederSnapshot, QueueItem

__all__ = [
    "APPEND",
    "PREPEND",
    "Feeder",
    "FeederEvent",
    "FeederSnapshot",
    "QueueItem",
    "ensure_list",
]
