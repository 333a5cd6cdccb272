"""Data structures held and reported by the feeder."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


@dataclass
class QueueItem:
    """A buffered command and the context captured when it was fed."""

    command: Any
    context: Dict[str, Any] = field(default_factory=dict)


class FeederSnapshot(BaseModel):
    """Read-only projection of feeder state for status reporting."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    hold: bool = Field(False, description="Whether delivery is paused")
    hold_reason: Optional[Any] = Field(
        None, alias="holdReason", description="Cause supplied to hold(), if any"
    )
    queue: int = Field(0, ge=0, description="Number of buffered commands")
    pending: bool = Field(False, description="Announced work remains and the queue is not drained")
    changed: bool = Field(False, description="State changed since the last peek()")
