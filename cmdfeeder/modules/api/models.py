"""
cmdfeeder shared data models.

These models define the structure of all data passed between
the HTTP surface and the feeder sessions.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field, field_validator

from cmdfeeder.modules.feeder import FeederSnapshot

# Enums


class FeedDirection(str, Enum):
    """Where fed commands are inserted."""

    APPEND = "append"
    PREPEND = "prepend"


# Request Models (API Input)


class CreateSessionRequest(BaseModel):
    """Request to create a feeder session."""

    port: Optional[str] = Field(
        None, description="Device connection the session drives", max_length=255
    )
    strip_comments: Optional[bool] = Field(
        None, description="Override the configured comment-stripping filter"
    )


class FeedRequest(BaseModel):
    """Request to buffer one or more commands."""

    data: Union[str, List[Any], None] = Field(
        ..., description="A command line or a list of command lines"
    )
    context: Dict[str, Any] = Field(
        default_factory=dict, description="Metadata stored with every command"
    )
    direction: FeedDirection = Field(
        default=FeedDirection.APPEND, description="Insert at the end or the front of the queue"
    )

    @field_validator("data")
    @classmethod
    def split_lines(cls, v):
        """A multi-line program is buffered one line per command."""
        if isinstance(v, str) and "\n" in v:
            return v.splitlines()
        return v


class HoldRequest(BaseModel):
    """Request to pause delivery."""

    reason: Optional[Any] = Field(None, description="Why delivery is paused")


# Response Models (API Output)


class SessionResponse(BaseModel):
    """Response after session creation or lookup."""

    session_id: str
    port: Optional[str] = None
    strip_comments: bool
    created_at: datetime
    last_activity: datetime
    command_count: int = 0
    feeder: FeederSnapshot


class NextResponse(BaseModel):
    """Result of one drain step."""

    pending: bool
    sent: Optional[Any] = Field(None, description="Command released by this step, if any")


class ChangedResponse(BaseModel):
    """Result of consuming the changed flag."""

    changed: bool


class SentCommand(BaseModel):
    """A command announced to the transport."""

    command: Any
    context: Dict[str, Any] = Field(default_factory=dict)
    sent_at: datetime
