"""
API Models - request and response schemas for the HTTP surface

Holds the pydantic models that main.py validates requests against and
serializes responses with. Routing lives in main.py; feeder state is
reported through FeederSnapshot from the feeder module.
"""

from .models import (
    ChangedResponse,
    CreateSessionRequest,
    FeedDirection,
    FeedRequest,
    HoldRequest,
    NextResponse,
    SentCommand,
    SessionResponse,
)

__all__ = [
    "CreateSessionRequest",
    "FeedRequest",
    "HoldRequest",
    "SessionResponse",
    "NextResponse",
    "ChangedResponse",
    "SentCommand",
    "FeedDirection",
]
