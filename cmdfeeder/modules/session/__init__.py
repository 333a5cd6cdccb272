"""
Session Module - Black Box Interface

Purpose: Manage feeder sessions, one per device connection
Interface: create_session(), get_session(), get_feeder(), end_session()
Hidden: Session storage, sent-command history

Replaceable with any session backend; the feeder itself is never persisted.
"""

from .session import SessionModule

__all__ = ["SessionModule"]
