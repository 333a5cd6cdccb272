import logging
import uuid
from collections import deque
from datetime import UTC, datetime
from typing import Any, Callable, Dict, List, Optional

from cmdfeeder.modules.feeder import Feeder, FeederEvent
from cmdfeeder.modules.filters import build_filter

logger = logging.getLogger(__name__)


class SessionModule:
    def __init__(self, max_sent_history: int = 100, strip_comments: bool = True):
        """
        Initialize session module.

        Args:
            max_sent_history: Announced commands kept per session (0 disables the log)
            strip_comments: Default data filter policy for new sessions
        """
        self.max_sent_history = max_sent_history
        self.strip_comments = strip_comments
        self._sessions: Dict[str, Dict[str, Any]] = {}

    def create_session(
        self,
        port: Optional[str] = None,
        strip_comments: Optional[bool] = None,
        data_filter: Optional[Callable[[Any, Dict[str, Any]], Any]] = None,
    ) -> str:
        """
        Create a new feeder session.

        Args:
            port: Optional identifier of the device connection the session drives
            strip_comments: Override the module default filter policy
            data_filter: Custom (command, context) filter for the feeder; takes
                precedence over strip_comments

        Returns:
            Session ID (UUID)

        Logic:
        1. Generate UUID for session
        2. Build a feeder with the configured data filter
        3. Record released commands through the feeder's "data" notification
        """
        session_id = str(uuid.uuid4())

        if strip_comments is None:
            strip_comments = self.strip_comments
        if data_filter is None:
            data_filter = build_filter(strip_comments)

        now = datetime.now(UTC).isoformat()
        session = {
            "session_id": session_id,
            "port": port,
            "strip_comments": strip_comments,
            "created_at": now,
            "last_activity": now,
            "command_count": 0,
            "feeder": Feeder(data_filter=data_filter),
            "sent": deque(maxlen=self.max_sent_history),
        }
        session["feeder"].subscribe(
            FeederEvent.DATA,
            lambda command, context: self._record_sent(session, command, context),
        )

        self._sessions[session_id] = session
        logger.info(f"Created feeder session {session_id} (port={port})")

        return session_id

    def _record_sent(self, session: Dict[str, Any], command: Any, context: Dict[str, Any]) -> None:
        now = datetime.now(UTC).isoformat()
        session["command_count"] += 1
        session["last_activity"] = now
        session["sent"].append({"command": command, "context": context, "sent_at": now})

    def get_feeder(self, session_id: str) -> Optional[Feeder]:
        session = self._sessions.get(session_id)
        return session["feeder"] if session else None

    def get_session(self, session_id: str) -> Optional[dict]:
        """
        Get session details.

        The feeder snapshot does not consume the feeder's changed flag.

        Returns:
            Session data dict or None if not found
        """
        session = self._sessions.get(session_id)
        if not session:
            return None

        return {
            "session_id": session["session_id"],
            "port": session["port"],
            "strip_comments": session["strip_comments"],
            "created_at": session["created_at"],
            "last_activity": session["last_activity"],
            "command_count": session["command_count"],
            "feeder": session["feeder"].to_dict(),
        }

    def get_sent(self, session_id: str, limit: Optional[int] = None) -> Optional[List[dict]]:
        """
        Get commands announced by the session's feeder, oldest first.

        Args:
            session_id: Session identifier
            limit: Return only the most recent entries

        Returns:
            List of {"command", "context", "sent_at"} dicts, or None if not found
        """
        session = self._sessions.get(session_id)
        if not session:
            return None

        sent = list(session["sent"])
        if limit is not None:
            sent = sent[-limit:] if limit > 0 else []
        return sent

    def end_session(self, session_id: str) -> bool:
        """
        End a session, discarding its buffered commands.

        Returns:
            True if the session existed
        """
        session = self._sessions.pop(session_id, None)
        if not session:
            return False

        remaining = session["feeder"].size()
        if remaining:
            logger.warning(f"Session {session_id} ended with {remaining} buffered command(s)")
        logger.info(f"Ended feeder session {session_id}")
        return True

    def get_active_sessions(self) -> List[dict]:
        """Get all active sessions, used for monitoring/admin purposes."""
        return [self.get_session(session_id) for session_id in list(self._sessions)]
