"""
sessions.py
===========
In-process registry of chat sessions.

Each session owns exactly one BookingState and its message history. Turns on
the same session are serialized with a per-session lock; different sessions
never share anything except the read-only reference data.
"""

import datetime
import logging
import threading
import uuid
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .config import FlowConfig
from .flow import TurnResult, handle_turn
from .reference import ReferenceData
from .state import BookingState
from .steps import Step

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.datetime.now(datetime.timezone.utc).isoformat()


@dataclass
class ChatSession:
    id: str
    state: BookingState
    messages: List[dict] = field(default_factory=list)
    created_at: str = field(default_factory=_now)
    updated_at: str = field(default_factory=_now)
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def add_message(self, role: str, content: str, options: Optional[List[str]] = None):
        self.messages.append({
            "id": str(len(self.messages) + 1),
            "role": role,
            "content": content,
            "options": list(options or []),
            "timestamp": _now(),
        })


class SessionStore:
    """Thread-safe map of session id -> ChatSession."""

    def __init__(self):
        self._sessions: Dict[str, ChatSession] = {}
        self._lock = threading.Lock()

    def create(self, step: Step = Step.initial, register: bool = True) -> ChatSession:
        """
        Open a session on `step`. With `register=False` the session is not
        stored and lives only for the current request.
        """
        session = ChatSession(id=str(uuid.uuid4()), state=BookingState(step=step))
        if not register:
            return session
        with self._lock:
            self._sessions[session.id] = session
        logger.info(f"💬 Session {session.id} opened on step {step.value}")
        return session

    def get(self, session_id: str) -> Optional[ChatSession]:
        with self._lock:
            return self._sessions.get(session_id)

    def delete(self, session_id: str) -> bool:
        with self._lock:
            removed = self._sessions.pop(session_id, None)
        if removed:
            logger.info(f"🗑️ Session {session_id} closed")
        return removed is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def run_turn(
        self,
        session: ChatSession,
        message: str,
        reference: ReferenceData,
        flow: FlowConfig,
        today: Optional[datetime.date] = None,
    ) -> TurnResult:
        """Apply one patient message to a session and record both sides of the exchange."""
        with session.lock:
            session.add_message("user", message)
            result = handle_turn(session.state, message, reference, flow, today=today)
            if result.reset:
                session.messages.clear()
            session.state = result.state
            session.add_message("bot", result.message, result.options)
            session.updated_at = _now()
        return result
