"""In-process session storage for the intake dialogue."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ChatSession:
    session_id: str
    data: dict[str, Any] = field(default_factory=dict)
    current: str | None = None
    all_messages: list[str] = field(default_factory=list)
    user_phrase: str | None = None


class InMemorySessionStore:
    """Maps session ids to sessions for the lifetime of the process.

    No locking: turns for one session id must not run concurrently.
    """

    def __init__(self) -> None:
        self.sessions: dict[str, ChatSession] = {}

    def get(self, session_id: str) -> ChatSession:
        session = self.sessions.get(session_id)
        if session is None:
            session = ChatSession(session_id=session_id)
            self.sessions[session_id] = session
        return session

    def save(self, session: ChatSession) -> ChatSession:
        self.sessions[session.session_id] = session
        return session

    def reset(self, session_id: str) -> ChatSession:
        session = ChatSession(session_id=session_id)
        self.sessions[session_id] = session
        return session

    def __contains__(self, session_id: object) -> bool:
        return session_id in self.sessions

    def __len__(self) -> int:
        return len(self.sessions)


_store: InMemorySessionStore | None = None


def get_store() -> InMemorySessionStore:
    global _store
    if _store is None:
        _store = InMemorySessionStore()
    return _store
