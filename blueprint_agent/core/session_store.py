"""In-memory store for blueprint conversation sessions.

Sessions live only as long as the process. Access to a single session is
serialized with a per-session ``asyncio.Lock``; distinct sessions never
contend with each other.
"""

import asyncio
import time
import uuid
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from dataclasses import dataclass, field

from blueprint_agent.core.errors import NotFoundError
from blueprint_agent.core.logging import get_logger
from blueprint_agent.core.schemas_blueprint import ChatMessage

logger = get_logger(__name__)


@dataclass
class Session:
    """Server-side state for one blueprint negotiation."""

    id: str
    requester_email: str
    original_idea: str
    current_blueprint: str
    conversation_history: list[ChatMessage]
    created_at: float
    updated_at: float
    lock: asyncio.Lock = field(default_factory=asyncio.Lock, repr=False, compare=False)

    def append(self, role: str, content: str) -> None:
        self.conversation_history.append(ChatMessage(role=role, content=content))


class SessionStore:
    """Process-wide mapping of session ids to conversation state."""

    def __init__(
        self,
        ttl_seconds: int = 0,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the store.

        Args:
            ttl_seconds: Idle sessions older than this are evicted (0 disables expiry)
            clock: Monotonic time source, injectable for tests
        """
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._sessions: dict[str, Session] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def create(
        self,
        idea: str,
        email: str,
        history: list[ChatMessage],
        blueprint: str,
    ) -> str:
        """
        Create a session under a freshly generated id.

        Args:
            idea: Original idea text
            email: Requester address
            history: Conversation so far, ending with the assistant reply
            blueprint: Normalized blueprint text

        Returns:
            New session id
        """
        self.sweep_expired()

        session_id = str(uuid.uuid4())
        now = self._clock()
        self._sessions[session_id] = Session(
            id=session_id,
            requester_email=email,
            original_idea=idea,
            current_blueprint=blueprint,
            conversation_history=list(history),
            created_at=now,
            updated_at=now,
        )
        return session_id

    def get(self, session_id: str | None) -> Session | None:
        """Return the session, or None if unknown or expired."""
        if not session_id:
            return None
        session = self._sessions.get(session_id)
        if session is None:
            return None
        if self._is_expired(session) and not session.lock.locked():
            self._evict(session_id, reason="expired")
            return None
        return session

    @asynccontextmanager
    async def locked(self, session_id: str | None) -> AsyncIterator[Session]:
        """
        Hold the session's lock for the duration of the block.

        Raises:
            NotFoundError: If the session is unknown, or was removed while
                waiting for the lock
        """
        session = self.get(session_id)
        if session is None:
            raise NotFoundError()

        async with session.lock:
            if self._sessions.get(session.id) is not session:
                raise NotFoundError()
            yield session
            session.updated_at = self._clock()

    async def update(self, session_id: str, mutator: Callable[[Session], None]) -> Session:
        """Apply ``mutator`` to the session under its lock."""
        async with self.locked(session_id) as session:
            mutator(session)
            return session

    def remove(self, session_id: str) -> bool:
        """Remove a session. Returns True if it existed."""
        return self._sessions.pop(session_id, None) is not None

    def sweep_expired(self) -> int:
        """
        Evict sessions idle longer than the TTL.

        Sessions whose lock is currently held are skipped.

        Returns:
            Number of sessions evicted
        """
        if self.ttl_seconds <= 0:
            return 0

        expired = [
            sid
            for sid, session in self._sessions.items()
            if self._is_expired(session) and not session.lock.locked()
        ]
        for sid in expired:
            self._evict(sid, reason="expired")

        if expired:
            logger.info(f"Swept {len(expired)} expired sessions, {len(self._sessions)} remaining")
        return len(expired)

    def _is_expired(self, session: Session) -> bool:
        if self.ttl_seconds <= 0:
            return False
        return self._clock() - session.updated_at > self.ttl_seconds

    def _evict(self, session_id: str, reason: str) -> None:
        self._sessions.pop(session_id, None)
        logger.debug(f"Evicted session {session_id} ({reason})")
