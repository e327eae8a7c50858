"""
app/services/session_service.py

Purpose: Session and state management

- Owns the chat identity -> UserSession mapping (in-memory, per process)
- Records the linked FinanZas account id
- Updates current state, enforcing valid transitions
- Tracks last interaction time
- Serializes message handling per chat identity
"""

import asyncio
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import AsyncIterator, Dict, Optional

from app.flow.states import ConversationState, is_valid_transition
from app.core.logging import get_logger, LogContext

logger = get_logger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class UserSession:
    """
    Everything the bot remembers about one chat identity.
    """
    chat_id: str
    account_id: Optional[str] = None
    state: ConversationState = ConversationState.UNSET
    created_at: datetime = field(default_factory=_now)
    last_interaction: datetime = field(default_factory=_now)

    @property
    def is_linked(self) -> bool:
        return self.account_id is not None


class SessionStore:
    """
    In-memory session store.

    Session data lives only as long as the process. Handlers must run while
    holding ``session_lock(chat_id)`` so that reads and writes for one identity
    never interleave across the await on the accounting API.
    """

    def __init__(self):
        self._sessions: Dict[str, UserSession] = {}
        self._locks: Dict[str, asyncio.Lock] = {}
        self._lock_users: Dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, chat_id: str) -> bool:
        return chat_id in self._sessions

    @asynccontextmanager
    async def session_lock(self, chat_id: str) -> AsyncIterator[None]:
        """
        Holds the per-identity lock while one message is handled.

        The lock is dropped once nobody holds or waits for it and the
        identity has no stored session (unlinked senders, disconnects).
        """
        lock = self._locks.get(chat_id)
        if lock is None:
            lock = self._locks[chat_id] = asyncio.Lock()
        self._lock_users[chat_id] = self._lock_users.get(chat_id, 0) + 1

        try:
            async with lock:
                yield
        finally:
            self._lock_users[chat_id] -= 1
            if self._lock_users[chat_id] == 0:
                del self._lock_users[chat_id]
                if chat_id not in self._sessions:
                    del self._locks[chat_id]

    def get(self, chat_id: str) -> UserSession:
        """
        Returns the session for a chat identity.

        Unknown identities get a detached UNSET session; it is only stored
        once a state or account is written.
        """
        session = self._sessions.get(chat_id)
        if session is None:
            return UserSession(chat_id=chat_id)
        return session

    def touch(self, chat_id: str) -> None:
        session = self._sessions.get(chat_id)
        if session is not None:
            session.last_interaction = _now()

    def _get_or_create(self, chat_id: str) -> UserSession:
        session = self._sessions.get(chat_id)
        if session is None:
            session = self._sessions[chat_id] = UserSession(chat_id=chat_id)
            logger.info(f"Created new session for {chat_id}")
        return session

    def get_state(self, chat_id: str) -> ConversationState:
        return self.get(chat_id).state

    def get_account_id(self, chat_id: str) -> Optional[str]:
        return self.get(chat_id).account_id

    def set_state(
        self,
        chat_id: str,
        new_state: ConversationState,
        validate_transition: bool = True
    ) -> UserSession:
        """
        Updates the conversation state of a chat identity.

        Args:
            chat_id: Chat identity
            new_state: Target state
            validate_transition: Whether to enforce state transition rules

        Returns:
            The updated session

        Raises:
            ValueError: If transition is invalid
        """
        with LogContext(user_id=chat_id, state=new_state.value):
            session = self._get_or_create(chat_id)
            current_state = session.state

            if validate_transition and not is_valid_transition(current_state, new_state):
                logger.warning(f"Invalid state transition attempted: {current_state.value} -> {new_state.value}")
                raise ValueError(f"Invalid state transition: {current_state.value} -> {new_state.value}")

            session.state = new_state
            session.last_interaction = _now()

            if current_state != new_state:
                logger.info(f"State updated: {current_state.value} -> {new_state.value}")

            return session

    def link_account(self, chat_id: str, account_id: str) -> UserSession:
        """
        Associates a chat identity with a FinanZas user id and opens the menu.
        """
        with LogContext(user_id=chat_id):
            session = self.set_state(chat_id, ConversationState.IN_MENU)
            previous = session.account_id
            session.account_id = account_id

            if previous and previous != account_id:
                logger.info("Linked account replaced")
            else:
                logger.info("Account linked")

            return session

    def disconnect(self, chat_id: str) -> bool:
        """
        Forgets the linked account and the session state of a chat identity.

        Returns:
            True if there was anything to forget
        """
        session = self._sessions.pop(chat_id, None)
        if session is None:
            return False

        logger.info(f"Session removed for {chat_id} (disconnect)")
        return True
