"""
app/flow/handlers/welcome.py

Handles: Entry – greetings from unlinked contacts

- Detects greeting words
- Sends linking instructions (CONECTAR <UID>)
- Moves the contact to AWAITING_CONNECT
- Guides contacts that write anything else before linking
"""

from typing import Dict, Any

from app.core.config import settings
from app.core.logging import get_logger, LogContext
from app.flow.states import ConversationState
from app.services.session_service import SessionStore
from utils.constants import GREETINGS, NOT_LINKED_MESSAGE, WELCOME_MESSAGE

logger = get_logger(__name__)


def is_greeting(text: str) -> bool:
    return text.strip().lower() in GREETINGS


async def handle_welcome(user_id: str, message: str, store: SessionStore, **kwargs) -> Dict[str, Any]:
    """
    Sends linking instructions to an unlinked contact.

    Args:
        user_id: Chat identity
        message: Greeting text
        store: Session store

    Returns:
        Response dict with welcome message
    """
    with LogContext(user_id=user_id, state=ConversationState.AWAITING_CONNECT.value):
        logger.info("Greeting from unlinked contact, sending linking instructions")

        store.set_state(user_id, ConversationState.AWAITING_CONNECT)

        return {
            "message": WELCOME_MESSAGE.format(site_url=settings.FINANZAS_SITE_URL)
        }


async def handle_not_linked(user_id: str, message: str, store: SessionStore, **kwargs) -> Dict[str, Any]:
    """
    Replies to an unlinked contact that did not greet or link. State is unchanged.
    """
    logger.info(f"Message from unlinked contact {user_id} refused")
    return {"message": NOT_LINKED_MESSAGE}
