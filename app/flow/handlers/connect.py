"""
app/flow/handlers/connect.py

Handles: Account linking

- Recognizes "CONECTAR <UID>" (keyword case-insensitive, UID case-sensitive)
- Validates the UID format (via utils)
- Links the chat identity to the FinanZas user and opens the menu
"""

from typing import Any, Dict, Optional

from app.core.exceptions import InvalidAccountIdError
from app.core.logging import get_logger, LogContext
from app.flow.states import ConversationState
from app.services.session_service import SessionStore
from utils.constants import CONNECT_KEYWORDS, CONNECTED_MESSAGE, INVALID_ACCOUNT_ID_MESSAGE
from utils.validation_utils import validate_account_id

logger = get_logger(__name__)


def extract_connect_token(text: str) -> Optional[str]:
    """
    Returns the token of a linking command, or None if the text is not one.

    Example: "conectar A1b2..." -> "A1b2..."
    """
    body = text.strip()

    for keyword in CONNECT_KEYWORDS:
        prefix = f"{keyword} "
        if body[:len(prefix)].upper() == prefix:
            return body[len(prefix):].strip()

    return None


def parse_connect_command(text: str) -> str:
    """
    Returns the validated UID of a linking command.

    Raises:
        InvalidAccountIdError: Text is not a linking command or the UID is malformed
    """
    token = extract_connect_token(text) or ""

    if not validate_account_id(token):
        raise InvalidAccountIdError(details={"length": len(token)})

    return token


async def handle_connect(user_id: str, message: str, store: SessionStore, **kwargs) -> Dict[str, Any]:
    """
    Handles a linking command.

    On an invalid UID the contact is sent back to AWAITING_CONNECT; an
    account linked earlier stays linked.

    Args:
        user_id: Chat identity
        message: Full "CONECTAR <UID>" text
        store: Session store

    Returns:
        Response dict
    """
    with LogContext(user_id=user_id):
        try:
            account_id = parse_connect_command(message)
        except InvalidAccountIdError as e:
            logger.warning(f"Invalid account id provided ({e.details['length']} chars)")
            store.set_state(user_id, ConversationState.AWAITING_CONNECT)
            return {"message": INVALID_ACCOUNT_ID_MESSAGE}

        store.link_account(user_id, account_id)
        logger.info(f"✅ Contact linked to FinanZas account {account_id}")

        return {"message": CONNECTED_MESSAGE}
