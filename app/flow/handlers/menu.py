"""
app/flow/handlers/menu.py

Handles: Main menu

- Renders the menu on MENU / AJUDA
- Option 1/2: starts income/expense collection
- Option 3: financial summary placeholder, then the menu again
- Option 4: disconnects the contact
"""

from typing import Any, Dict

from app.core.logging import get_logger, LogContext
from app.flow.states import ConversationState, TransactionKind, awaiting_state_for
from app.services.session_service import SessionStore
from utils.constants import (
    ASK_EXPENSE_MESSAGE,
    ASK_INCOME_MESSAGE,
    DISCONNECTED_MESSAGE,
    INVALID_OPTION_MESSAGE,
    MENU_KEYWORDS,
    MENU_MESSAGE,
    MENU_OPTION_DISCONNECT,
    MENU_OPTION_EXPENSE,
    MENU_OPTION_INCOME,
    MENU_OPTION_SUMMARY,
    SUMMARY_COMING_SOON_MESSAGE,
)

logger = get_logger(__name__)


def is_menu_request(text: str) -> bool:
    return text.strip().lower() in MENU_KEYWORDS


def render_menu() -> str:
    return MENU_MESSAGE


async def handle_menu_request(user_id: str, message: str, store: SessionStore, **kwargs) -> Dict[str, Any]:
    """
    Shows the main menu and moves the contact to IN_MENU.
    """
    store.set_state(user_id, ConversationState.IN_MENU)
    return {"message": render_menu()}


async def handle_menu_option(user_id: str, message: str, store: SessionStore, **kwargs) -> Dict[str, Any]:
    """
    Handles an option typed while the menu is open.

    Args:
        user_id: Chat identity
        message: Option number
        store: Session store

    Returns:
        Response dict; option 3 carries the menu as follow_up
    """
    option = message.strip()

    with LogContext(user_id=user_id, state=ConversationState.IN_MENU.value):
        logger.info(f"Menu option selected: {option[:10]}")

        if option == MENU_OPTION_INCOME:
            store.set_state(user_id, awaiting_state_for(TransactionKind.INCOME))
            return {"message": ASK_INCOME_MESSAGE}

        if option == MENU_OPTION_EXPENSE:
            store.set_state(user_id, awaiting_state_for(TransactionKind.EXPENSE))
            return {"message": ASK_EXPENSE_MESSAGE}

        if option == MENU_OPTION_SUMMARY:
            return {
                "message": SUMMARY_COMING_SOON_MESSAGE,
                "follow_up": render_menu(),
            }

        if option == MENU_OPTION_DISCONNECT:
            store.disconnect(user_id)
            return {"message": DISCONNECTED_MESSAGE}

        return {"message": INVALID_OPTION_MESSAGE}
