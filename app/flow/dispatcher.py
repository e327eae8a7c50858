"""
app/flow/dispatcher.py

Purpose: Central message dispatcher

- Receives normalized messages from the webhook
- Serializes handling per chat identity
- Routes to the appropriate flow handler based on link status and state
- Sends replies through the injected reply callable
"""

from typing import Any, Awaitable, Callable, Dict, Tuple

from app.core.logging import get_logger
from app.flow.handlers.connect import extract_connect_token, handle_connect
from app.flow.handlers.menu import handle_menu_option, handle_menu_request, is_menu_request
from app.flow.handlers.transaction import handle_transaction_input
from app.flow.handlers.welcome import handle_not_linked, handle_welcome, is_greeting
from app.flow.states import ConversationState, get_state_metadata
from app.schemas.webhook import UnifiedMessage
from app.services.session_service import SessionStore, UserSession
from utils.constants import GENERIC_ERROR_MESSAGE, UNKNOWN_COMMAND_MESSAGE

logger = get_logger(__name__)

ReplyFunc = Callable[[str, str], Awaitable[Any]]
Handler = Callable[..., Awaitable[Dict[str, Any]]]


async def handle_unknown_command(user_id: str, message: str, **kwargs) -> Dict[str, Any]:
    return {"message": UNKNOWN_COMMAND_MESSAGE}


class MessageDispatcher:
    """
    Interprets chat messages for every contact.

    Args:
        store: Session store holding link and state per chat identity
        submitter: Object exposing ``submit_transaction(kind, payload, account_id)``
    """

    def __init__(self, store: SessionStore, submitter):
        self.store = store
        self.submitter = submitter

    async def dispatch(self, message: UnifiedMessage, reply: ReplyFunc) -> Dict[str, Any]:
        """
        Main entry point for an incoming message.

        Args:
            message: Normalized message object
            reply: ``async reply(to, text)`` used for every outbound message

        Returns:
            Status dict
        """
        logger.info(f"📨 Dispatching message {message.message_id} from {message.phone} via {message.platform}")

        async with self.store.session_lock(message.phone):
            try:
                response = await self.handle(message.phone, message.text)
            except Exception as e:
                logger.error(f"❌ Dispatcher error: {e}", exc_info=True)
                await send_response(message.phone, {"message": GENERIC_ERROR_MESSAGE}, reply)
                return {"status": "error", "error": str(e)}

            await send_response(message.phone, response, reply)

        return {"status": "success", "state": self.store.get_state(message.phone).value}

    async def handle(self, user_id: str, text: str) -> Dict[str, Any]:
        """
        Runs the handler for one message and returns its response dict.
        Callers must hold the identity lock.
        """
        body = (text or "").strip()
        session = self.store.get(user_id)

        logger.info(f"🔄 User state: {session.state.value}, linked={session.is_linked}")

        handler, extra = self.route(session, body)

        logger.info(f"📞 Calling handler: {handler.__name__}")
        response = await handler(user_id=user_id, message=body, store=self.store, **extra)

        self.store.touch(user_id)
        return response

    def route(self, session: UserSession, body: str) -> Tuple[Handler, Dict[str, Any]]:
        """
        Picks the handler for a message.

        Order matters: greetings and CONECTAR are accepted before the link
        check, MENU is accepted in every linked state.

        Returns:
            (handler, extra keyword arguments)
        """
        if is_greeting(body) and not session.is_linked:
            return handle_welcome, {}

        if extract_connect_token(body) is not None:
            return handle_connect, {}

        if not session.is_linked:
            return handle_not_linked, {}

        if is_menu_request(body):
            return handle_menu_request, {}

        if session.state == ConversationState.IN_MENU:
            return handle_menu_option, {}

        kind = get_state_metadata(session.state).collects
        if kind is not None:
            return handle_transaction_input, {"submitter": self.submitter, "kind": kind}

        return handle_unknown_command, {}


async def send_response(to_phone: str, response: Dict[str, Any], reply: ReplyFunc):
    """
    Sends a handler response.

    Args:
        to_phone: Recipient chat identity
        response: Handler response dict (``message`` and optional ``follow_up``)
        reply: Reply callable
    """
    messages = [response.get("message"), response.get("follow_up")]
    messages = [text for text in messages if text]

    if not messages:
        logger.warning("⚠️ Empty response message")
        return

    for text in messages:
        logger.info(f"📤 Sending response to {to_phone}: {text[:60]!r}")
        await reply(to_phone, text)
