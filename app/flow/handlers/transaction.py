"""
app/flow/handlers/transaction.py

Handles: Income / expense collection

- Reads "<value> <description>" while AWAITING_INCOME or AWAITING_EXPENSE
- Parses and validates it (via app.flow.parser)
- Submits it to the FinanZas API
- Returns to IN_MENU on success; keeps the state on any failure so the
  contact can retry
"""

from typing import Any, Dict

from app.core.exceptions import ValidationError
from app.core.logging import get_logger, LogContext
from app.flow.parser import build_payload, command_text, parse_transaction_command
from app.flow.states import ConversationState, TransactionKind
from app.services.session_service import SessionStore
from utils.constants import INVALID_AMOUNT_MESSAGE, NEXT_ACTION_MESSAGE

logger = get_logger(__name__)


async def handle_transaction_input(
    user_id: str,
    message: str,
    store: SessionStore,
    submitter,
    kind: TransactionKind,
    **kwargs
) -> Dict[str, Any]:
    """
    Registers an income or expense typed by the contact.

    Args:
        user_id: Chat identity
        message: "<value> <description>"
        store: Session store
        submitter: Object exposing ``submit_transaction(kind, payload, account_id)``
        kind: Transaction kind being collected

    Returns:
        Response dict
    """
    session = store.get(user_id)

    with LogContext(user_id=user_id, state=session.state.value):
        try:
            parsed = parse_transaction_command(command_text(kind, message), expected_kind=kind)
        except ValidationError as e:
            logger.warning(f"Rejected {kind.value} input: {e.message}")
            return {"message": INVALID_AMOUNT_MESSAGE}

        payload = build_payload(parsed)
        result = await submitter.submit_transaction(kind, payload, session.account_id)

        if not result.success:
            logger.warning(f"{kind.value} not registered ({result.error_code}), state kept")
            return {"message": result.message}

        store.set_state(user_id, ConversationState.IN_MENU)
        return {"message": f"{result.message}\n\n{NEXT_ACTION_MESSAGE}"}
