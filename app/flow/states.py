"""
app/flow/states.py

Purpose: Defines all conversation states

- Enum for each step of the guided flow
  (UNSET, AWAITING_CONNECT, IN_MENU, AWAITING_INCOME, AWAITING_EXPENSE)
- Single source of truth for flow stages
- State transition validation
- Transaction kinds and the state that collects each of them
"""

from enum import Enum
from typing import Dict, List, Optional
from dataclasses import dataclass


class ConversationState(str, Enum):
    """
    Defines all possible states of a chat identity.
    A sender with no session entry is UNSET.
    """

    UNSET = "unset"

    # Account linking
    AWAITING_CONNECT = "awaiting_connect"

    # Main menu
    IN_MENU = "in_menu"

    # Transaction collection
    AWAITING_INCOME = "awaiting_income"
    AWAITING_EXPENSE = "awaiting_expense"


class TransactionKind(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


@dataclass
class StateMetadata:
    """
    Metadata associated with each conversation state.
    """
    name: ConversationState
    collects: Optional[TransactionKind] = None  # Transaction collected in this state


STATE_METADATA: Dict[ConversationState, StateMetadata] = {
    ConversationState.UNSET: StateMetadata(name=ConversationState.UNSET),
    ConversationState.AWAITING_CONNECT: StateMetadata(name=ConversationState.AWAITING_CONNECT),
    ConversationState.IN_MENU: StateMetadata(name=ConversationState.IN_MENU),
    ConversationState.AWAITING_INCOME: StateMetadata(
        name=ConversationState.AWAITING_INCOME,
        collects=TransactionKind.INCOME
    ),
    ConversationState.AWAITING_EXPENSE: StateMetadata(
        name=ConversationState.AWAITING_EXPENSE,
        collects=TransactionKind.EXPENSE
    ),
}


# Valid state transitions. A successful CONECTAR and the MENU keyword are
# accepted from every state, and disconnect returns every state to UNSET.
STATE_TRANSITIONS: Dict[ConversationState, List[ConversationState]] = {
    ConversationState.UNSET: [
        ConversationState.AWAITING_CONNECT,
        ConversationState.IN_MENU,
    ],
    ConversationState.AWAITING_CONNECT: [
        ConversationState.AWAITING_CONNECT,  # Retry on invalid id
        ConversationState.IN_MENU,
        ConversationState.UNSET,
    ],
    ConversationState.IN_MENU: [
        ConversationState.IN_MENU,
        ConversationState.AWAITING_INCOME,
        ConversationState.AWAITING_EXPENSE,
        ConversationState.AWAITING_CONNECT,  # Invalid CONECTAR while linked
        ConversationState.UNSET,  # Disconnect
    ],
    ConversationState.AWAITING_INCOME: [
        ConversationState.AWAITING_INCOME,  # Retry on failure
        ConversationState.IN_MENU,
        ConversationState.AWAITING_CONNECT,
        ConversationState.UNSET,
    ],
    ConversationState.AWAITING_EXPENSE: [
        ConversationState.AWAITING_EXPENSE,  # Retry on failure
        ConversationState.IN_MENU,
        ConversationState.AWAITING_CONNECT,
        ConversationState.UNSET,
    ],
}


def is_valid_transition(from_state: ConversationState, to_state: ConversationState) -> bool:
    """
    Checks if a state transition is valid.

    Args:
        from_state: Current state
        to_state: Target state

    Returns:
        True if transition is allowed, False otherwise
    """
    allowed_transitions = STATE_TRANSITIONS.get(from_state, [])
    return to_state in allowed_transitions


def get_state_metadata(state: ConversationState) -> StateMetadata:
    """
    Retrieves metadata for a given state.
    """
    return STATE_METADATA.get(state, StateMetadata(name=state))


def awaiting_state_for(kind: TransactionKind) -> ConversationState:
    """Returns the state that collects a transaction of the given kind."""
    for state, metadata in STATE_METADATA.items():
        if metadata.collects == kind:
            return state
    raise ValueError(f"No state collects {kind}")
