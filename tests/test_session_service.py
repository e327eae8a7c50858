import asyncio

import pytest

from app.flow.states import ConversationState, TransactionKind, awaiting_state_for, is_valid_transition

CHAT = "+5511999990000"
UID = "A1b2C3d4E5f6G7h8I9j0K1l2M"


def test_unknown_identity_is_unset_and_not_stored(store):
    session = store.get(CHAT)

    assert session.state == ConversationState.UNSET
    assert session.account_id is None
    assert CHAT not in store
    assert len(store) == 0


def test_set_state_creates_session(store):
    store.set_state(CHAT, ConversationState.AWAITING_CONNECT)

    assert CHAT in store
    assert store.get_state(CHAT) == ConversationState.AWAITING_CONNECT


def test_invalid_transition_raises(store):
    with pytest.raises(ValueError):
        store.set_state(CHAT, ConversationState.AWAITING_INCOME)


def test_transition_check_can_be_skipped(store):
    store.set_state(CHAT, ConversationState.AWAITING_EXPENSE, validate_transition=False)
    assert store.get_state(CHAT) == ConversationState.AWAITING_EXPENSE


def test_link_account_opens_menu(store):
    store.link_account(CHAT, UID)

    assert store.get_account_id(CHAT) == UID
    assert store.get_state(CHAT) == ConversationState.IN_MENU
    assert store.get(CHAT).is_linked


def test_disconnect_forgets_everything(store):
    store.link_account(CHAT, UID)

    assert store.disconnect(CHAT) is True
    assert CHAT not in store
    assert store.get_account_id(CHAT) is None
    assert store.get_state(CHAT) == ConversationState.UNSET
    assert store.disconnect(CHAT) is False


def test_sessions_are_isolated(store):
    store.link_account(CHAT, UID)
    store.set_state("+5511888880000", ConversationState.AWAITING_CONNECT)

    assert store.get_account_id("+5511888880000") is None
    assert store.get_state(CHAT) == ConversationState.IN_MENU


@pytest.mark.asyncio
async def test_lock_is_per_identity(store):
    other = "+5511888880000"
    async with store.session_lock(CHAT):
        assert store._locks[CHAT].locked()
        async with store.session_lock(other):
            assert store._locks[other] is not store._locks[CHAT]


@pytest.mark.asyncio
async def test_lock_is_dropped_for_identity_without_session(store):
    async with store.session_lock(CHAT):
        pass
    assert CHAT not in store._locks


@pytest.mark.asyncio
async def test_lock_is_kept_while_linked_and_dropped_on_disconnect(store):
    store.link_account(CHAT, UID)
    async with store.session_lock(CHAT):
        pass
    assert CHAT in store._locks

    async with store.session_lock(CHAT):
        store.disconnect(CHAT)
    assert CHAT not in store._locks


@pytest.mark.asyncio
async def test_lock_survives_while_waiters_remain(store):
    order = []

    async def worker(name):
        async with store.session_lock(CHAT):
            order.append(f"{name}-in")
            await asyncio.sleep(0)
            order.append(f"{name}-out")

    await asyncio.gather(worker("a"), worker("b"))

    assert order == ["a-in", "a-out", "b-in", "b-out"]
    assert CHAT not in store._locks


def test_awaiting_state_for_kind():
    assert awaiting_state_for(TransactionKind.INCOME) == ConversationState.AWAITING_INCOME
    assert awaiting_state_for(TransactionKind.EXPENSE) == ConversationState.AWAITING_EXPENSE


def test_menu_transitions():
    assert is_valid_transition(ConversationState.IN_MENU, ConversationState.AWAITING_INCOME)
    assert not is_valid_transition(ConversationState.AWAITING_CONNECT, ConversationState.AWAITING_INCOME)
