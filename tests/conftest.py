import json
from typing import Callable, List, Tuple

import httpx
import pytest

from app.flow.dispatcher import MessageDispatcher
from app.schemas.webhook import UnifiedMessage
from app.services.finanzas_service import FinanZasService
from app.services.session_service import SessionStore

API_BASE = "http://finanzas.test/api"
VALID_UID = "A1b2C3d4E5f6G7h8I9j0K1l2M"  # 25 chars


class FinanZasApiStub:
    """Records requests sent to the FinanZas API and answers with a fixed status."""

    def __init__(self, status_code: int = 201, error: Exception = None):
        self.status_code = status_code
        self.error = error
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, json={"id": 1})

    @property
    def bodies(self) -> List[dict]:
        return [json.loads(r.content) for r in self.requests]


class ReplyRecorder:
    def __init__(self):
        self.sent: List[Tuple[str, str]] = []

    async def __call__(self, to: str, text: str):
        self.sent.append((to, text))

    @property
    def texts(self) -> List[str]:
        return [text for _, text in self.sent]


def make_service(stub: FinanZasApiStub) -> FinanZasService:
    client = httpx.AsyncClient(base_url=API_BASE, transport=httpx.MockTransport(stub))
    return FinanZasService(base_url=API_BASE, client=client)


def make_message(text: str, phone: str = "+5511999990000") -> UnifiedMessage:
    return UnifiedMessage(phone=phone, text=text, message_id="m1", platform="json")


@pytest.fixture
def api_stub() -> FinanZasApiStub:
    return FinanZasApiStub()


@pytest.fixture
def store() -> SessionStore:
    return SessionStore()


@pytest.fixture
def replies() -> ReplyRecorder:
    return ReplyRecorder()


@pytest.fixture
def dispatcher(store, api_stub) -> MessageDispatcher:
    return MessageDispatcher(store=store, submitter=make_service(api_stub))


@pytest.fixture
def send(dispatcher, replies) -> Callable:
    """Dispatches one message and returns only the replies it produced."""
    async def _send(text: str, phone: str = "+5511999990000") -> List[str]:
        before = len(replies.sent)
        await dispatcher.dispatch(make_message(text, phone), replies)
        return replies.texts[before:]
    return _send
