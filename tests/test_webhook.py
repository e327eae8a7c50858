from urllib.parse import parse_qs

import httpx
import pytest
from fastapi.testclient import TestClient

from app.flow.dispatcher import MessageDispatcher
from app.main import app
from app.services.session_service import SessionStore
from app.services.twilio_service import TwilioService
from utils.constants import CONNECTED_MESSAGE, MENU_MESSAGE, NOT_LINKED_MESSAGE

from conftest import VALID_UID, make_service

WEBHOOK = "/api/v1/webhook"


class TwilioStub:
    def __init__(self, status_code: int = 201):
        self.status_code = status_code
        self.sent = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.sent.append({k: v[0] for k, v in parse_qs(request.content.decode()).items()})
        return httpx.Response(self.status_code, json={"sid": f"SM{len(self.sent)}", "status": "queued"})


@pytest.fixture
def twilio_stub():
    return TwilioStub()


@pytest.fixture
def client(api_stub, twilio_stub):
    with TestClient(app) as test_client:
        store = SessionStore()
        app.state.store = store
        app.state.dispatcher = MessageDispatcher(store=store, submitter=make_service(api_stub))
        app.state.twilio = TwilioService(
            account_sid="AC123",
            auth_token="secret",
            whatsapp_number="whatsapp:+14155238886",
            transport=httpx.MockTransport(twilio_stub),
        )
        yield test_client


def test_json_flow_registers_expense(client, api_stub):
    def say(text):
        response = client.post(WEBHOOK, json={"from": "+5511999990000", "body": text})
        assert response.status_code == 200
        return response.json()

    assert "CONECTAR SEU_ID_AQUI" in say("oi")["replies"][0]
    assert say(f"CONECTAR {VALID_UID}")["replies"] == [CONNECTED_MESSAGE]
    assert say("menu")["replies"] == [MENU_MESSAGE]
    say("2")

    data = say("45 almoço")

    assert data["status"] == "success"
    assert data["replies"][0].startswith("✅ Saída de R$ 45,00 (almoço)")
    assert api_stub.bodies[0]["tipo"] == "variável"
    assert api_stub.requests[0].url.params["userId"] == VALID_UID


def test_json_payload_requires_sender(client):
    response = client.post(WEBHOOK, json={"body": "oi"})
    assert response.status_code == 400
    assert response.json()["code"] == "HTTP_ERROR"


def test_invalid_json_is_rejected(client):
    response = client.post(WEBHOOK, content=b"not json", headers={"Content-Type": "application/json"})
    assert response.status_code == 400


def test_twilio_delivery_replies_through_twilio(client, twilio_stub):
    response = client.post(
        WEBHOOK,
        data={"From": "whatsapp:+5511999990000", "Body": "menu", "ProfileName": "Maria", "MessageSid": "SM1"},
    )

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/xml")
    assert "<Response></Response>" in response.text

    (sent,) = twilio_stub.sent
    assert sent["To"] == "whatsapp:+5511999990000"
    assert sent["From"] == "whatsapp:+14155238886"
    assert sent["Body"] == NOT_LINKED_MESSAGE


def test_twilio_send_failure_does_not_break_webhook(client, twilio_stub):
    twilio_stub.status_code = 500
    response = client.post(WEBHOOK, data={"From": "whatsapp:+5511999990000", "Body": "oi"})

    assert response.status_code == 200
    assert len(twilio_stub.sent) == 1
    assert app.state.store.get_state("+5511999990000").value == "awaiting_connect"


def test_webhook_verification(client):
    assert client.get(WEBHOOK).json()["status"] == "ok"


def test_health_reports_sessions(client):
    client.post(WEBHOOK, json={"from": "+5511999990000", "body": "oi"})
    data = client.get("/health").json()

    assert data["status"] == "healthy"
    assert data["checks"]["active_sessions"] == 1
