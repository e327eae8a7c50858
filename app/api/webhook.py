"""
app/api/webhook.py

Purpose: Unified WhatsApp webhook endpoint

- Receives incoming messages from Twilio (form data) or JSON clients
- Auto-detects platform based on request format
- Parses message payloads and normalizes them
- Passes control to the flow dispatcher
- Returns platform-compatible responses
"""

from fastapi import APIRouter, Depends, Request, Form, HTTPException
from fastapi.responses import Response
from typing import List, Optional

from app.core.logging import get_logger
from app.flow.dispatcher import MessageDispatcher
from app.schemas.response import WebhookAck
from app.schemas.webhook import parse_json_message, parse_twilio_message
from app.services.twilio_service import TwilioService

logger = get_logger(__name__)
router = APIRouter()

EMPTY_TWIML = "<?xml version=\"1.0\" encoding=\"UTF-8\"?><Response></Response>"


def get_dispatcher(request: Request) -> MessageDispatcher:
    return request.app.state.dispatcher


def get_twilio(request: Request) -> TwilioService:
    return request.app.state.twilio


@router.post("/webhook")
async def webhook_handler(
    request: Request,
    # Twilio sends form data
    From: Optional[str] = Form(None),
    Body: Optional[str] = Form(None),
    MessageSid: Optional[str] = Form(None),
    dispatcher: MessageDispatcher = Depends(get_dispatcher),
    twilio: TwilioService = Depends(get_twilio),
):
    """
    Unified webhook endpoint for WhatsApp messages

    Supports:
    - Twilio WhatsApp (form data); replies go out through the Twilio API
    - JSON ({"from", "body"}); replies are returned in the response body
    """
    if From is not None and Body is not None:
        logger.info(f"📱 Twilio webhook received from {From}")

        message = parse_twilio_message(
            from_number=From,
            body=Body,
            message_sid=MessageSid
        )

        async def reply(to: str, text: str):
            result = await twilio.send_message(to_phone=to, message=text)
            if not result["success"]:
                logger.error(f"❌ Failed to send Twilio message: {result.get('error')}")

        await dispatcher.dispatch(message, reply)

        # Twilio expects TwiML; replies were sent via the REST API instead
        return Response(content=EMPTY_TWIML, media_type="application/xml")

    try:
        payload = await request.json()
        message = parse_json_message(payload)
    except ValueError as e:
        logger.error(f"Failed to parse JSON payload: {e}")
        raise HTTPException(status_code=400, detail="Invalid webhook payload")

    logger.info(f"📱 JSON webhook received from {message.phone}")

    replies: List[str] = []

    async def collect(to: str, text: str):
        replies.append(text)

    result = await dispatcher.dispatch(message, collect)

    return WebhookAck(status=result["status"], replies=replies, error=result.get("error"))


@router.get("/webhook")
async def webhook_verification():
    """
    Webhook verification endpoint (for platforms that require GET verification)
    """
    return {"status": "ok", "message": "Webhook endpoint is active"}
