"""
app/schemas/webhook.py

Purpose: WhatsApp webhook payload schemas and parsers

- Validates incoming messages from Twilio and plain JSON clients
- Normalizes different formats into UnifiedMessage
- Ensures predictable request handling
"""

from pydantic import BaseModel, Field
from typing import Optional, Literal
from datetime import datetime, timezone

from utils.validation_utils import normalize_chat_id


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UnifiedMessage(BaseModel):
    """
    Normalized message format for internal processing
    Works with both Twilio and JSON deliveries
    """
    phone: str = Field(..., description="Sender chat identity, without transport prefix")
    text: str = Field(..., description="Message text content")
    message_id: str = Field(..., description="Unique message identifier")
    platform: Literal["twilio", "json"] = Field(..., description="Source platform")

    class Config:
        json_schema_extra = {
            "example": {
                "phone": "+5511999999999",
                "text": "oi",
                "message_id": "SM1234567890",
                "platform": "twilio"
            }
        }


class JsonInboundMessage(BaseModel):
    """
    JSON webhook body used by local clients and other gateways.
    """
    sender: str = Field(..., alias="from", min_length=1)
    body: str = ""
    message_id: Optional[str] = Field(default=None, alias="id")

    class Config:
        populate_by_name = True


def parse_twilio_message(
    from_number: str,
    body: str,
    message_sid: Optional[str] = None
) -> UnifiedMessage:
    """
    Parses Twilio WhatsApp webhook payload

    Twilio format (form data):
    - From: whatsapp:+5511999999999
    - Body: message text
    - MessageSid: SM...
    """
    phone = normalize_chat_id(from_number)

    return UnifiedMessage(
        phone=phone,
        text=body,
        message_id=message_sid or f"twilio_{_utcnow().timestamp()}",
        platform="twilio"
    )


def parse_json_message(payload: dict) -> UnifiedMessage:
    """
    Parses a JSON webhook payload

    Format:
    {
        "from": "+5511999999999",
        "body": "oi",
        "id": "optional-message-id"
    }
    """
    inbound = JsonInboundMessage.model_validate(payload)
    phone = normalize_chat_id(inbound.sender)

    return UnifiedMessage(
        phone=phone,
        text=inbound.body,
        message_id=inbound.message_id or f"json_{_utcnow().timestamp()}",
        platform="json"
    )
