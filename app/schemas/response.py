from pydantic import BaseModel, Field
from typing import Optional, Any, List


class ErrorResponse(BaseModel):
    """
    Standard error response structure.
    """
    error: str
    code: str
    details: Optional[Any] = None


class WebhookAck(BaseModel):
    """
    Body returned to JSON webhook deliveries. Carries the replies the bot
    produced so that local clients can display them.
    """
    status: str
    replies: List[str] = Field(default_factory=list)
    error: Optional[str] = None
