"""
app/services/twilio_service.py

Purpose: Twilio WhatsApp message sending

- Sends WhatsApp text replies via the Twilio REST API
- Reports failures as result dicts instead of raising
"""

import httpx
from typing import Dict, Any, Optional
from app.core.config import settings
from app.core.logging import get_logger

logger = get_logger(__name__)


class TwilioService:
    """Service for sending WhatsApp messages via Twilio"""

    def __init__(
        self,
        account_sid: Optional[str] = None,
        auth_token: Optional[str] = None,
        whatsapp_number: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.account_sid = account_sid or settings.TWILIO_ACCOUNT_SID
        self.auth_token = auth_token or settings.TWILIO_AUTH_TOKEN
        self.whatsapp_number = whatsapp_number or settings.TWILIO_WHATSAPP_NUMBER  # whatsapp:+14155238886
        self.base_url = f"https://api.twilio.com/2010-04-01/Accounts/{self.account_sid}"
        self._transport = transport

    async def send_message(self, to_phone: str, message: str) -> Dict[str, Any]:
        """
        Sends a WhatsApp message via Twilio

        Args:
            to_phone: Recipient phone (+5511999999999)
            message: Message text

        Returns:
            {
                "success": True/False,
                "message_sid": "SMxxx...",
                "error": "Optional error message"
            }
        """
        if not self.is_configured():
            logger.error("Twilio is not configured, reply dropped")
            return {"success": False, "error": "Twilio not configured"}

        # Ensure phone has whatsapp: prefix
        if not to_phone.startswith("whatsapp:"):
            to_phone = f"whatsapp:{to_phone}"

        data = {
            "From": self.whatsapp_number,
            "To": to_phone,
            "Body": message
        }

        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.post(
                    f"{self.base_url}/Messages.json",
                    data=data,
                    auth=(self.account_sid, self.auth_token),
                    timeout=10.0
                )

            if response.status_code in [200, 201]:
                try:
                    result = response.json()
                except ValueError:
                    logger.error(f"❌ Twilio API returned a non-JSON body: {response.text[:200]}")
                    return {
                        "success": False,
                        "error": "Invalid Twilio API response"
                    }

                logger.info(f"✅ Message sent: SID={result.get('sid')}")

                return {
                    "success": True,
                    "message_sid": result.get("sid"),
                    "status": result.get("status")
                }

            logger.error(f"❌ Twilio API error: {response.status_code} - {response.text}")
            return {
                "success": False,
                "error": f"Twilio API error: {response.status_code}"
            }

        except httpx.TimeoutException:
            logger.error("Twilio API timeout")
            return {
                "success": False,
                "error": "Twilio API timeout"
            }
        except httpx.HTTPError as e:
            logger.error(f"Error sending Twilio message: {e}", exc_info=True)
            return {
                "success": False,
                "error": str(e)
            }

    def is_configured(self) -> bool:
        """Check if Twilio is properly configured"""
        return bool(
            self.account_sid
            and self.auth_token
            and self.whatsapp_number
        )


# Singleton instance
twilio_service = TwilioService()
