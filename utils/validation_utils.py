"""
utils/validation_utils.py

Purpose: Input validation

- FinanZas user id (link token) validation
- Amount parsing with comma or dot decimal separator
- Chat identity normalization
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Optional

from utils.constants import ACCOUNT_ID_PATTERN, AMOUNT_PATTERN, MAX_AMOUNT

_ACCOUNT_ID_RE = re.compile(ACCOUNT_ID_PATTERN)
_AMOUNT_RE = re.compile(AMOUNT_PATTERN)


def validate_account_id(account_id: str) -> bool:
    """
    Validates a FinanZas user id sent with CONECTAR.

    The id is case-sensitive: ASCII letters and digits, at least 20 of them.

    Args:
        account_id: Token provided by the user

    Returns:
        True if valid, False otherwise
    """
    if not account_id:
        return False

    return bool(_ACCOUNT_ID_RE.fullmatch(account_id))


def parse_amount(value: Optional[str]) -> Optional[Decimal]:
    """
    Parses a transaction value typed in a chat message.

    Accepts plain digits with an optional decimal part; a comma is accepted
    as decimal separator ("100,50" -> 100.50). Exponent notation and
    thousands separators are refused.

    Args:
        value: Raw value token

    Returns:
        Positive Decimal, or None if the token is missing, malformed, zero,
        above MAX_AMOUNT or too small to survive conversion to float
    """
    if not value:
        return None

    normalized = value.strip()
    if not _AMOUNT_RE.fullmatch(normalized):
        return None

    try:
        amount = Decimal(normalized.replace(",", ".", 1))
    except InvalidOperation:
        return None

    # The accounting API receives the value as a JSON number
    if amount <= 0 or amount > MAX_AMOUNT or float(amount) <= 0:
        return None

    return amount


def normalize_chat_id(sender: str) -> str:
    """
    Strips the transport prefix from a sender address.

    Example: "whatsapp:+5511999999999" -> "+5511999999999"
    """
    if not sender:
        return ""

    sender = sender.strip()
    if sender.lower().startswith("whatsapp:"):
        sender = sender[len("whatsapp:"):]

    return sender
