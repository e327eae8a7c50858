from decimal import Decimal

import pytest

from utils.money_utils import format_brl
from utils.validation_utils import normalize_chat_id, parse_amount, validate_account_id


def test_account_id_of_25_chars_is_valid():
    assert validate_account_id("A1b2C3d4E5f6G7h8I9j0K1l2M")


def test_account_id_of_exactly_20_chars_is_valid():
    assert validate_account_id("a" * 20)


@pytest.mark.parametrize("token", [
    "",
    "A1B2C3D4E5",  # 10 chars
    "a" * 19,
    "A1b2C3d4E5f6G7h8I9j0-K1l2M",
    "A1b2C3d4E5f6G7h8I9j0 K1l2M",
    "Ábcdefghijklmnopqrstu",
])
def test_invalid_account_ids(token):
    assert not validate_account_id(token)


def test_parse_amount_accepts_comma_separator():
    assert parse_amount("100,50") == Decimal("100.50")


def test_parse_amount_accepts_largest_value():
    assert parse_amount("999999999999,99") == Decimal("999999999999.99")
    assert parse_amount("1000000000000") is None


@pytest.mark.parametrize("token", [
    None, "", "0", "-1", "x10", "NaN",
    "1e30", "1E3", "1e-400", "1.000,50", "10,5,0",
    "1" + "0" * 28,  # beyond the largest accepted value
    "0." + "0" * 400 + "1",  # rounds to zero as a float
])
def test_parse_amount_rejects(token):
    assert parse_amount(token) is None


@pytest.mark.parametrize("sender, expected", [
    ("whatsapp:+5511999990000", "+5511999990000"),
    ("+5511999990000", "+5511999990000"),
    ("  WhatsApp:+55119 ", "+55119"),
    ("", ""),
])
def test_normalize_chat_id(sender, expected):
    assert normalize_chat_id(sender) == expected


@pytest.mark.parametrize("amount, expected", [
    (Decimal("2000"), "R$ 2.000,00"),
    (45, "R$ 45,00"),
    (100.5, "R$ 100,50"),
    (Decimal("1234567.891"), "R$ 1.234.567,89"),
    (Decimal("0.01"), "R$ 0,01"),
])
def test_format_brl(amount, expected):
    assert format_brl(amount) == expected


def test_format_brl_beyond_default_precision():
    assert format_brl(Decimal("1e30")) == "R$ 1" + ".000" * 10 + ",00"
    assert format_brl(1e30) == "R$ 1" + ".000" * 10 + ",00"
