"""
app/flow/parser.py

Purpose: Transaction command parsing

- Splits "<entrada|saida> <value> <description...>" into its parts
- Validates the value (via utils)
- Infers salary / fixed-expense flags from the description
- Builds the FinanZas API payload
"""

from datetime import date
from typing import Optional

from app.core.exceptions import InvalidAmountError, UnknownCommandError
from app.flow.states import TransactionKind
from app.schemas.transaction import (
    ExpensePayload,
    IncomePayload,
    ParsedTransaction,
    TransactionPayload,
)
from utils.constants import (
    DEFAULT_EXPENSE_DESCRIPTION,
    DEFAULT_INCOME_DESCRIPTION,
    EXPENSE_FIXED_MARKER,
    EXPENSE_KEYWORD,
    EXPENSE_TYPE_FIXED,
    EXPENSE_TYPE_VARIABLE,
    INCOME_KEYWORD,
    INCOME_SALARY_MARKERS,
)
from utils.time_utils import submission_date
from utils.validation_utils import parse_amount

COMMAND_KINDS = {
    INCOME_KEYWORD: TransactionKind.INCOME,
    EXPENSE_KEYWORD: TransactionKind.EXPENSE,
}

KIND_KEYWORDS = {kind: keyword for keyword, kind in COMMAND_KINDS.items()}

DEFAULT_DESCRIPTIONS = {
    TransactionKind.INCOME: DEFAULT_INCOME_DESCRIPTION,
    TransactionKind.EXPENSE: DEFAULT_EXPENSE_DESCRIPTION,
}


def command_text(kind: TransactionKind, body: str) -> str:
    """Prefixes a bare '<value> <description>' body with the command keyword."""
    return f"{KIND_KEYWORDS[kind]} {body}"


def parse_transaction_command(text: str, expected_kind: Optional[TransactionKind] = None) -> ParsedTransaction:
    """
    Parses a transaction command.

    The whole text is lower-cased before splitting, so descriptions reach
    the API in lower case.

    Args:
        text: Command such as "entrada 2000 salário"
        expected_kind: If given, the command keyword must match it

    Returns:
        ParsedTransaction

    Raises:
        UnknownCommandError: Keyword is not entrada/saida (or not the expected one)
        InvalidAmountError: Value is missing, not a number, or not positive
    """
    parts = text.lower().split()
    command = parts[0] if parts else ""
    value_token = parts[1] if len(parts) > 1 else None
    description = " ".join(parts[2:])

    kind = COMMAND_KINDS.get(command)
    if kind is None or (expected_kind is not None and kind != expected_kind):
        raise UnknownCommandError(f"Unknown transaction command: {command!r}")

    amount = parse_amount(value_token)
    if amount is None:
        raise InvalidAmountError(f"Invalid amount: {value_token!r}", details={"value": value_token})

    return ParsedTransaction(
        kind=kind,
        amount=amount,
        description=description or DEFAULT_DESCRIPTIONS[kind],
    )


# Heuristics below guess flags the user never states explicitly. They match
# substrings only, so "prefixo" also counts as "fixo".

def classify_income(description: str) -> bool:
    """Returns True when an income looks like salary or other recurring income."""
    lowered = description.lower()
    return any(marker in lowered for marker in INCOME_SALARY_MARKERS)


def classify_expense(description: str) -> str:
    """Returns "fixa" for fixed expenses and "variável" otherwise."""
    if EXPENSE_FIXED_MARKER in description.lower():
        return EXPENSE_TYPE_FIXED
    return EXPENSE_TYPE_VARIABLE


def build_payload(parsed: ParsedTransaction, today: Optional[date] = None) -> TransactionPayload:
    """
    Builds the FinanZas API body for a parsed transaction.

    Args:
        parsed: Validated command
        today: Transaction date (defaults to the submission day)
    """
    today = today or submission_date()

    if parsed.kind == TransactionKind.INCOME:
        return IncomePayload(
            descricao=parsed.description,
            valor=float(parsed.amount),
            data=today,
            salario=classify_income(parsed.description),
        )

    return ExpensePayload(
        descricao=parsed.description,
        valor=float(parsed.amount),
        data=today,
        tipo=classify_expense(parsed.description),
    )
