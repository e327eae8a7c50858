"""
app/schemas/transaction.py

Purpose: Transaction schemas

- ParsedTransaction: what the user typed, validated
- IncomePayload / ExpensePayload: JSON bodies of the FinanZas API
- SubmissionResult: outcome of one submission attempt
"""

from datetime import date
from decimal import Decimal
from typing import Literal, Optional, Union

from pydantic import BaseModel, Field

from app.flow.states import TransactionKind


class ParsedTransaction(BaseModel):
    kind: TransactionKind
    amount: Decimal = Field(..., gt=0)
    description: str


class IncomePayload(BaseModel):
    """
    Body of POST /entradas
    """
    descricao: str
    valor: float = Field(..., gt=0)
    data: date
    salario: bool = False


class ExpensePayload(BaseModel):
    """
    Body of POST /saidas
    """
    descricao: str
    valor: float = Field(..., gt=0)
    data: date
    tipo: Literal["fixa", "variável"] = "variável"


TransactionPayload = Union[IncomePayload, ExpensePayload]


class SubmissionResult(BaseModel):
    """
    Outcome of a submission. ``message`` is ready to be sent to the user.
    """
    success: bool
    message: str
    error_code: Optional[str] = None
    status_code: Optional[int] = None
