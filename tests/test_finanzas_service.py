from datetime import date

import httpx
import pytest

from app.flow.states import TransactionKind
from app.schemas.transaction import ExpensePayload, IncomePayload

from conftest import FinanZasApiStub, make_service

UID = "A1b2C3d4E5f6G7h8I9j0K1l2M"

INCOME = IncomePayload(descricao="salário", valor=2000, data=date(2026, 10, 19), salario=True)
EXPENSE = ExpensePayload(descricao="almoço", valor=45, data=date(2026, 10, 19), tipo="variável")


@pytest.mark.asyncio
async def test_income_posts_to_entradas():
    stub = FinanZasApiStub()
    result = await make_service(stub).submit_transaction(TransactionKind.INCOME, INCOME, UID)

    assert result.success
    assert result.message == "✅ Entrada de R$ 2.000,00 (salário) registrada com sucesso no FinanZas!"

    (request,) = stub.requests
    assert request.method == "POST"
    assert request.url.path == "/api/entradas"
    assert request.url.params["userId"] == UID
    assert stub.bodies[0] == {
        "descricao": "salário",
        "valor": 2000,
        "data": "2026-10-19",
        "salario": True,
    }


@pytest.mark.asyncio
async def test_expense_posts_to_saidas():
    stub = FinanZasApiStub(status_code=200)
    result = await make_service(stub).submit_transaction(TransactionKind.EXPENSE, EXPENSE, UID)

    assert result.success
    assert "Saída de R$ 45,00 (almoço)" in result.message
    assert stub.requests[0].url.path == "/api/saidas"
    assert stub.bodies[0]["tipo"] == "variável"


@pytest.mark.asyncio
@pytest.mark.parametrize("status_code, error_code, fragment", [
    (404, "NOT_FOUND", "não foi encontrado (404)"),
    (400, "BAD_REQUEST", "Requisição inválida (400)"),
    (500, "UNKNOWN", "Erro desconhecido"),
    (401, "UNKNOWN", "Erro desconhecido"),
])
async def test_http_errors_are_mapped(status_code, error_code, fragment):
    stub = FinanZasApiStub(status_code=status_code)
    result = await make_service(stub).submit_transaction(TransactionKind.INCOME, INCOME, UID)

    assert not result.success
    assert result.error_code == error_code
    assert result.status_code == status_code
    assert result.message.startswith("❌ Ocorreu um erro: ")
    assert fragment in result.message
    assert len(stub.requests) == 1


@pytest.mark.asyncio
async def test_connection_refused():
    stub = FinanZasApiStub(error=httpx.ConnectError("[Errno 111] Connection refused"))
    result = await make_service(stub).submit_transaction(TransactionKind.EXPENSE, EXPENSE, UID)

    assert not result.success
    assert result.error_code == "CONNECTION_REFUSED"
    assert "Conexão recusada" in result.message


@pytest.mark.asyncio
async def test_other_transport_errors_are_unknown():
    stub = FinanZasApiStub(error=httpx.ReadTimeout("timed out"))
    result = await make_service(stub).submit_transaction(TransactionKind.EXPENSE, EXPENSE, UID)

    assert not result.success
    assert result.error_code == "UNKNOWN"
