"""
app/services/finanzas_service.py

Purpose: FinanZas accounting API integration

- Posts income to /entradas and expenses to /saidas
- Passes the linked user id as the userId query parameter
- Maps transport and HTTP failures to user-facing messages
- Single attempt per user action (no retries)
"""

from typing import Optional

import httpx

from app.core.config import settings
from app.core.logging import get_logger, LogContext
from app.flow.states import TransactionKind
from app.schemas.transaction import SubmissionResult, TransactionPayload
from utils.constants import (
    API_BAD_REQUEST_MESSAGE,
    API_CONNECTION_REFUSED_MESSAGE,
    API_NOT_FOUND_MESSAGE,
    API_UNKNOWN_ERROR_MESSAGE,
    EXPENSE_ENDPOINT,
    EXPENSE_LABEL,
    INCOME_ENDPOINT,
    INCOME_LABEL,
    TRANSACTION_ERROR_PREFIX,
    TRANSACTION_SUCCESS_MESSAGE,
)
from utils.money_utils import format_brl

logger = get_logger(__name__)

ENDPOINTS = {
    TransactionKind.INCOME: INCOME_ENDPOINT,
    TransactionKind.EXPENSE: EXPENSE_ENDPOINT,
}

LABELS = {
    TransactionKind.INCOME: INCOME_LABEL,
    TransactionKind.EXPENSE: EXPENSE_LABEL,
}


class FinanZasService:
    """
    Client for the FinanZas REST API.
    """

    def __init__(self, base_url: Optional[str] = None, client: Optional[httpx.AsyncClient] = None):
        self.base_url = (base_url or settings.FINANZAS_API_BASE_URL).rstrip("/")
        # Transport defaults apply: no custom timeout
        self._client = client or httpx.AsyncClient(base_url=self.base_url)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def submit_transaction(
        self,
        kind: TransactionKind,
        payload: TransactionPayload,
        account_id: str
    ) -> SubmissionResult:
        """
        Registers one transaction in FinanZas.

        Args:
            kind: Income or expense
            payload: Request body
            account_id: Linked FinanZas user id

        Returns:
            SubmissionResult with the reply to show the user
        """
        endpoint = ENDPOINTS[kind]

        with LogContext(account_id=account_id, kind=kind.value):
            try:
                logger.info(f"📤 POST {endpoint} for user {account_id}")

                response = await self._client.post(
                    endpoint,
                    params={"userId": account_id},
                    json=payload.model_dump(mode="json"),
                )
                response.raise_for_status()

            except httpx.HTTPStatusError as e:
                status_code = e.response.status_code
                logger.error(f"❌ FinanZas API error: {status_code} - {e.response.text}")

                if status_code == 404:
                    return self._failure(API_NOT_FOUND_MESSAGE, "NOT_FOUND", status_code)
                if status_code == 400:
                    return self._failure(API_BAD_REQUEST_MESSAGE, "BAD_REQUEST", status_code)
                return self._failure(API_UNKNOWN_ERROR_MESSAGE, "UNKNOWN", status_code)

            except httpx.ConnectError as e:
                logger.error(f"❌ FinanZas API unreachable at {self.base_url}: {e}")
                return self._failure(API_CONNECTION_REFUSED_MESSAGE, "CONNECTION_REFUSED")

            except httpx.HTTPError as e:
                logger.error(f"❌ Error communicating with FinanZas API: {e!r}")
                return self._failure(API_UNKNOWN_ERROR_MESSAGE, "UNKNOWN")

            logger.info(f"✅ {LABELS[kind]} registered ({response.status_code})")

            return SubmissionResult(
                success=True,
                message=TRANSACTION_SUCCESS_MESSAGE.format(
                    label=LABELS[kind],
                    amount=format_brl(payload.valor),
                    description=payload.descricao,
                ),
                status_code=response.status_code,
            )

    @staticmethod
    def _failure(reason: str, error_code: str, status_code: Optional[int] = None) -> SubmissionResult:
        return SubmissionResult(
            success=False,
            message=f"{TRANSACTION_ERROR_PREFIX}{reason}",
            error_code=error_code,
            status_code=status_code,
        )
