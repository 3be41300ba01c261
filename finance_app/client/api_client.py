"""HTTP client for the Personal Finance Tracker API.

Transport failures surface as ``ConnectivityError``; error responses are mapped back onto the
domain errors the server raised (404 -> ``NotFoundError``, 409 -> ``UniquenessError``,
400/422 -> ``RecordValidationError``).
"""

from typing import Any

import httpx

from finance_app.core.errors import ConnectivityError, NotFoundError, RecordValidationError, UniquenessError
from finance_app.core.models import (
    Budget,
    BudgetCreate,
    BudgetUpdate,
    Category,
    Transaction,
    TransactionCreate,
    TransactionUpdate,
)
from finance_app.core.settings import Settings, get_settings
from finance_app.core.utils import get_logger

logger = get_logger("finance-tracker.client")

HTTP_BAD_REQUEST = 400
HTTP_NOT_FOUND = 404
HTTP_CONFLICT = 409
HTTP_UNPROCESSABLE = 422


def _detail(response: httpx.Response) -> str:
    """Extract the error detail FastAPI puts in the response body."""
    try:
        return str(response.json().get("detail", response.reason_phrase))
    except ValueError:
        return response.text or response.reason_phrase


class FinanceApiClient:
    """Typed access to the transactions, budgets and categories endpoints."""

    def __init__(self, http: httpx.Client | None = None, settings: Settings | None = None) -> None:
        """Initialize the client with an httpx client, or build one from the settings."""
        settings = settings or get_settings()
        self.http = http or httpx.Client(base_url=settings.api_base_url, timeout=settings.client_timeout)

    def _request(self, method: str, path: str, *, record: tuple[str, int] | None = None, **kwargs: Any) -> Any:
        """Send a request and decode the JSON body, raising domain errors on failure."""
        try:
            response = self.http.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.error(f"{method} {path} failed: {exc}")
            msg = f"API unreachable: {exc}"
            raise ConnectivityError(msg) from exc
        if response.is_success:
            return response.json()
        detail = _detail(response)
        logger.warning(f"{method} {path} returned {response.status_code}: {detail}")
        if response.status_code == HTTP_NOT_FOUND and record is not None:
            raise NotFoundError(*record)
        if response.status_code == HTTP_CONFLICT:
            body = kwargs.get("json") or {}
            raise UniquenessError(body.get("category"), body.get("month"), detail)
        if response.status_code in (HTTP_BAD_REQUEST, HTTP_UNPROCESSABLE):
            raise RecordValidationError(detail)
        msg = f"{method} {path} failed with status {response.status_code}: {detail}"
        raise ConnectivityError(msg)

    # Transactions

    def list_transactions(self) -> list[Transaction]:
        """Fetch every transaction."""
        return [Transaction.model_validate(item) for item in self._request("GET", "/transactions")]

    def create_transaction(self, data: TransactionCreate) -> Transaction:
        """Create a transaction."""
        payload = data.model_dump(mode="json")
        return Transaction.model_validate(self._request("POST", "/transactions", json=payload))

    def update_transaction(self, transaction_id: int, changes: TransactionUpdate) -> Transaction:
        """Send a partial update for a transaction."""
        payload = changes.model_dump(mode="json", exclude_unset=True)
        record = ("Transaction", transaction_id)
        return Transaction.model_validate(
            self._request("PUT", f"/transactions/{transaction_id}", json=payload, record=record)
        )

    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction."""
        self._request("DELETE", f"/transactions/{transaction_id}", record=("Transaction", transaction_id))

    # Budgets

    def list_budgets(self) -> list[Budget]:
        """Fetch every budget."""
        return [Budget.model_validate(item) for item in self._request("GET", "/budgets")]

    def create_budget(self, data: BudgetCreate) -> Budget:
        """Create a budget."""
        return Budget.model_validate(self._request("POST", "/budgets", json=data.model_dump(mode="json")))

    def update_budget(self, budget_id: int, changes: BudgetUpdate) -> Budget:
        """Send a partial update for a budget."""
        payload = changes.model_dump(mode="json", exclude_unset=True)
        return Budget.model_validate(
            self._request("PUT", f"/budgets/{budget_id}", json=payload, record=("Budget", budget_id))
        )

    def delete_budget(self, budget_id: int) -> None:
        """Delete a budget."""
        self._request("DELETE", f"/budgets/{budget_id}", record=("Budget", budget_id))

    # Categories

    def list_categories(self) -> list[Category]:
        """Fetch the reference categories."""
        return [Category.model_validate(item) for item in self._request("GET", "/categories")]

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self.http.close()
