"""FastAPI endpoints for the Personal Finance Tracker API.

This module defines the CRUD routes for transactions and budgets, the static category list, and
the health check. Store errors are translated into HTTP status codes here: 404 for unknown ids,
409 for a duplicate budget, 422 for an invalid merged update.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, Query

from finance_app.api.dependencies import get_budget_store, get_transaction_store
from finance_app.core.errors import NotFoundError, RecordValidationError, UniquenessError
from finance_app.core.models import (
    MONTH_PATTERN,
    Budget,
    BudgetCreate,
    BudgetUpdate,
    Category,
    Message,
    MonthlyStat,
    Transaction,
    TransactionCreate,
    TransactionUpdate,
)
from finance_app.core.utils import get_logger
from finance_app.services.category_catalog import list_categories
from finance_app.services.record_store import BudgetStore, TransactionStore

router = APIRouter()
logger = get_logger("finance-tracker.api")

NOT_FOUND_RESPONSE = {
    "description": "Record not found.",
    "content": {"application/json": {"example": {"detail": "Transaction not found"}}},
}
DUPLICATE_BUDGET_RESPONSE = {
    "description": "A budget for this category and month already exists.",
    "content": {"application/json": {"example": {"detail": "A budget for 'Travel' in 2024-01 already exists"}}},
}
MonthPath = Annotated[str, Path(pattern=MONTH_PATTERN, description="Month in YYYY-MM format", examples=["2024-01"])]


@router.get(
    "/health",
    summary="Health check",
    description="Simple health check endpoint. Returns status ok.",
    response_description="Status ok.",
    responses={200: {"description": "API is healthy.", "content": {"application/json": {"example": {"status": "ok"}}}}},
)
async def health() -> dict:
    """Health check endpoint."""
    return {"status": "ok"}


@router.get(
    "/categories",
    response_model=list[Category],
    summary="List spending categories",
    description="Return the fixed reference list of categories with their display colour and icon.",
)
async def get_categories() -> list[Category]:
    """Return the reference categories."""
    return list_categories()


# --- Transactions ---


@router.get(
    "/transactions",
    response_model=list[Transaction],
    summary="List transactions",
    description="Return every transaction, newest date first.",
)
async def list_transactions(store: TransactionStore = Depends(get_transaction_store)) -> list:
    """List all transactions."""
    return store.list_all()


@router.get(
    "/transactions/month/{month}",
    response_model=list[Transaction],
    summary="List transactions for a month",
    description="Return the transactions dated within the given `YYYY-MM` month, newest first.",
)
async def list_transactions_by_month(
    month: MonthPath, store: TransactionStore = Depends(get_transaction_store)
) -> list:
    """List the transactions of one month."""
    return store.list_by_month(month)


@router.get(
    "/transactions/stats/monthly",
    response_model=list[MonthlyStat],
    summary="Monthly expense statistics",
    description="Expense total and transaction count per category for the given `YYYY-MM` month.",
)
async def monthly_stats(
    month: str = Query(pattern=MONTH_PATTERN, description="Month in YYYY-MM format"),
    store: TransactionStore = Depends(get_transaction_store),
) -> list[MonthlyStat]:
    """Per-category expense statistics for one month."""
    return store.monthly_stats(month)


@router.get(
    "/transactions/{transaction_id}",
    response_model=Transaction,
    summary="Get a transaction",
    responses={404: NOT_FOUND_RESPONSE},
)
async def get_transaction(transaction_id: int, store: TransactionStore = Depends(get_transaction_store)) -> object:
    """Fetch one transaction by id."""
    try:
        return store.get(transaction_id)
    except NotFoundError as exc:
        raise HTTPException(404, str(exc)) from exc


@router.post(
    "/transactions",
    response_model=Transaction,
    status_code=201,
    summary="Create a transaction",
    description=(
        "Create an income or expense transaction.\n\n"
        "**Request body:** `amount` (>= 0), `description` (1-200 chars), `date` (YYYY-MM-DD), "
        "`category`, `type` (`expense` or `income`).\n\n"
        "**Response:**\n"
        "- 201 Created: the stored transaction.\n"
        "- 422 Unprocessable Entity: a field is missing or out of range."
    ),
)
async def create_transaction(
    payload: TransactionCreate, store: TransactionStore = Depends(get_transaction_store)
) -> object:
    """Create a transaction."""
    logger.info(f"Received transaction: {payload.type} {payload.amount} on {payload.date}")
    return store.create(payload)


@router.put(
    "/transactions/{transaction_id}",
    response_model=Transaction,
    summary="Update a transaction",
    description="Replace the supplied fields of a transaction; omitted fields keep their value.",
    responses={404: NOT_FOUND_RESPONSE},
)
async def update_transaction(
    transaction_id: int, payload: TransactionUpdate, store: TransactionStore = Depends(get_transaction_store)
) -> object:
    """Partially update a transaction."""
    try:
        return store.update(transaction_id, payload)
    except NotFoundError as exc:
        raise HTTPException(404, str(exc)) from exc
    except RecordValidationError as exc:
        raise HTTPException(422, str(exc)) from exc


@router.delete(
    "/transactions/{transaction_id}",
    response_model=Message,
    summary="Delete a transaction",
    responses={404: NOT_FOUND_RESPONSE},
)
async def delete_transaction(transaction_id: int, store: TransactionStore = Depends(get_transaction_store)) -> dict:
    """Delete a transaction."""
    try:
        store.delete(transaction_id)
    except NotFoundError as exc:
        raise HTTPException(404, str(exc)) from exc
    return {"message": "Transaction deleted successfully"}


# --- Budgets ---


@router.get(
    "/budgets",
    response_model=list[Budget],
    summary="List budgets",
    description="Return every budget, latest month first and then by category.",
)
async def list_budgets(store: BudgetStore = Depends(get_budget_store)) -> list:
    """List all budgets."""
    return store.list_all()


@router.get(
    "/budgets/month/{month}",
    response_model=list[Budget],
    summary="List budgets for a month",
)
async def list_budgets_by_month(month: MonthPath, store: BudgetStore = Depends(get_budget_store)) -> list:
    """List the budgets of one month."""
    return store.list_by_month(month)


@router.get(
    "/budgets/{budget_id}",
    response_model=Budget,
    summary="Get a budget",
    responses={404: NOT_FOUND_RESPONSE},
)
async def get_budget(budget_id: int, store: BudgetStore = Depends(get_budget_store)) -> object:
    """Fetch one budget by id."""
    try:
        return store.get(budget_id)
    except NotFoundError as exc:
        raise HTTPException(404, str(exc)) from exc


@router.post(
    "/budgets",
    response_model=Budget,
    status_code=201,
    summary="Create a budget",
    description=(
        "Create a monthly budget for a category.\n\n"
        "**Response:**\n"
        "- 201 Created: the stored budget.\n"
        "- 409 Conflict: a budget for the same category and month already exists.\n"
        "- 422 Unprocessable Entity: a field is missing or out of range."
    ),
    responses={409: DUPLICATE_BUDGET_RESPONSE},
)
async def create_budget(payload: BudgetCreate, store: BudgetStore = Depends(get_budget_store)) -> object:
    """Create a budget."""
    try:
        return store.create(payload)
    except UniquenessError as exc:
        raise HTTPException(409, str(exc)) from exc


@router.put(
    "/budgets/{budget_id}",
    response_model=Budget,
    summary="Update a budget",
    description="Replace the supplied fields of a budget; omitted fields keep their value.",
    responses={404: NOT_FOUND_RESPONSE, 409: DUPLICATE_BUDGET_RESPONSE},
)
async def update_budget(
    budget_id: int, payload: BudgetUpdate, store: BudgetStore = Depends(get_budget_store)
) -> object:
    """Partially update a budget."""
    try:
        return store.update(budget_id, payload)
    except NotFoundError as exc:
        raise HTTPException(404, str(exc)) from exc
    except UniquenessError as exc:
        raise HTTPException(409, str(exc)) from exc
    except RecordValidationError as exc:
        raise HTTPException(422, str(exc)) from exc


@router.delete(
    "/budgets/{budget_id}",
    response_model=Message,
    summary="Delete a budget",
    responses={404: NOT_FOUND_RESPONSE},
)
async def delete_budget(budget_id: int, store: BudgetStore = Depends(get_budget_store)) -> dict:
    """Delete a budget."""
    try:
        store.delete(budget_id)
    except NotFoundError as exc:
        raise HTTPException(404, str(exc)) from exc
    return {"message": "Budget deleted successfully"}
