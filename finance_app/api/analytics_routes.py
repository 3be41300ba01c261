"""FastAPI endpoints exposing the budget-vs-actual aggregation pipeline.

Every request reads the full record set and recomputes from scratch; nothing is cached between
requests. The period is selected with ``year`` (defaults to the current year) and any number of
repeated ``month`` parameters holding 0-based month indices.
"""

from dataclasses import asdict
from datetime import date
from typing import Annotated, Literal

from fastapi import APIRouter, Depends, HTTPException, Query

from finance_app.analytics import (
    PeriodSelection,
    filter_budgets,
    filter_transactions,
    monthly_series,
    reconcile_budgets,
    spend_by_category,
    spending_metrics,
    summarize,
)
from finance_app.api.dependencies import get_budget_store, get_transaction_store
from finance_app.core.models import (
    Budget,
    BudgetStatus,
    CategorySpend,
    Metrics,
    MonthlyPoint,
    Summary,
    Transaction,
)
from finance_app.services.category_catalog import list_categories
from finance_app.services.record_store import BudgetStore, TransactionStore

router = APIRouter(prefix="/analytics", tags=["analytics"])


def get_selection(
    year: Annotated[int | None, Query(ge=1, description="Year to report on; defaults to the current year")] = None,
    month: Annotated[list[int] | None, Query(description="0-based month index, repeatable")] = None,
) -> PeriodSelection:
    """Build the period selection from the query string."""
    try:
        return PeriodSelection(date.today().year if year is None else year, frozenset(month or ()))
    except ValueError as exc:
        raise HTTPException(422, str(exc)) from exc


def load_transactions(store: TransactionStore) -> list[Transaction]:
    """Read every transaction as an API model."""
    return [Transaction.model_validate(record) for record in store.list_all()]


def load_budgets(store: BudgetStore) -> list[Budget]:
    """Read every budget as an API model."""
    return [Budget.model_validate(record) for record in store.list_all()]


@router.get(
    "/summary",
    response_model=Summary,
    summary="Income, expenses, balance and budget for a period",
)
async def period_summary(
    selection: PeriodSelection = Depends(get_selection),
    transactions: TransactionStore = Depends(get_transaction_store),
    budgets: BudgetStore = Depends(get_budget_store),
) -> object:
    """Headline totals for the selected period."""
    return summarize(
        filter_transactions(load_transactions(transactions), selection),
        filter_budgets(load_budgets(budgets), selection),
    )


@router.get(
    "/metrics",
    response_model=Metrics,
    summary="Savings rate, transaction count and average monthly spend",
)
async def period_metrics(
    selection: PeriodSelection = Depends(get_selection),
    transactions: TransactionStore = Depends(get_transaction_store),
) -> object:
    """Secondary analytics figures for the selected period."""
    return spending_metrics(filter_transactions(load_transactions(transactions), selection), selection)


@router.get(
    "/categories",
    response_model=list[CategorySpend],
    summary="Expense totals per category",
    description="Expense totals grouped by category in order of first appearance; empty groups are omitted.",
)
async def category_spend(
    selection: PeriodSelection = Depends(get_selection),
    transactions: TransactionStore = Depends(get_transaction_store),
) -> list:
    """Spending by category for the selected period."""
    return spend_by_category(filter_transactions(load_transactions(transactions), selection), list_categories())


@router.get(
    "/monthly",
    response_model=list[MonthlyPoint],
    summary="Monthly income and expenses",
    description=(
        "One point per month in ascending order. With explicit `month` parameters every selected month is "
        "present, zero-filled when empty; otherwise the months with activity are used."
    ),
)
async def monthly(
    selection: PeriodSelection = Depends(get_selection),
    transactions: TransactionStore = Depends(get_transaction_store),
) -> list:
    """Monthly time series for the selected period."""
    filtered = filter_transactions(load_transactions(transactions), selection)
    return monthly_series(filtered, selection.sorted_months or None)


@router.get(
    "/budgets",
    response_model=list[BudgetStatus],
    summary="Budget vs actual",
    description=(
        "Reconcile the budgets of the selected period against expense spend. `scope=period` (default) counts "
        "expenses within the selected period, `scope=all` counts every expense on record. With "
        "`same_month=true` each budget only counts expenses dated in its own month."
    ),
)
async def budget_status(
    selection: PeriodSelection = Depends(get_selection),
    scope: Literal["period", "all"] = "period",
    same_month: bool = False,
    transactions: TransactionStore = Depends(get_transaction_store),
    budgets: BudgetStore = Depends(get_budget_store),
) -> list[BudgetStatus]:
    """Budget reconciliation for the selected period."""
    all_transactions = load_transactions(transactions)
    spending = filter_transactions(all_transactions, selection) if scope == "period" else all_transactions
    results = reconcile_budgets(
        filter_budgets(load_budgets(budgets), selection),
        spending,
        list_categories(),
        same_month_only=same_month,
    )
    return [BudgetStatus(**asdict(result), percent_used=result.percent_used) for result in results]
