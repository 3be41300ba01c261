"""View models for the dashboard, analytics and budget screens.

Each builder is a pure function of a complete ``RecordSnapshot`` and an explicit
``PeriodSelection``; nothing is cached between calls.
"""

from dataclasses import dataclass
from datetime import date

from finance_app.analytics.budgets import BudgetReconciliation, reconcile_budgets
from finance_app.analytics.categories import CategoryTotal, spend_by_category
from finance_app.analytics.period import (
    PeriodSelection,
    budget_period,
    filter_budgets,
    filter_transactions,
    months_present,
    selected_month_keys,
    years_present,
)
from finance_app.analytics.summary import PeriodSummary, SpendingMetrics, spending_metrics, summarize
from finance_app.analytics.timeseries import MonthlyTotals, monthly_series
from finance_app.client.snapshot import RecordSnapshot
from finance_app.core.models import Budget, Category, Transaction
from finance_app.core.utils import month_key

RECENT_TRANSACTIONS = 5


@dataclass(frozen=True)
class DashboardView:
    """Summary cards, overview chart, category chart and recent activity."""

    selection: PeriodSelection
    years: list[int]
    months: list[int]
    summary: PeriodSummary
    category_spend: list[CategoryTotal]
    monthly: list[MonthlyTotals]
    recent_transactions: list[Transaction]


@dataclass(frozen=True)
class AnalyticsView:
    """Key metrics and charts for the analytics screen."""

    selection: PeriodSelection
    years: list[int]
    months: list[int]
    summary: PeriodSummary
    metrics: SpendingMetrics
    category_spend: list[CategoryTotal]
    monthly: list[MonthlyTotals]


@dataclass(frozen=True)
class BudgetView:
    """Budgets of the selected months reconciled against their spend."""

    selection: PeriodSelection
    years: list[int]
    months: list[int]
    month_keys: list[str]
    budgets: list[Budget]
    reconciliation: list[BudgetReconciliation]
    available_categories: list[Category]


def recent_transactions(transactions: tuple[Transaction, ...], limit: int = RECENT_TRANSACTIONS) -> list[Transaction]:
    """Latest transactions by date, regardless of the selected period."""
    return sorted(transactions, key=lambda t: (t.date, t.created_at), reverse=True)[:limit]


def build_dashboard(
    snapshot: RecordSnapshot, selection: PeriodSelection, today: date | None = None
) -> DashboardView:
    """Compute the dashboard for the selected period."""
    transactions = filter_transactions(snapshot.transactions, selection, today)
    budgets = filter_budgets(snapshot.budgets, selection, today)
    return DashboardView(
        selection=selection,
        years=years_present(snapshot.transactions),
        months=months_present(snapshot.transactions, selection.year),
        summary=summarize(transactions, budgets),
        category_spend=spend_by_category(transactions, snapshot.categories),
        monthly=monthly_series(transactions, selection.sorted_months or None),
        recent_transactions=recent_transactions(snapshot.transactions),
    )


def build_analytics(
    snapshot: RecordSnapshot, selection: PeriodSelection, today: date | None = None
) -> AnalyticsView:
    """Compute the analytics screen for the selected period."""
    transactions = filter_transactions(snapshot.transactions, selection, today)
    return AnalyticsView(
        selection=selection,
        years=years_present(snapshot.transactions),
        months=months_present(snapshot.transactions, selection.year),
        summary=summarize(transactions),
        metrics=spending_metrics(transactions, selection),
        category_spend=spend_by_category(transactions, snapshot.categories),
        monthly=monthly_series(transactions, selection.sorted_months or None),
    )


def build_budget_view(snapshot: RecordSnapshot, selection: PeriodSelection) -> BudgetView:
    """Compute the budget screen for the selected months.

    Budgets may be planned ahead, so future months of the running year stay visible here. Without
    an explicit month selection every month that has a budget in the selected year is shown.
    """
    months = months_present(snapshot.budgets, selection.year, budget_period)
    keys = selected_month_keys(selection, months)
    budgets = [b for b in snapshot.budgets if b.month in keys]
    transactions = [t for t in snapshot.transactions if month_key(t.date) in keys]
    taken = {b.category for b in budgets if keys and b.month == keys[0]}
    return BudgetView(
        selection=selection,
        years=years_present(snapshot.budgets, budget_period),
        months=months,
        month_keys=keys,
        budgets=budgets,
        reconciliation=reconcile_budgets(budgets, transactions, snapshot.categories),
        available_categories=[c for c in snapshot.categories if c.name not in taken],
    )
