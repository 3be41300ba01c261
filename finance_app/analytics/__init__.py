"""Analytics package: period filtering and the budget-vs-actual aggregation pipeline."""

from .budgets import BudgetReconciliation, reconcile_budgets  # noqa: F401
from .categories import CategoryTotal, Matched, Unmatched, match_category, spend_by_category  # noqa: F401
from .period import PeriodSelection, filter_budgets, filter_transactions  # noqa: F401
from .summary import PeriodSummary, SpendingMetrics, spending_metrics, summarize  # noqa: F401
from .timeseries import MonthlyTotals, monthly_series  # noqa: F401
