"""Budget-vs-actual reconciliation.

Each budget is compared with the expense spend recorded under the same category name. Callers
choose the spending set explicitly: pass the period-filtered transactions for a period view, or
the full record set for an all-time view. ``same_month_only`` additionally restricts each budget
to expenses dated in the budget's own month.
"""

from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from finance_app.analytics.categories import Matched, category_index, match_category
from finance_app.core.models import BudgetCreate, Category, TransactionCreate
from finance_app.core.utils import month_key

ZERO = Decimal(0)


@dataclass(frozen=True)
class BudgetReconciliation:
    """A budget together with what has been spent against it."""

    budget_id: int | None
    category: str
    label: str
    color: str | None
    month: str
    amount: Decimal
    spent: Decimal
    remaining: Decimal
    over_budget: bool

    @property
    def percent_used(self) -> float:
        """Share of the budget spent, in percent."""
        if self.amount == 0:
            return 0.0 if self.spent == 0 else 100.0
        return round(float(self.spent / self.amount * 100), 1)


def expense_totals(
    transactions: Iterable[TransactionCreate], *, by_month: bool = False
) -> dict[tuple[str, str | None], Decimal]:
    """Expense sums keyed by ``(category, month)``; month is ``None`` unless ``by_month``."""
    totals: dict[tuple[str, str | None], Decimal] = defaultdict(lambda: ZERO)
    for transaction in transactions:
        if transaction.type != "expense":
            continue
        month = month_key(transaction.date) if by_month else None
        totals[transaction.category, month] += transaction.amount
    return totals


def reconcile_budget(
    budget: BudgetCreate, spent: Decimal, categories: Iterable[Category] = ()
) -> BudgetReconciliation:
    """Classify a single budget given the amount spent against it."""
    match = match_category(budget.category, category_index(categories))
    return BudgetReconciliation(
        budget_id=getattr(budget, "id", None),
        category=budget.category,
        label=match.label,
        color=match.category.color if isinstance(match, Matched) else None,
        month=budget.month,
        amount=budget.amount,
        spent=spent,
        remaining=max(ZERO, budget.amount - spent),
        over_budget=spent > budget.amount,
    )


def reconcile_budgets(
    budgets: Iterable[BudgetCreate],
    transactions: Iterable[TransactionCreate],
    categories: Iterable[Category] = (),
    *,
    same_month_only: bool = False,
) -> list[BudgetReconciliation]:
    """Reconcile every budget against the expense spend in ``transactions``.

    Neither budgets nor transactions are modified.
    """
    categories = list(categories)
    totals = expense_totals(transactions, by_month=same_month_only)
    results = []
    for budget in budgets:
        key = (budget.category, budget.month if same_month_only else None)
        results.append(reconcile_budget(budget, totals.get(key, ZERO), categories))
    return results


def over_budget(reconciliations: Iterable[BudgetReconciliation]) -> list[BudgetReconciliation]:
    """The reconciled budgets whose spend exceeds their amount."""
    return [r for r in reconciliations if r.over_budget]
