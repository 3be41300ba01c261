"""Income, expense, balance and budget totals for a filtered period."""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from finance_app.analytics.period import MONTHS_PER_YEAR, PeriodSelection
from finance_app.core.models import BudgetCreate, TransactionCreate, TransactionType
from finance_app.core.utils import round_money

ZERO = Decimal(0)
HUNDRED = Decimal(100)


@dataclass(frozen=True)
class PeriodSummary:
    """The four headline totals of the dashboard."""

    total_income: Decimal
    total_expenses: Decimal
    balance: Decimal
    total_budget: Decimal


@dataclass(frozen=True)
class SpendingMetrics:
    """Secondary figures shown on the analytics view."""

    savings_rate: Decimal
    transaction_count: int
    average_monthly_spend: Decimal


def total_of_type(transactions: Iterable[TransactionCreate], kind: TransactionType) -> Decimal:
    """Sum the amounts of all transactions of one type."""
    return sum((t.amount for t in transactions if t.type == kind), ZERO)


def summarize(transactions: Iterable[TransactionCreate], budgets: Iterable[BudgetCreate] = ()) -> PeriodSummary:
    """Compute income, expenses, balance and total budget.

    Totals are accumulated as exact decimals; rounding is left to display time.
    """
    transactions = list(transactions)
    income = total_of_type(transactions, "income")
    expenses = total_of_type(transactions, "expense")
    total_budget = sum((b.amount for b in budgets), ZERO)
    return PeriodSummary(
        total_income=income,
        total_expenses=expenses,
        balance=income - expenses,
        total_budget=total_budget,
    )


def spending_metrics(transactions: Iterable[TransactionCreate], selection: PeriodSelection) -> SpendingMetrics:
    """Savings rate, transaction count and average monthly spend for the selected period."""
    transactions = list(transactions)
    summary = summarize(transactions)
    savings_rate = ZERO
    if summary.total_income > 0:
        savings_rate = (summary.balance / summary.total_income * HUNDRED).quantize(Decimal("0.1"))
    month_count = len(selection.months) or MONTHS_PER_YEAR
    average = round_money(summary.total_expenses / month_count) if transactions else ZERO
    return SpendingMetrics(
        savings_rate=savings_rate,
        transaction_count=len(transactions),
        average_monthly_spend=average,
    )
