"""Monthly income/expense series for the overview bar chart."""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from finance_app.analytics.period import MONTH_SHORT_NAMES, MONTHS_PER_YEAR, months_present
from finance_app.core.models import TransactionCreate


@dataclass(frozen=True)
class MonthlyTotals:
    """Income and expenses for one month."""

    month: str
    month_index: int
    income: Decimal
    expenses: Decimal


def monthly_series(
    transactions: Iterable[TransactionCreate], months: Iterable[int] | None = None
) -> list[MonthlyTotals]:
    """One point per requested month, ascending, zero-filled where there is no activity.

    ``transactions`` is expected to be filtered to a single year already; points are keyed by
    month index only. Without ``months`` the months present in the transactions are used.
    """
    transactions = list(transactions)
    months = months_present(transactions) if months is None else sorted(set(months))
    invalid = [m for m in months if not 0 <= m < MONTHS_PER_YEAR]
    if invalid:
        msg = f"Month indices must be between 0 and 11, got {invalid}"
        raise ValueError(msg)
    income = dict.fromkeys(range(MONTHS_PER_YEAR), Decimal(0))
    expenses = dict.fromkeys(range(MONTHS_PER_YEAR), Decimal(0))
    for transaction in transactions:
        month_index = transaction.date.month - 1
        if transaction.type == "income":
            income[month_index] += transaction.amount
        elif transaction.type == "expense":
            expenses[month_index] += transaction.amount
    return [
        MonthlyTotals(MONTH_SHORT_NAMES[m], m, income[m], expenses[m])
        for m in months
    ]
