"""Period selection and filtering for transactions and budgets.

A ``PeriodSelection`` is a year plus an optional set of month indices (0 = January). An empty
month set means the whole year. When the selected year is the current calendar year, months after
the current month are never included, so future-dated planning entries are not counted as
realized activity.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import date
from typing import TypeVar

from finance_app.core.models import BudgetCreate, TransactionCreate

MONTH_SHORT_NAMES = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
ALL_MONTHS_LABEL = "All Months"
MONTHS_PER_YEAR = 12

RecordT = TypeVar("RecordT")


@dataclass(frozen=True)
class PeriodSelection:
    """The year and months the dashboard, analytics and budget views are showing."""

    year: int
    months: frozenset[int] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        """Normalize the month set and reject indices outside 0-11."""
        months = frozenset(self.months)
        invalid = sorted(m for m in months if not 0 <= m < MONTHS_PER_YEAR)
        if invalid:
            msg = f"Month indices must be between 0 and 11, got {invalid}"
            raise ValueError(msg)
        object.__setattr__(self, "months", months)

    @classmethod
    def current(cls, today: date | None = None, *, current_month_only: bool = False) -> "PeriodSelection":
        """Select the current year, optionally narrowed to the current month."""
        today = today or date.today()
        months = frozenset({today.month - 1}) if current_month_only else frozenset()
        return cls(today.year, months)

    def with_year(self, year: int) -> "PeriodSelection":
        """Switch to another year; the month selection is cleared."""
        return PeriodSelection(year)

    def toggle_month(self, month_index: int) -> "PeriodSelection":
        """Add the month to the selection, or remove it when already selected."""
        return PeriodSelection(self.year, self.months ^ {month_index})

    def all_months(self) -> "PeriodSelection":
        """Clear the month selection so the whole year is shown."""
        return PeriodSelection(self.year)

    @property
    def sorted_months(self) -> list[int]:
        """Selected month indices in ascending order."""
        return sorted(self.months)

    @property
    def label(self) -> str:
        """Human readable month selection, e.g. ``'Jan, Mar'`` or ``'All Months'``."""
        if not self.months:
            return ALL_MONTHS_LABEL
        return ", ".join(MONTH_SHORT_NAMES[m] for m in self.sorted_months)


def parse_month(month: str) -> tuple[int, int]:
    """Split a ``YYYY-MM`` string into a year and a 0-based month index."""
    year, month_number = month.split("-")
    return int(year), int(month_number) - 1


def format_month(year: int, month_index: int) -> str:
    """Build the ``YYYY-MM`` string for a year and 0-based month index."""
    return f"{year:04d}-{month_index + 1:02d}"


def transaction_period(transaction: TransactionCreate) -> tuple[int, int]:
    """Year and month index a transaction belongs to."""
    return transaction.date.year, transaction.date.month - 1


def budget_period(budget: BudgetCreate) -> tuple[int, int]:
    """Year and month index a budget applies to."""
    return parse_month(budget.month)


def in_period(year: int, month_index: int, selection: PeriodSelection, today: date | None = None) -> bool:
    """Whether a year/month pair falls inside the selection."""
    today = today or date.today()
    if year != selection.year:
        return False
    if selection.months and month_index not in selection.months:
        return False
    # Forward-looking months of the running year are not realized activity yet
    return not (year == today.year and month_index > today.month - 1)


def filter_records(
    records: Iterable[RecordT],
    selection: PeriodSelection,
    period_of: Callable[[RecordT], tuple[int, int]],
    today: date | None = None,
) -> list[RecordT]:
    """Keep the records whose period falls inside the selection, preserving their order."""
    today = today or date.today()
    return [record for record in records if in_period(*period_of(record), selection, today)]


def filter_transactions(
    transactions: Iterable[TransactionCreate], selection: PeriodSelection, today: date | None = None
) -> list[TransactionCreate]:
    """Transactions dated inside the selected period."""
    return filter_records(transactions, selection, transaction_period, today)


def filter_budgets(
    budgets: Iterable[BudgetCreate], selection: PeriodSelection, today: date | None = None
) -> list[BudgetCreate]:
    """Budgets whose month lies inside the selected period."""
    return filter_records(budgets, selection, budget_period, today)


def years_present(
    records: Iterable[RecordT], period_of: Callable[[RecordT], tuple[int, int]] = transaction_period
) -> list[int]:
    """Distinct years found in the records, ascending."""
    return sorted({period_of(record)[0] for record in records})


def months_present(
    records: Iterable[RecordT],
    year: int | None = None,
    period_of: Callable[[RecordT], tuple[int, int]] = transaction_period,
) -> list[int]:
    """Distinct month indices found in the records (optionally for one year), ascending."""
    months = set()
    for record in records:
        record_year, month_index = period_of(record)
        if year is None or record_year == year:
            months.add(month_index)
    return sorted(months)


def selected_month_keys(selection: PeriodSelection, available_months: Iterable[int]) -> list[str]:
    """``YYYY-MM`` strings covered by the selection.

    With no explicit month selection the months available in the data are used instead.
    """
    months = selection.sorted_months or sorted(set(available_months))
    return [format_month(selection.year, m) for m in months]
