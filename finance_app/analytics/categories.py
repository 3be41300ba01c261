"""Expense totals grouped by category.

Transactions reference categories by name only, so every lookup against the reference list
produces either ``Matched`` (a known category, with its colour) or ``Unmatched`` (the raw text the
transaction carried). Unmatched groups get a generated colour instead of being dropped.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from decimal import Decimal

from finance_app.core.models import Category, TransactionCreate

UNKNOWN_LABEL = "Unknown"


@dataclass(frozen=True)
class Matched:
    """A category name found in the reference list."""

    category: Category

    @property
    def label(self) -> str:
        """Display label of the known category."""
        return self.category.name


@dataclass(frozen=True)
class Unmatched:
    """A category name with no reference entry."""

    raw_label: str

    @property
    def label(self) -> str:
        """Display label: the raw text, or ``'Unknown'`` when it is blank."""
        return self.raw_label.strip() or UNKNOWN_LABEL


CategoryMatch = Matched | Unmatched


@dataclass(frozen=True)
class CategoryTotal:
    """One slice of the spending-by-category chart."""

    label: str
    total: Decimal
    color: str


def category_index(categories: Iterable[Category]) -> dict[str, Category]:
    """Index reference categories by name."""
    return {category.name: category for category in categories}


def match_category(name: str, index: Mapping[str, Category]) -> CategoryMatch:
    """Resolve a category name against the reference index."""
    category = index.get(name)
    if category is None:
        return Unmatched(name)
    return Matched(category)


def generated_color(position: int) -> str:
    """Colour for the n-th unmatched group."""
    return f"hsl({position * 60}, 70%, 50%)"


def spend_by_category(
    transactions: Iterable[TransactionCreate], categories: Iterable[Category]
) -> list[CategoryTotal]:
    """Sum expense amounts per category in order of first encounter.

    Groups whose total is zero are omitted. The group totals always add up to the total expenses
    of ``transactions``.
    """
    index = category_index(categories)
    totals: dict[str, Decimal] = {}
    labels: dict[str, str] = {}
    colors: dict[str, str] = {}
    unmatched_groups = 0
    for transaction in transactions:
        if transaction.type != "expense":
            continue
        key = transaction.category
        if key not in totals:
            match = match_category(key, index)
            if isinstance(match, Matched):
                colors[key] = match.category.color
            else:
                colors[key] = generated_color(unmatched_groups)
                unmatched_groups += 1
            labels[key] = match.label
            totals[key] = Decimal(0)
        totals[key] += transaction.amount
    return [CategoryTotal(labels[key], total, colors[key]) for key, total in totals.items() if total > 0]
