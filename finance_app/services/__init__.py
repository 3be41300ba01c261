"""Services package: record stores and the reference category catalogue."""

from .category_catalog import DEFAULT_CATEGORIES, find_category, list_categories  # noqa: F401
from .record_store import BudgetStore, TransactionStore  # noqa: F401
