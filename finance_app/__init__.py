"""Personal Finance Tracker: transactions, budgets and budget-vs-actual analytics."""

__version__ = "1.0.0"
