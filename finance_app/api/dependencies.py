"""FastAPI dependencies for DI (settings, DB session, record stores).

This module provides dependency injection helpers so the API endpoints can be tested against an
isolated database by overriding ``get_db``.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from finance_app.core.db import get_db
from finance_app.core.settings import get_settings  # noqa: F401
from finance_app.services.record_store import BudgetStore, TransactionStore


def get_transaction_store(session: Session = Depends(get_db)) -> TransactionStore:
    """Provide a TransactionStore bound to the request's session."""
    return TransactionStore(session)


def get_budget_store(session: Session = Depends(get_db)) -> BudgetStore:
    """Provide a BudgetStore bound to the request's session."""
    return BudgetStore(session)
