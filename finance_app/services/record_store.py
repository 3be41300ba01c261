"""Record stores for transactions and budgets backed by SQLAlchemy sessions.

The stores own field validation of merged updates and the one-budget-per-category-per-month rule;
the unique constraint on the budgets table is the source of truth for the latter.
"""

import calendar
from datetime import date

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from finance_app.analytics.period import parse_month
from finance_app.core.db import BudgetRecord, TransactionRecord
from finance_app.core.errors import NotFoundError, RecordValidationError, UniquenessError
from finance_app.core.models import (
    BudgetCreate,
    BudgetUpdate,
    MonthlyStat,
    TransactionCreate,
    TransactionUpdate,
)
from finance_app.core.utils import get_logger

logger = get_logger("finance-tracker.store")


def month_bounds(month: str) -> tuple[date, date]:
    """First and last calendar day of a ``YYYY-MM`` month."""
    year, month_index = parse_month(month)
    last_day = calendar.monthrange(year, month_index + 1)[1]
    return date(year, month_index + 1, 1), date(year, month_index + 1, last_day)


def _merge(model: type[BaseModel], record: object, changes: BaseModel) -> BaseModel:
    """Apply a partial update on top of a record and revalidate the result."""
    current = {name: getattr(record, name) for name in model.model_fields}
    current.update(changes.model_dump(exclude_unset=True, exclude_none=True))
    try:
        return model.model_validate(current)
    except PydanticValidationError as exc:
        raise RecordValidationError(str(exc)) from exc


class TransactionStore:
    """Create, read, update and delete transactions."""

    def __init__(self, session: Session) -> None:
        """Initialize the store with a SQLAlchemy session."""
        self.session = session

    def list_all(self) -> list[TransactionRecord]:
        """All transactions, newest date first."""
        stmt = select(TransactionRecord).order_by(TransactionRecord.date.desc(), TransactionRecord.id.desc())
        return list(self.session.scalars(stmt))

    def list_by_month(self, month: str) -> list[TransactionRecord]:
        """Transactions dated within a ``YYYY-MM`` month, newest first."""
        start, end = month_bounds(month)
        stmt = (
            select(TransactionRecord)
            .where(TransactionRecord.date >= start, TransactionRecord.date <= end)
            .order_by(TransactionRecord.date.desc(), TransactionRecord.id.desc())
        )
        return list(self.session.scalars(stmt))

    def get(self, transaction_id: int) -> TransactionRecord:
        """Fetch a transaction or raise ``NotFoundError``."""
        record = self.session.get(TransactionRecord, transaction_id)
        if record is None:
            raise NotFoundError("Transaction", transaction_id)
        return record

    def create(self, data: TransactionCreate) -> TransactionRecord:
        """Persist a new transaction."""
        record = TransactionRecord(**data.model_dump())
        self.session.add(record)
        self.session.commit()
        self.session.refresh(record)
        logger.info(f"Created transaction {record.id}: {record.type} {record.amount} ({record.category})")
        return record

    def update(self, transaction_id: int, changes: TransactionUpdate) -> TransactionRecord:
        """Replace the supplied fields of a transaction."""
        record = self.get(transaction_id)
        merged = _merge(TransactionCreate, record, changes)
        for name, value in merged.model_dump().items():
            setattr(record, name, value)
        self.session.commit()
        self.session.refresh(record)
        logger.info(f"Updated transaction {transaction_id}")
        return record

    def delete(self, transaction_id: int) -> None:
        """Remove a transaction."""
        record = self.get(transaction_id)
        self.session.delete(record)
        self.session.commit()
        logger.info(f"Deleted transaction {transaction_id}")

    def monthly_stats(self, month: str) -> list[MonthlyStat]:
        """Expense totals and counts per category for one month, largest total first."""
        start, end = month_bounds(month)
        total = func.sum(TransactionRecord.amount).label("total")
        stmt = (
            select(TransactionRecord.category, total, func.count(TransactionRecord.id).label("count"))
            .where(
                TransactionRecord.type == "expense",
                TransactionRecord.date >= start,
                TransactionRecord.date <= end,
            )
            .group_by(TransactionRecord.category)
            .order_by(total.desc())
        )
        rows = self.session.execute(stmt)
        return [MonthlyStat(category=row.category, total=row.total, count=row.count) for row in rows]


class BudgetStore:
    """Create, read, update and delete budgets."""

    def __init__(self, session: Session) -> None:
        """Initialize the store with a SQLAlchemy session."""
        self.session = session

    def list_all(self) -> list[BudgetRecord]:
        """All budgets, latest month first, then by category."""
        stmt = select(BudgetRecord).order_by(BudgetRecord.month.desc(), BudgetRecord.category)
        return list(self.session.scalars(stmt))

    def list_by_month(self, month: str) -> list[BudgetRecord]:
        """Budgets for one ``YYYY-MM`` month, by category."""
        stmt = select(BudgetRecord).where(BudgetRecord.month == month).order_by(BudgetRecord.category)
        return list(self.session.scalars(stmt))

    def get(self, budget_id: int) -> BudgetRecord:
        """Fetch a budget or raise ``NotFoundError``."""
        record = self.session.get(BudgetRecord, budget_id)
        if record is None:
            raise NotFoundError("Budget", budget_id)
        return record

    def create(self, data: BudgetCreate) -> BudgetRecord:
        """Persist a new budget; a second budget for the same category and month is rejected."""
        record = BudgetRecord(**data.model_dump())
        self.session.add(record)
        self._commit(data.category, data.month)
        self.session.refresh(record)
        logger.info(f"Created budget {record.id}: {record.category} {record.month} = {record.amount}")
        return record

    def update(self, budget_id: int, changes: BudgetUpdate) -> BudgetRecord:
        """Replace the supplied fields of a budget."""
        record = self.get(budget_id)
        merged = _merge(BudgetCreate, record, changes)
        for name, value in merged.model_dump().items():
            setattr(record, name, value)
        self._commit(merged.category, merged.month)
        self.session.refresh(record)
        logger.info(f"Updated budget {budget_id}")
        return record

    def delete(self, budget_id: int) -> None:
        """Remove a budget."""
        record = self.get(budget_id)
        self.session.delete(record)
        self.session.commit()
        logger.info(f"Deleted budget {budget_id}")

    def _commit(self, category: str, month: str) -> None:
        """Commit pending changes, translating a unique-constraint failure into ``UniquenessError``."""
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            logger.warning(f"Rejected duplicate budget for {category} in {month}")
            raise UniquenessError(category, month) from exc
