"""Pydantic models for the Personal Finance Tracker.

This module defines the request and response models used by the API: transactions, budgets, the
reference categories, and the analytics payloads built from the aggregation engine. Amounts are
carried as ``Decimal`` and serialized to JSON numbers.
"""

from datetime import date as Date  # noqa: N812
from datetime import datetime
from decimal import Decimal
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, StringConstraints

MONTH_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"

Money = Annotated[
    Decimal,
    Field(ge=0, max_digits=12, decimal_places=2),
    PlainSerializer(float, return_type=float, when_used="json"),
]
Total = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]
Description = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]
CategoryName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
Month = Annotated[str, StringConstraints(pattern=MONTH_PATTERN)]
TransactionType = Literal["expense", "income"]


class TransactionCreate(BaseModel):
    """Payload for creating a transaction."""

    amount: Money
    description: Description
    date: Date
    category: CategoryName
    type: TransactionType


class TransactionUpdate(BaseModel):
    """Partial payload for updating a transaction; omitted fields are left unchanged."""

    amount: Money | None = None
    description: Description | None = None
    date: Date | None = None
    category: CategoryName | None = None
    type: TransactionType | None = None


class Transaction(TransactionCreate):
    """A persisted transaction."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: datetime
    updated_at: datetime


class BudgetCreate(BaseModel):
    """Payload for creating a budget."""

    amount: Money
    category: CategoryName
    month: Month


class BudgetUpdate(BaseModel):
    """Partial payload for updating a budget; omitted fields are left unchanged."""

    amount: Money | None = None
    category: CategoryName | None = None
    month: Month | None = None


class Budget(BudgetCreate):
    """A persisted budget."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: datetime
    updated_at: datetime


class Category(BaseModel):
    """A reference spending category."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    color: str
    icon: str


class MonthlyStat(BaseModel):
    """Expense total and transaction count for one category within a month."""

    category: str
    total: Total
    count: int


class Summary(BaseModel):
    """Income, expense, balance and budget totals for a period."""

    total_income: Total
    total_expenses: Total
    balance: Total
    total_budget: Total


class Metrics(BaseModel):
    """Savings rate, transaction count and average monthly spend for a period."""

    savings_rate: Total
    transaction_count: int
    average_monthly_spend: Total


class CategorySpend(BaseModel):
    """Expense total for one category group."""

    label: str
    total: Total
    color: str


class MonthlyPoint(BaseModel):
    """Income and expense totals for one month of a time series."""

    month: str
    month_index: int
    income: Total
    expenses: Total


class BudgetStatus(BaseModel):
    """A budget reconciled against the matching expense spend."""

    budget_id: int | None
    category: str
    label: str
    color: str | None
    month: str
    amount: Total
    spent: Total
    remaining: Total
    over_budget: bool
    percent_used: float


class Message(BaseModel):
    """Plain confirmation message."""

    message: str
