"""DB engine, session factory and ORM tables for the Personal Finance Tracker."""

from collections.abc import Iterator

from sqlalchemy import Column, Date, DateTime, Integer, Numeric, String, UniqueConstraint, create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from finance_app.core.utils import utcnow

Base = declarative_base()


class TransactionRecord(Base):
    """A persisted income or expense transaction."""

    __tablename__ = "transactions"
    id = Column(Integer, primary_key=True)
    amount = Column(Numeric(12, 2), nullable=False)
    description = Column(String(200), nullable=False)
    date = Column(Date, nullable=False, index=True)
    category = Column(String, nullable=False)
    type = Column(String(7), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)


class BudgetRecord(Base):
    """A persisted monthly spending limit for one category."""

    __tablename__ = "budgets"
    __table_args__ = (UniqueConstraint("category", "month", name="uq_budget_category_month"),)
    id = Column(Integer, primary_key=True)
    amount = Column(Numeric(12, 2), nullable=False)
    category = Column(String, nullable=False)
    month = Column(String(7), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)


def get_engine(url: str | None = None) -> Engine:
    """Create a SQLAlchemy engine using the configured database URL."""
    from finance_app.core.settings import get_settings

    url = url or get_settings().database_url
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, connect_args=connect_args)


engine = get_engine()
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind: Engine | None = None) -> None:
    """Create the transactions and budgets tables if they do not exist."""
    Base.metadata.create_all(bind or engine)


def get_db() -> Iterator[Session]:
    """Yield a SQLAlchemy session and close it once the request is done."""
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
