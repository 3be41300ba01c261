"""In-memory snapshot of the record sets, as seen by a dashboard client.

The snapshot is only ever replaced wholesale once transactions, budgets and categories have all
been fetched. Every refresh takes a ticket; a result whose ticket is older than the snapshot
already applied is discarded, so a slow stale fetch can never overwrite a newer one. Local
mutations are applied only after the API has confirmed them.
"""

import threading
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from enum import StrEnum
from typing import Generic, TypeVar

from finance_app.analytics.period import PeriodSelection
from finance_app.client.api_client import FinanceApiClient
from finance_app.core.errors import ConnectivityError, FinanceAppError
from finance_app.core.models import (
    Budget,
    BudgetCreate,
    BudgetUpdate,
    Category,
    Transaction,
    TransactionCreate,
    TransactionUpdate,
)
from finance_app.core.utils import get_logger

logger = get_logger("finance-tracker.snapshot")

ViewT = TypeVar("ViewT")


class LoadState(StrEnum):
    """Lifecycle of the snapshot."""

    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


@dataclass(frozen=True)
class RecordSnapshot:
    """A complete, consistent copy of every record set."""

    transactions: tuple[Transaction, ...] = ()
    budgets: tuple[Budget, ...] = ()
    categories: tuple[Category, ...] = ()
    generation: int = 0


@dataclass(frozen=True)
class ViewState(Generic[ViewT]):
    """What a view should render: a loading indicator, an error screen, or the computed data."""

    status: LoadState
    data: ViewT | None = None
    error: str | None = None


@dataclass
class SnapshotStore:
    """Holds the current snapshot and applies fetches and confirmed mutations to it."""

    client: FinanceApiClient
    snapshot: RecordSnapshot = field(default_factory=RecordSnapshot)
    state: LoadState = LoadState.LOADING
    error: str | None = None
    _issued: int = field(default=0, init=False)
    _applied: int = field(default=0, init=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    def begin_refresh(self) -> int:
        """Take a ticket for a new fetch and enter the loading state."""
        with self._lock:
            self._issued += 1
            self.state = LoadState.LOADING
            return self._issued

    def refresh(self) -> RecordSnapshot:
        """Fetch every record set and replace the snapshot with the result."""
        ticket = self.begin_refresh()
        try:
            transactions = self.client.list_transactions()
            budgets = self.client.list_budgets()
            categories = self.client.list_categories()
        except FinanceAppError as exc:
            self.fail(ticket, exc)
            raise
        return self.apply(ticket, RecordSnapshot(tuple(transactions), tuple(budgets), tuple(categories)))

    def apply(self, ticket: int, snapshot: RecordSnapshot) -> RecordSnapshot:
        """Install a fetched snapshot unless a newer fetch has already been applied."""
        with self._lock:
            if ticket < self._applied:
                logger.info(f"Discarding stale snapshot {ticket}; snapshot {self._applied} is newer")
                return self.snapshot
            self._applied = ticket
            self.snapshot = replace(snapshot, generation=ticket)
            self.state = LoadState.READY
            self.error = None
            logger.info(
                f"Snapshot {ticket} loaded: {len(snapshot.transactions)} transactions, "
                f"{len(snapshot.budgets)} budgets, {len(snapshot.categories)} categories"
            )
            return self.snapshot

    def fail(self, ticket: int, exc: Exception) -> None:
        """Record a failed fetch; the previous snapshot is kept as is."""
        with self._lock:
            if ticket < self._applied:
                return
            # Older fetches still in flight must not mask this failure
            self._applied = max(self._applied, ticket)
            self.state = LoadState.ERROR
            self.error = str(exc)
            logger.error(f"Snapshot {ticket} failed: {exc}")

    def view(
        self, builder: Callable[[RecordSnapshot, PeriodSelection], ViewT], selection: PeriodSelection
    ) -> ViewState[ViewT]:
        """Run a view builder over the snapshot once it is complete."""
        if self.state is LoadState.READY:
            return ViewState(LoadState.READY, data=builder(self.snapshot, selection))
        return ViewState(self.state, error=self.error)

    def require_ready(self) -> RecordSnapshot:
        """Return the snapshot, or raise ``ConnectivityError`` if it is not usable."""
        if self.state is not LoadState.READY:
            msg = self.error or "Records are still loading"
            raise ConnectivityError(msg)
        return self.snapshot

    # Transactions

    def add_transaction(self, data: TransactionCreate) -> Transaction:
        """Create a transaction remotely, then prepend it locally."""
        created = self.client.create_transaction(data)
        self._replace(transactions=(created, *self.snapshot.transactions))
        return created

    def update_transaction(self, transaction_id: int, changes: TransactionUpdate) -> Transaction:
        """Update a transaction remotely, then swap it locally."""
        updated = self.client.update_transaction(transaction_id, changes)
        self._replace(
            transactions=tuple(updated if t.id == transaction_id else t for t in self.snapshot.transactions)
        )
        return updated

    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction remotely, then drop it locally."""
        self.client.delete_transaction(transaction_id)
        self._replace(transactions=tuple(t for t in self.snapshot.transactions if t.id != transaction_id))

    # Budgets

    def add_budget(self, data: BudgetCreate) -> Budget:
        """Create a budget remotely, then prepend it locally."""
        created = self.client.create_budget(data)
        self._replace(budgets=(created, *self.snapshot.budgets))
        return created

    def update_budget(self, budget_id: int, changes: BudgetUpdate) -> Budget:
        """Update a budget remotely, then swap it locally."""
        updated = self.client.update_budget(budget_id, changes)
        self._replace(budgets=tuple(updated if b.id == budget_id else b for b in self.snapshot.budgets))
        return updated

    def delete_budget(self, budget_id: int) -> None:
        """Delete a budget remotely, then drop it locally."""
        self.client.delete_budget(budget_id)
        self._replace(budgets=tuple(b for b in self.snapshot.budgets if b.id != budget_id))

    def _replace(self, **changes: tuple) -> None:
        with self._lock:
            self.snapshot = replace(self.snapshot, **changes)
