"""Domain errors raised by the record stores and the API client."""


class FinanceAppError(Exception):
    """Base class for all Personal Finance Tracker errors."""


class RecordValidationError(FinanceAppError):
    """A record is missing a field or a field is out of range."""


class NotFoundError(FinanceAppError):
    """An update or delete targeted a record id that does not exist."""

    def __init__(self, kind: str, record_id: int | str) -> None:
        """Initialize the error with the record kind and the missing id."""
        super().__init__(f"{kind} not found")
        self.kind = kind
        self.record_id = record_id


class UniquenessError(FinanceAppError):
    """A budget already exists for the same category and month."""

    def __init__(self, category: str | None, month: str | None, message: str | None = None) -> None:
        """Initialize the error with the conflicting category and month."""
        super().__init__(message or f"A budget for '{category}' in {month} already exists")
        self.category = category
        self.month = month


class ConnectivityError(FinanceAppError):
    """The transport layer could not be reached or returned an unexpected failure."""
