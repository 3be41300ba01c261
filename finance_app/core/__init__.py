"""Core package: provides models, database helpers, settings, errors, and shared utilities."""

from .db import Base, BudgetRecord, TransactionRecord, get_db  # noqa: F401
from .errors import ConnectivityError, NotFoundError, RecordValidationError, UniquenessError  # noqa: F401
from .settings import Settings, get_settings  # noqa: F401
from .utils import get_logger, setup_logging  # noqa: F401
