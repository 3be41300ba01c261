"""API package: provides FastAPI dependencies and route definitions for the application."""

from .analytics_routes import router as analytics_router  # noqa: F401
from .dependencies import get_budget_store, get_db, get_settings, get_transaction_store  # noqa: F401
from .routes import router  # noqa: F401
