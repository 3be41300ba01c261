"""Main entrypoint and application factory for the Personal Finance Tracker API.

This module initializes the FastAPI application, configures logging, creates the database tables, and exposes the Scalar API reference endpoint for interactive OpenAPI documentation. It also includes the main entrypoint for running the app with Uvicorn.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from scalar_fastapi import get_scalar_api_reference
from sqlalchemy.exc import OperationalError

from finance_app import __version__
from finance_app.api import analytics_router, router
from finance_app.core.db import init_db
from finance_app.core.settings import get_settings
from finance_app.core.utils import setup_logging

settings = get_settings()
logger = setup_logging(settings.log_file, settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Lifespan event handler to create the transactions and budgets tables."""
    _ = app  # Silence unused argument warning
    try:
        init_db()
    except OperationalError:
        logger.exception("Failed to create transactions or budgets table")
        raise
    logger.info(f"Database ready at {settings.database_url}")
    yield


app = FastAPI(
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    title="Personal Finance Tracker API",
    description="""
    The Personal Finance Tracker API stores income and expense transactions and monthly category budgets, and reports budget-vs-actual figures for a selected period.

    **Endpoints:**
    - `GET|POST /transactions`, `GET|PUT|DELETE /transactions/{{id}}`: Manage transactions.
    - `GET|POST /budgets`, `GET|PUT|DELETE /budgets/{{id}}`: Manage budgets (one per category and month).
    - `GET /categories`: The reference category list.
    - `GET /analytics/*`: Summary, category spend, monthly series and budget reconciliation for a period.
    - `GET /health`: Health check endpoint.
    - `GET /scalar`: Interactive Scalar OpenAPI documentation.
    """,
    version=__version__,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(router)
app.include_router(analytics_router)


@app.get("/scalar", include_in_schema=False)
async def scalar_docs() -> HTMLResponse:
    """Return Scalar API reference."""
    return get_scalar_api_reference(openapi_url=app.openapi_url, title=app.title)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host=settings.server_host, port=settings.server_port, reload=True)
