"""Shared pytest fixtures: an isolated in-memory database for every test."""

import os
from collections.abc import Iterator

# Configure the app before it is imported by any test module
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_FILE", "")

import pytest  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from finance_app.core.db import Base, get_db  # noqa: E402
from main import app  # noqa: E402


@pytest.fixture
def session_factory() -> Iterator[sessionmaker]:
    """Create a fresh in-memory database and return a session factory bound to it."""
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    Base.metadata.create_all(engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def session(session_factory: sessionmaker) -> Iterator[Session]:
    """Yield a session on the isolated database."""
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(autouse=True)
def isolated_db(session_factory: sessionmaker) -> Iterator[None]:
    """Route every API request of the test to the isolated database."""

    def override_get_db() -> Iterator[Session]:
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield
    app.dependency_overrides.clear()
