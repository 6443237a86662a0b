"""Shared helpers: a fresh SQLite database per test and a TestClient wired to it."""

from collections.abc import Generator

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from bookcatalog.core.database import get_db
from bookcatalog.main import app
from bookcatalog.models import Base


def make_session_factory() -> sessionmaker:
    """Create an isolated in-memory database with all tables."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def make_client(session_factory: sessionmaker) -> TestClient:
    """TestClient whose get_db dependency yields sessions from session_factory."""

    def override_get_db() -> Generator[Session, None, None]:
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


def reset_overrides() -> None:
    app.dependency_overrides.clear()
