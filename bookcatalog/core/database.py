"""Database engine, connection bounds and per-request session management."""

import logging
from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from bookcatalog.core.config import Settings, settings

logger = logging.getLogger(__name__)


def build_engine(app_settings: Settings) -> Engine:
    """
    Create the engine with bounded connect, pool and statement timeouts.

    SQLite gets a single shared connection (StaticPool) so an in-memory
    database is visible from every threadpool worker.
    """
    url = app_settings.DATABASE_URL
    if url.startswith("sqlite"):
        return create_engine(
            url,
            connect_args={
                "check_same_thread": False,
                "timeout": app_settings.DB_CONNECT_TIMEOUT_SEC,
            },
            poolclass=StaticPool,
            echo=app_settings.DEBUG,
        )

    connect_args: dict[str, Any] = {
        "connect_timeout": app_settings.DB_CONNECT_TIMEOUT_SEC,
    }
    if app_settings.DB_STATEMENT_TIMEOUT_MS:
        connect_args["options"] = (
            f"-c statement_timeout={app_settings.DB_STATEMENT_TIMEOUT_MS}"
        )
    return create_engine(
        url,
        connect_args=connect_args,
        pool_pre_ping=True,
        pool_timeout=app_settings.DB_POOL_TIMEOUT_SEC,
        echo=app_settings.DEBUG,
    )


engine = build_engine(settings)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Dependency that yields a DB session and closes it when done."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_db_connected(db: Session) -> bool:
    """Run a trivial query to verify the database is reachable."""
    try:
        db.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError:
        logger.warning("Database connectivity check failed", exc_info=True)
        return False
