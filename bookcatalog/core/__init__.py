"""Core configuration, database access, security helpers and error types."""

from bookcatalog.core.config import get_settings, settings
from bookcatalog.core.database import SessionLocal, get_db

__all__ = ["SessionLocal", "get_db", "get_settings", "settings"]
