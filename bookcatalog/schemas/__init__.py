"""Pydantic schemas."""

from bookcatalog.schemas.auth import SessionIdentity
from bookcatalog.schemas.books import BookCreate
from bookcatalog.schemas.health import HealthResponse

__all__ = [
    "BookCreate",
    "HealthResponse",
    "SessionIdentity",
]
