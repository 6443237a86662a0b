"""SQLAlchemy ORM models."""

from bookcatalog.models.base import Base
from bookcatalog.models.book import Book
from bookcatalog.models.user import User
from bookcatalog.models.user_session import UserSession

__all__ = ["Base", "Book", "User", "UserSession"]
