"""SQLAlchemy declarative Base shared by the catalog, user and session tables."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass
