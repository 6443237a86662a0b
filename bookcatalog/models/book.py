"""ORM model for catalog books."""

from sqlalchemy import JSON, Column, DateTime, Integer, String, func

from bookcatalog.models.base import Base


class Book(Base):
    """
    A catalog entry. Only the title is a first-class column; any other
    fields submitted with the add form are kept as-is in ``details``.
    """

    __tablename__ = "books"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(1024), nullable=False, index=True)
    details = Column(JSON, nullable=False, default=dict)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        index=True,
    )
