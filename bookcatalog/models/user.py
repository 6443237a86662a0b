"""ORM model for application users (credential store)."""

from sqlalchemy import Column, DateTime, Integer, String, func

from bookcatalog.models.base import Base


class User(Base):
    """
    User account: a unique username and its bcrypt password hash.

    Created at signup; never updated or deleted by the web workflow.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
