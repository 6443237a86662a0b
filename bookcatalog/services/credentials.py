"""Credential store: users and their password hashes."""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from bookcatalog.core.errors import ConflictError, StorageError
from bookcatalog.core.security import hash_password
from bookcatalog.models import User

logger = logging.getLogger(__name__)


class CredentialStore:
    """Persists username/password-hash pairs; uniqueness is enforced by the users index."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def create_user(self, username: str, password: str) -> User:
        """
        Hash the password and insert a new user.

        Raises ConflictError when the unique index on username rejects the
        insert, StorageError for any other database failure.
        """
        user = User(username=username, password_hash=hash_password(password))
        try:
            self.db.add(user)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise ConflictError("Username already exists.") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Failed to store user")
            raise StorageError("Could not store user.") from e
        self.db.refresh(user)
        return user

    def find_by_username(self, username: str) -> User | None:
        """Return the user with this username, or None."""
        try:
            return self.db.query(User).filter(User.username == username).first()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Failed to look up user")
            raise StorageError("Could not look up user.") from e
