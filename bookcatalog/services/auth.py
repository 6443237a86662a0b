"""Auth workflow: signup, login, logout and the session gate."""

import logging
from enum import Enum

from bookcatalog.core.errors import (
    ConflictError,
    InvalidCredentialsError,
    LoginRequired,
    StorageError,
)
from bookcatalog.core.security import dummy_password_hash, verify_password
from bookcatalog.schemas.auth import SessionIdentity
from bookcatalog.services.credentials import CredentialStore
from bookcatalog.services.sessions import SessionManager

logger = logging.getLogger(__name__)


class SignUpOutcome(str, Enum):
    CREATED = "created"
    CONFLICT = "conflict"
    FAILED = "failed"
    # Blank username or password; rendered like FAILED but as a client error.
    INVALID = "invalid"


class AuthWorkflow:
    """Orchestrates the credential store and the session manager."""

    def __init__(self, credentials: CredentialStore, sessions: SessionManager) -> None:
        self.credentials = credentials
        self.sessions = sessions

    def sign_up(self, username: str, password: str) -> SignUpOutcome:
        """Create the user. A duplicate username is an expected outcome, not a failure."""
        username = username.strip()
        if not username or not password:
            return SignUpOutcome.INVALID
        try:
            self.credentials.create_user(username, password)
        except ConflictError:
            logger.info("Signup rejected: username taken")
            return SignUpOutcome.CONFLICT
        except StorageError:
            return SignUpOutcome.FAILED
        logger.info("User signed up: username=%s", username)
        return SignUpOutcome.CREATED

    def log_in(self, username: str, password: str) -> str:
        """
        Verify credentials and issue a session; returns the session token.

        Raises InvalidCredentialsError for an unknown user and for a wrong
        password alike, so the response never reveals which one it was.
        Both paths run one bcrypt comparison.
        """
        username = username.strip()
        if not username or not password:
            logger.info("Login failed: blank credentials")
            raise InvalidCredentialsError("Invalid credentials.")
        user = self.credentials.find_by_username(username)
        if user is None:
            verify_password(password, dummy_password_hash())
            logger.info("Login failed")
            raise InvalidCredentialsError("Invalid credentials.")
        if not verify_password(password, user.password_hash):
            logger.info("Login failed")
            raise InvalidCredentialsError("Invalid credentials.")
        token = self.sessions.issue(user.id, user.username)
        logger.info("User logged in: user_id=%s", user.id)
        return token

    def require_session(self, token: str | None) -> SessionIdentity:
        """Return the session identity or raise LoginRequired."""
        identity = self.sessions.validate(token)
        if identity is None:
            raise LoginRequired()
        return identity

    def log_out(self, token: str | None) -> None:
        """Destroy the session. Never fails from the caller's point of view."""
        try:
            self.sessions.destroy(token)
        except StorageError:
            logger.warning("Logout could not delete the session; cookie is cleared anyway")
