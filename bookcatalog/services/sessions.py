"""Session manager: issues, validates and destroys login sessions."""

import logging
import secrets
from datetime import UTC, datetime, timedelta

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from bookcatalog.core.config import Settings, get_settings
from bookcatalog.core.errors import StorageError
from bookcatalog.core.security import decode_session_token, encode_session_token
from bookcatalog.models import UserSession
from bookcatalog.schemas.auth import SessionIdentity

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    # SQLite returns naive datetimes even for timezone-aware columns.
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class SessionManager:
    """
    Server-side sessions keyed by a random id; the client holds a signed token
    naming that id. A token is live while its row exists and has not expired.
    """

    def __init__(self, db: Session, settings: Settings | None = None) -> None:
        self.db = db
        self.settings = settings or get_settings()

    @property
    def _secret(self) -> str:
        return self.settings.SESSION_SECRET.get_secret_value()

    @property
    def ttl(self) -> timedelta:
        return timedelta(minutes=self.settings.SESSION_TTL_MINUTES)

    def issue(self, user_id: int, username: str) -> str:
        """Create a session for the user and return the token for the cookie."""
        session_id = secrets.token_urlsafe(32)
        row = UserSession(
            id=session_id,
            user_id=user_id,
            username=username,
            expires_at=datetime.now(UTC) + self.ttl,
        )
        try:
            self.db.add(row)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Failed to store session")
            raise StorageError("Could not create session.") from e
        return encode_session_token(session_id, user_id, self._secret)

    def validate(self, token: str | None) -> SessionIdentity | None:
        """
        Return the identity bound to a live token, or None.

        Missing, malformed, tampered, unknown and expired tokens all yield None.
        A successful check slides the expiry forward by the session TTL.
        """
        if not token:
            return None
        session_id = decode_session_token(token, self._secret)
        if session_id is None:
            return None
        try:
            row = self.db.get(UserSession, session_id)
            if row is None:
                return None
            now = datetime.now(UTC)
            if _as_utc(row.expires_at) <= now:
                self.db.delete(row)
                self.db.commit()
                return None
            row.expires_at = now + self.ttl
            self.db.commit()
            return SessionIdentity(user_id=row.user_id, username=row.username)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Failed to validate session")
            raise StorageError("Could not validate session.") from e

    def destroy(self, token: str | None) -> None:
        """Invalidate the session named by the token. Unknown or bad tokens are ignored."""
        if not token:
            return
        session_id = decode_session_token(token, self._secret)
        if session_id is None:
            return
        try:
            self.db.query(UserSession).filter(UserSession.id == session_id).delete(
                synchronize_session=False
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Failed to delete session")
            raise StorageError("Could not delete session.") from e

    def purge_expired(self) -> int:
        """Delete every expired session. Idempotent: safe to run repeatedly."""
        now = datetime.now(UTC)
        try:
            deleted_count = (
                self.db.query(UserSession)
                .filter(UserSession.expires_at <= now)
                .delete(synchronize_session=False)
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StorageError("Could not purge sessions.") from e
        if deleted_count > 0:
            logger.info(
                "Session purge: cutoff=%s, sessions_deleted=%s",
                now.isoformat(),
                deleted_count,
            )
        return deleted_count
