"""Tests for the session manager: issue, validate (sliding expiry), destroy, purge."""

import unittest
from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock

from sqlalchemy.exc import OperationalError

from bookcatalog.core.config import Settings
from bookcatalog.core.errors import StorageError
from bookcatalog.core.security import decode_session_token, encode_session_token
from bookcatalog.models import UserSession
from bookcatalog.schemas.auth import SessionIdentity
from bookcatalog.services.credentials import CredentialStore
from bookcatalog.services.sessions import SessionManager
from tests.support import make_session_factory


def _utc(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=UTC)


class SessionTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.db = make_session_factory()()
        self.settings = Settings(SESSION_TTL_MINUTES=60)
        self.user = CredentialStore(self.db).create_user("alice", "pw1")
        self.manager = SessionManager(self.db, self.settings)

    def tearDown(self) -> None:
        self.db.close()

    def _row(self, token: str) -> UserSession | None:
        self.db.expire_all()
        return self.db.get(UserSession, decode_session_token(token))


class TestIssueAndValidate(SessionTestCase):
    def test_validate_returns_issued_identity(self) -> None:
        token = self.manager.issue(self.user.id, "alice")
        self.assertEqual(
            self.manager.validate(token),
            SessionIdentity(user_id=self.user.id, username="alice"),
        )

    def test_each_login_gets_a_distinct_token(self) -> None:
        first = self.manager.issue(self.user.id, "alice")
        second = self.manager.issue(self.user.id, "alice")
        self.assertNotEqual(first, second)
        self.assertIsNotNone(self.manager.validate(first))
        self.assertIsNotNone(self.manager.validate(second))

    def test_missing_and_malformed_tokens_return_none(self) -> None:
        self.assertIsNone(self.manager.validate(None))
        self.assertIsNone(self.manager.validate(""))
        self.assertIsNone(self.manager.validate("garbage"))

    def test_signed_token_for_unknown_session_returns_none(self) -> None:
        self.assertIsNone(self.manager.validate(encode_session_token("no-such-session", 1)))

    def test_expired_session_returns_none_and_is_removed(self) -> None:
        token = self.manager.issue(self.user.id, "alice")
        row = self._row(token)
        row.expires_at = datetime.now(UTC) - timedelta(seconds=1)
        self.db.commit()

        self.assertIsNone(self.manager.validate(token))
        self.assertIsNone(self._row(token))

    def test_validate_slides_expiry_forward(self) -> None:
        token = self.manager.issue(self.user.id, "alice")
        row = self._row(token)
        row.expires_at = datetime.now(UTC) + timedelta(minutes=1)
        self.db.commit()

        self.assertIsNotNone(self.manager.validate(token))
        refreshed = _utc(self._row(token).expires_at)
        self.assertGreater(refreshed, datetime.now(UTC) + timedelta(minutes=59))


class TestDestroy(SessionTestCase):
    def test_destroyed_token_no_longer_validates(self) -> None:
        token = self.manager.issue(self.user.id, "alice")
        self.manager.destroy(token)
        self.assertIsNone(self.manager.validate(token))

    def test_destroy_is_idempotent(self) -> None:
        token = self.manager.issue(self.user.id, "alice")
        self.manager.destroy(token)
        self.manager.destroy(token)
        self.manager.destroy(None)
        self.manager.destroy("garbage")
        self.assertIsNone(self.manager.validate(token))

    def test_destroy_leaves_other_sessions_alone(self) -> None:
        kept = self.manager.issue(self.user.id, "alice")
        dropped = self.manager.issue(self.user.id, "alice")
        self.manager.destroy(dropped)
        self.assertIsNotNone(self.manager.validate(kept))


class TestPurgeExpired(SessionTestCase):
    def test_purge_deletes_only_expired(self) -> None:
        live = self.manager.issue(self.user.id, "alice")
        stale = self.manager.issue(self.user.id, "alice")
        row = self._row(stale)
        row.expires_at = datetime.now(UTC) - timedelta(hours=1)
        self.db.commit()

        self.assertEqual(self.manager.purge_expired(), 1)
        self.assertIsNone(self._row(stale))
        self.assertIsNotNone(self._row(live))

    def test_purge_with_nothing_expired_returns_zero(self) -> None:
        self.manager.issue(self.user.id, "alice")
        self.assertEqual(self.manager.purge_expired(), 0)


class TestInjectedSecret(SessionTestCase):
    def test_tokens_are_signed_with_the_managers_secret(self) -> None:
        other = SessionManager(self.db, Settings(SESSION_SECRET="another-secret"))
        token = other.issue(self.user.id, "alice")

        self.assertIsNotNone(decode_session_token(token, "another-secret"))
        self.assertIsNone(decode_session_token(token))
        self.assertIsNotNone(other.validate(token))
        self.assertIsNone(self.manager.validate(token))


class TestSessionStorageErrors(unittest.TestCase):
    def test_issue_commit_failure_raises_storage_error(self) -> None:
        db = MagicMock()
        db.commit.side_effect = OperationalError("INSERT", {}, Exception("down"))
        with self.assertRaises(StorageError):
            SessionManager(db, Settings()).issue(1, "alice")
        db.rollback.assert_called_once()

    def test_validate_lookup_failure_raises_storage_error(self) -> None:
        db = MagicMock()
        db.get.side_effect = OperationalError("SELECT", {}, Exception("down"))
        with self.assertRaises(StorageError):
            SessionManager(db, Settings()).validate(encode_session_token("sid", 1))

    def test_bad_token_never_touches_database(self) -> None:
        db = MagicMock()
        self.assertIsNone(SessionManager(db, Settings()).validate("garbage"))
        db.get.assert_not_called()


if __name__ == "__main__":
    unittest.main()
