"""Tests for settings validation."""

import unittest

from pydantic import ValidationError

from bookcatalog.core.config import DEFAULT_SESSION_SECRET, Settings


class TestSettings(unittest.TestCase):
    def test_sqlite_and_postgres_urls_accepted(self) -> None:
        self.assertEqual(Settings(DATABASE_URL="sqlite://").DATABASE_URL, "sqlite://")
        url = "postgresql+psycopg2://u:p@db:5432/books"
        self.assertEqual(Settings(DATABASE_URL=f"  {url} ").DATABASE_URL, url)

    def test_other_database_urls_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(DATABASE_URL="mongodb://localhost/books")
        with self.assertRaises(ValidationError):
            Settings(DATABASE_URL="   ")

    def test_default_secret_rejected_in_prod(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(APP_ENV="prod", SESSION_SECRET=DEFAULT_SESSION_SECRET)
        prod = Settings(APP_ENV="prod", SESSION_SECRET="a-real-secret")
        self.assertEqual(prod.SESSION_SECRET.get_secret_value(), "a-real-secret")

    def test_default_secret_allowed_in_dev(self) -> None:
        dev = Settings(APP_ENV="dev", SESSION_SECRET=DEFAULT_SESSION_SECRET)
        self.assertEqual(dev.SESSION_SECRET.get_secret_value(), DEFAULT_SESSION_SECRET)

    def test_session_ttl_bounds(self) -> None:
        self.assertEqual(Settings(SESSION_TTL_MINUTES=1440).SESSION_TTL_MINUTES, 1440)
        with self.assertRaises(ValidationError):
            Settings(SESSION_TTL_MINUTES=0)
        with self.assertRaises(ValidationError):
            Settings(SESSION_TTL_MINUTES=50000)

    def test_empty_cookie_name_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(SESSION_COOKIE_NAME=" ")

    def test_startup_db_requirement_defaults_off(self) -> None:
        self.assertFalse(Settings().DB_REQUIRED_ON_STARTUP)


if __name__ == "__main__":
    unittest.main()
