"""Point settings at an in-memory SQLite database before bookcatalog is imported."""

import os

os.environ["APP_ENV"] = "dev"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SESSION_SECRET"] = "test-session-secret"
os.environ.setdefault("SESSION_TTL_MINUTES", "1440")
