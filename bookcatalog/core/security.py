"""Password hashing and signed session tokens."""

import secrets
from datetime import UTC, datetime
from functools import lru_cache
from typing import Any

import bcrypt
import jwt

from bookcatalog.core.config import settings

# Bcrypt cost (rounds).
BCRYPT_ROUNDS = 10

SESSION_TOKEN_ALGORITHM = "HS256"


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; longer input is truncated the same way on verify.
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash (constant-time in bcrypt)."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def _secret(secret: str | None) -> str:
    return secret if secret is not None else settings.SESSION_SECRET.get_secret_value()


def encode_session_token(session_id: str, user_id: int, secret: str | None = None) -> str:
    """Sign a session id into the opaque token handed to the client."""
    payload: dict[str, Any] = {
        "sid": session_id,
        "sub": str(user_id),
        "iat": datetime.now(UTC),
    }
    return jwt.encode(payload, _secret(secret), algorithm=SESSION_TOKEN_ALGORITHM)


def decode_session_token(token: str, secret: str | None = None) -> str | None:
    """
    Verify the token signature and return the session id it names.
    Returns None for malformed or tampered tokens; expiry is tracked server-side.
    ``secret`` defaults to SESSION_SECRET from the process settings.
    """
    try:
        payload = jwt.decode(
            token,
            _secret(secret),
            algorithms=[SESSION_TOKEN_ALGORITHM],
        )
    except jwt.PyJWTError:
        return None
    sid = payload.get("sid")
    if not isinstance(sid, str) or not sid:
        return None
    return sid


@lru_cache
def dummy_password_hash() -> str:
    """A throwaway hash so a login for an unknown user still pays the bcrypt cost."""
    return hash_password(secrets.token_urlsafe(16))
