"""Typed errors raised by the stores and the auth workflow."""


class CatalogError(Exception):
    """Base class for recoverable, user-facing application errors."""

    def __init__(self, message: str = "") -> None:
        self.message = message or self.__class__.__doc__ or ""
        super().__init__(self.message)


class ConflictError(CatalogError):
    """Username already exists."""


class InvalidCredentialsError(CatalogError):
    """Invalid credentials."""


class StorageError(CatalogError):
    """The database is unavailable or rejected the write."""


class NotFoundError(CatalogError):
    """Record not found."""


class ValidationError(CatalogError):
    """The submitted data is incomplete."""


class LoginRequired(Exception):
    """Raised by the session gate; the app turns it into a redirect to /login."""
