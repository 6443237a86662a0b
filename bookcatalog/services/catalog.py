"""Catalog store: list, search, add and delete books."""

import logging
from collections.abc import Mapping

import pydantic
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from bookcatalog.core.errors import NotFoundError, StorageError, ValidationError
from bookcatalog.models import Book
from bookcatalog.schemas.books import BookCreate

logger = logging.getLogger(__name__)

LIKE_ESCAPE = "\\"


def _escape_like(term: str) -> str:
    """Escape LIKE wildcards so the search text matches literally."""
    return (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


class CatalogStore:
    def __init__(self, db: Session) -> None:
        self.db = db

    def list_books(self, search: str | None = None) -> list[Book]:
        """Books newest first, optionally filtered by case-insensitive title substring."""
        term = (search or "").strip()
        try:
            query = self.db.query(Book)
            if term:
                query = query.filter(
                    Book.title.ilike(f"%{_escape_like(term)}%", escape=LIKE_ESCAPE)
                )
            return query.order_by(Book.created_at.desc(), Book.id.desc()).all()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Failed to list books")
            raise StorageError("Could not load books.") from e

    def add_book(self, fields: Mapping[str, str]) -> Book:
        """
        Insert a book from submitted form fields. ``title`` is required;
        every other non-empty field is stored in ``details``.
        """
        try:
            payload = BookCreate.model_validate(dict(fields))
        except pydantic.ValidationError as e:
            raise ValidationError("Error adding book.") from e
        book = Book(title=payload.title, details=payload.extra_fields())
        try:
            self.db.add(book)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Failed to store book")
            raise StorageError("Error adding book.") from e
        self.db.refresh(book)
        logger.info("Book added: id=%s", book.id)
        return book

    def delete_book(self, book_id: int | str) -> None:
        """
        Delete a book by id. Raises NotFoundError when no book has this id
        (including ids that are not numbers); callers treat that as done.
        """
        try:
            pk = int(book_id)
        except (TypeError, ValueError) as e:
            raise NotFoundError(f"No book with id {book_id!r}.") from e
        try:
            deleted = (
                self.db.query(Book)
                .filter(Book.id == pk)
                .delete(synchronize_session=False)
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Failed to delete book")
            raise StorageError("Could not delete book.") from e
        if not deleted:
            raise NotFoundError(f"No book with id {pk}.")
        logger.info("Book deleted: id=%s", pk)
