"""
Book Catalog Service

List, create and delete books.

Deleting a book removes its reviews and the book in one transaction: both
DELETE statements run in the same session and are committed together, so
a failure between them rolls back both and never leaves orphaned reviews.
"""

import logging

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from bookreview.exceptions import NotFoundError, UnauthorizedError
from bookreview.models import Book, Review, User
from bookreview.schemas import BookCreate

logger = logging.getLogger(__name__)


def list_books(db: Session) -> list[Book]:
    """
    Return every book in insertion order.

    Search, genre filtering, sorting and pagination happen client-side
    over this full list.
    """
    stmt = select(Book).order_by(Book.id)
    return list(db.execute(stmt).scalars().all())


def get_book(db: Session, book_id: int) -> Book | None:
    """Get a book by ID, or None."""
    return db.get(Book, book_id)


def add_book(db: Session, owner: User, book_data: BookCreate) -> Book:
    """
    Add a book owned by owner.

    The owner's display name is copied onto the book (added_by_name).

    Returns:
        The created book
    """
    book = Book(
        title=book_data.title,
        author=book_data.author,
        description=book_data.description,
        genre=book_data.genre.value,
        year=book_data.year,
        added_by=owner.id,
        added_by_name=owner.name,
    )
    db.add(book)
    db.commit()
    db.refresh(book)

    logger.info(f"Book {book.id} '{book.title}' added by user {owner.id}")
    return book


def delete_book(db: Session, owner: User, book_id: int) -> None:
    """
    Delete a book and all of its reviews.

    Raises:
        NotFoundError: If no book has this ID
        UnauthorizedError: If owner did not add the book; the book and
            its reviews are left untouched
    """
    book = get_book(db, book_id)
    if book is None:
        raise NotFoundError("Book not found")

    if book.added_by != owner.id:
        logger.warning(f"User {owner.id} tried to delete book {book_id} owned by {book.added_by}")
        raise UnauthorizedError("User not authorized")

    try:
        result = db.execute(delete(Review).where(Review.book_id == book.id))
        db.delete(book)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(f"Book {book_id} deleted by user {owner.id} with {result.rowcount} review(s)")
