"""
Review Ledger Service

Reviews are append-only: they can be listed per book and created, and
they disappear only when their book is deleted (see catalog.delete_book).
"""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from bookreview.exceptions import NotFoundError
from bookreview.models import Book, Review, User
from bookreview.schemas import ReviewCreate

logger = logging.getLogger(__name__)


def list_reviews_for_book(db: Session, book_id: int) -> list[Review]:
    """
    Return all reviews for book_id in insertion order.

    An unknown book id yields an empty list, not an error.
    """
    stmt = select(Review).where(Review.book_id == book_id).order_by(Review.id)
    return list(db.execute(stmt).scalars().all())


def add_review(db: Session, owner: User, book_id: int, review_data: ReviewCreate) -> Review:
    """
    Add a review by owner to an existing book.

    The rating range is already enforced by ReviewCreate.

    Raises:
        NotFoundError: If the book does not exist; nothing is persisted
    """
    if db.get(Book, book_id) is None:
        raise NotFoundError("Book not found")

    review = Review(
        book_id=book_id,
        user_id=owner.id,
        user_name=owner.name,
        rating=review_data.rating,
        review_text=review_data.review_text,
    )
    db.add(review)
    db.commit()
    db.refresh(review)

    logger.info(f"Review {review.id} ({review.rating} stars) added to book {book_id} by user {owner.id}")
    return review
