"""
Review Model

Represents a user's star rating and text review of a book.

Business Rules:
- Rating must be 1-5
- Reviews are immutable once written
- Reviews are removed only when their book is deleted
"""

from datetime import UTC, datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column

from bookreview.database import Base


class Review(Base):
    """
    Review model for book reviews.

    Attributes:
        id: Primary key (increasing, so it also records insertion order)
        book_id: Foreign key to books table
        user_id: Foreign key to users table
        user_name: Reviewer display name, copied at creation
        rating: 1-5 star rating
        review_text: Review text content
        created_at: Server-assigned creation time
    """

    __tablename__ = "reviews"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    # Foreign keys
    book_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("books.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )
    user_name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Reviewer display name",
    )

    # Review content
    rating: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Rating from 1-5 stars",
    )
    review_text: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Review text content",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )

    __table_args__ = (
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_review_rating_range"),
    )

    def __repr__(self) -> str:
        return f"<Review(id={self.id}, book_id={self.book_id}, user_id={self.user_id}, rating={self.rating})>"
