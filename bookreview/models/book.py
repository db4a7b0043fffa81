"""
Book Model

The catalog entry a review belongs to.

Books carry a denormalized copy of the owner's display name
(added_by_name) so listings never need a join against users. Renaming a
user would not update it; users are immutable, so the copy never drifts.
"""

from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from bookreview.database import Base


class Genre(str, Enum):
    """Fixed list of genres a book can be filed under."""
    FICTION = "Fiction"
    NON_FICTION = "Non-Fiction"
    SCIENCE_FICTION = "Science Fiction"
    MYSTERY = "Mystery"
    ROMANCE = "Romance"
    THRILLER = "Thriller"
    BIOGRAPHY = "Biography"
    HISTORY = "History"
    SELF_HELP = "Self-Help"
    FANTASY = "Fantasy"


# Display order used by the client's genre selector
GENRES: list[str] = [genre.value for genre in Genre]


class Book(Base):
    """
    Book model representing catalog entries.

    Table: books

    Fields:
    - title, author, description: free text (required)
    - genre: one of Genre
    - year: publication year
    - added_by / added_by_name: owning user and their display name

    Example:
        book = Book(
            title="Dune",
            author="Frank Herbert",
            description="Desert planet epic.",
            genre=Genre.SCIENCE_FICTION.value,
            year=1965,
            added_by=user.id,
            added_by_name=user.name,
        )
    """

    __tablename__ = "books"

    # -------------------------------------------------------------------------
    # Primary Key
    # -------------------------------------------------------------------------
    id: Mapped[int] = mapped_column(primary_key=True)

    # -------------------------------------------------------------------------
    # Basic Fields
    # -------------------------------------------------------------------------
    title: Mapped[str] = mapped_column(
        String(500),
        index=True,
        nullable=False,
        comment="Book title"
    )

    author: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Author name as entered by the user"
    )

    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Book description or summary"
    )

    genre: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        comment="Genre name (see Genre enum)"
    )

    year: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Publication year"
    )

    # -------------------------------------------------------------------------
    # Ownership
    # -------------------------------------------------------------------------
    added_by: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id"),
        nullable=False,
        index=True,
        comment="User who added the book; only they may delete it"
    )

    added_by_name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Owner display name, copied at creation"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"Book(id={self.id}, title='{self.title}', added_by={self.added_by})"
