"""
SQLAlchemy Models Package

This package contains all database models for the BookReview API.

Model Relationships:
- User -> Book: One-to-Many through books.added_by (ownership)
- User -> Review: One-to-Many through reviews.user_id (authorship)
- Book -> Review: One-to-Many through reviews.book_id; a book's reviews are
  deleted together with the book

Ownership columns are only read for authorization checks, so no ORM
relationship() attributes are declared.

Import all models here so Alembic discovers them for migrations.
"""

from bookreview.models.user import User
from bookreview.models.book import GENRES, Book, Genre
from bookreview.models.review import Review

__all__ = [
    "User",
    "Book",
    "Genre",
    "GENRES",
    "Review",
]
