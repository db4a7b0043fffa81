"""
Pydantic Schemas Package

Request/response models for the BookReview API.

Schemas are kept separate from SQLAlchemy models so the JSON contract
(camelCase keys, "_id") can differ from column names, and so password
hashes are never serialized.

Schema Naming Convention:
- XxxCreate: Fields required when creating a new record
- XxxResponse: Fields returned in API responses
"""

from bookreview.schemas.book import BookCreate, BookResponse
from bookreview.schemas.review import ReviewCreate, ReviewResponse
from bookreview.schemas.user import (
    AuthResponse,
    LoginRequest,
    MessageResponse,
    SignupRequest,
)

__all__ = [
    # Auth schemas
    "SignupRequest",
    "LoginRequest",
    "AuthResponse",
    "MessageResponse",
    # Book schemas
    "BookCreate",
    "BookResponse",
    # Review schemas
    "ReviewCreate",
    "ReviewResponse",
]
