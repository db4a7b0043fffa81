"""
Domain Exceptions

Services raise these instead of HTTPException so they stay usable outside
a request (seed script, tests). The application registers one handler for
BookReviewError that renders {"message": ...} with the exception's status.

Taxonomy:
- ConflictError: the email is already registered
- UnauthorizedError: bad credentials, bad token, or not the owner
- NotFoundError: the referenced book does not exist
"""

from fastapi import status


class BookReviewError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    default_message: str = "Bad request"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ConflictError(BookReviewError):
    # Duplicate signups answer 400, which existing clients already handle
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "User already exists"


class UnauthorizedError(BookReviewError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authorized"


class NotFoundError(BookReviewError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"
