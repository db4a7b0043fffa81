"""
Books Router

Catalog endpoints:
- GET    /books       list every book (public)
- POST   /books       add a book (authenticated)
- DELETE /books/{id}  delete an owned book and its reviews (authenticated)
"""

from fastapi import APIRouter, Request, status

from bookreview.config import get_settings
from bookreview.dependencies import CurrentUser, DbSession
from bookreview.schemas import BookCreate, BookResponse, MessageResponse
from bookreview.services import catalog
from bookreview.services.rate_limiter import limiter

settings = get_settings()

router = APIRouter(
    prefix="/books",
    tags=["Books"],
    responses={
        401: {"model": MessageResponse, "description": "Not authenticated or not the owner"},
    },
)


@router.get(
    "",
    response_model=list[BookResponse],
    summary="List all books",
    description="Get every book in the catalog. Filtering and pagination are done by clients.",
)
def list_books(db: DbSession) -> list[BookResponse]:
    """List all books."""
    return [BookResponse.model_validate(book) for book in catalog.list_books(db)]


@router.post(
    "",
    response_model=BookResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a book",
    description="Add a book owned by the authenticated user.",
)
@limiter.limit(settings.rate_limit_write)
def create_book(
    request: Request,
    book_data: BookCreate,
    db: DbSession,
    current_user: CurrentUser,
) -> BookResponse:
    """
    Create a new book.

    The owner ID and display name come from the token, never from the body.
    """
    book = catalog.add_book(db, current_user, book_data)
    return BookResponse.model_validate(book)


@router.delete(
    "/{book_id}",
    response_model=MessageResponse,
    summary="Delete a book",
    description="Delete a book you added, together with all of its reviews.",
    responses={404: {"model": MessageResponse, "description": "Book not found"}},
)
@limiter.limit(settings.rate_limit_write)
def delete_book(
    request: Request,
    book_id: int,
    db: DbSession,
    current_user: CurrentUser,
) -> MessageResponse:
    """
    Delete a book and cascade to its reviews.

    Raises:
        NotFoundError: 404 if the book doesn't exist
        UnauthorizedError: 401 if the caller is not the owner
    """
    catalog.delete_book(db, current_user, book_id)
    return MessageResponse(message="Book removed")
